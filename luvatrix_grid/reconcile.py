from __future__ import annotations

import logging
import math
from typing import Any

from luvatrix_grid.config import AxisConfig, LinesGroup, Viewport
from luvatrix_grid.layout import axis_layout_for, label_layout_for, layout_for, value_offset
from luvatrix_grid.renderer import ElementRole, GridRenderer
from luvatrix_grid.scales import contains
from luvatrix_grid.ticks import (
    GridStats,
    TickRequest,
    generate_ticks,
    resolve_axis_titles,
    resolve_axis_values,
    resolve_labels,
    resolve_titles,
)


LOGGER = logging.getLogger(__name__)


def value_token(value: float) -> str:
    """Exact text for a tick value inside an identity key; distinct floats never share a token."""
    v = float(value)
    if v.is_integer():
        return str(int(v))
    return repr(v)


def element_key(role: ElementRole, group: LinesGroup, value: float, index: int, instance_id: int) -> str:
    log = "-log" if group.logarithmic else ""
    return f"grid-{role}-{group.orientation_code}{log}-{value_token(value)}-{index}-{instance_id}"


def axis_key(group: LinesGroup, index: int, instance_id: int) -> str:
    log = "-log" if group.logarithmic else ""
    return f"grid-axis-{group.orientation_code}{log}-{index}-{instance_id}"


def _text(value: Any) -> str | None:
    return None if value is None else str(value)


def _at(items: list[Any], i: int) -> Any:
    return items[i] if i < len(items) else None


class GridReconciler:
    """Keeps one overlay's element pool in sync with the computed ticks.

    Elements are looked up by identity key, created on first need and only ever
    hidden afterwards; nothing is destroyed during an update.
    """

    def __init__(self, renderer: GridRenderer, instance_id: int) -> None:
        self.renderer = renderer
        self.instance_id = instance_id
        self.created_count = 0
        self._pool: dict[str, tuple[ElementRole, Any]] = {}

    def __len__(self) -> int:
        return len(self._pool)

    def _lookup(self, key: str, role: ElementRole) -> Any | None:
        entry = self._pool.get(key)
        if entry is not None:
            return entry[1]
        handle = self.renderer.find_element(key)
        if handle is not None:
            self._pool[key] = (role, handle)
        return handle

    def _create(self, role: ElementRole, key: str, attributes: dict[str, Any]) -> Any:
        handle = self.renderer.create_element(role, key, attributes)
        self._pool[key] = (role, handle)
        self.created_count += 1
        LOGGER.debug("created grid %s element %s", role, key)
        return handle

    def hide_all(self) -> None:
        for _, handle in self._pool.values():
            self.renderer.set_visible(handle, False)

    def reconcile_lines(self, index: int, group: LinesGroup, viewport: Viewport, stats: GridStats) -> None:
        stats.lines = group
        stats.low = group.low
        stats.high = group.high

        values = generate_ticks(TickRequest.for_group(group, viewport), stats)
        stats.values = values
        titles = resolve_titles(group.titles, values, stats)
        stats.titles = titles

        offsets = [0.0] * len(values)
        # Painted from the highest value down, matching the legacy stacking order.
        for i in reversed(range(len(values))):
            value = values[i]
            title = _text(_at(titles, i))
            key = element_key("line", group, value, index, self.instance_id)
            handle = self._lookup(key, "line")
            if handle is None:
                markers = []
                if value == group.low:
                    markers.append("min")
                if value == group.high:
                    markers.append("max")
                handle = self._create(
                    "line",
                    key,
                    {
                        "orientation": group.orientation,
                        "value": value,
                        "title": title,
                        "markers": tuple(markers),
                    },
                )
            offset = value_offset(value, group.low, group.high, inverted=group.inverted, logarithmic=group.logarithmic)
            offsets[i] = offset
            self.renderer.set_layout(handle, layout_for(group.orientation, offset, viewport, style=group.style, title=title))
            self.renderer.set_visible(handle, True)
        stats.offsets = offsets

    def reconcile_axis(
        self,
        index: int,
        group: LinesGroup,
        axis: AxisConfig | None,
        viewport: Viewport,
        stats: GridStats,
    ) -> None:
        key = axis_key(group, index, self.instance_id)
        axis_handle = self._lookup(key, "axis")
        if axis is None:
            if axis_handle is not None:
                self.renderer.set_visible(axis_handle, False)
            return

        stats.axis = axis
        axis_values = resolve_axis_values(axis, stats.values, stats)
        stats.axis_values = axis_values
        axis_titles = resolve_axis_titles(axis, axis_values, stats.values, stats.titles, stats)
        stats.axis_titles = axis_titles
        labels = resolve_labels(axis, axis_values, axis_titles, stats)
        stats.labels = labels

        if axis_handle is None:
            axis_handle = self._create(
                "axis",
                key,
                {"orientation": group.orientation, "name": axis.name, "title": axis.name},
            )
        # The container follows the viewport; only its labels keep their first placement.
        self.renderer.set_layout(axis_handle, axis_layout_for(group.orientation, viewport, title=axis.name))
        self.renderer.set_visible(axis_handle, True)

        for i, value in enumerate(axis_values):
            label = _at(labels, i)
            if value is None or label is None:
                continue
            label_key = element_key("label", group, value, index, self.instance_id)
            handle = self._lookup(label_key, "label")
            if handle is None:
                title = _text(_at(axis_titles, i))
                handle = self._create(
                    "label",
                    label_key,
                    {
                        "orientation": group.orientation,
                        "value": value,
                        "title": title,
                        "for": element_key("line", group, value, index, self.instance_id),
                    },
                )
                # Labels keep their first position and text; later passes only toggle visibility.
                offset = self._label_offset(value, group)
                if offset is not None:
                    self.renderer.set_layout(handle, label_layout_for(group.orientation, offset, viewport, title=title))
                self.renderer.set_text(handle, str(label))
            self.renderer.set_visible(handle, contains(value, group.low, group.high))

    @staticmethod
    def _label_offset(value: float, group: LinesGroup) -> float | None:
        if group.logarithmic and (value == 0 or math.copysign(1.0, value) != math.copysign(1.0, group.low)):
            return None
        return value_offset(value, group.low, group.high, inverted=group.inverted, logarithmic=group.logarithmic)
