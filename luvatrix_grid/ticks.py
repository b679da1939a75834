from __future__ import annotations

from dataclasses import dataclass, field
import math
from typing import Any

from luvatrix_grid.config import COMPUTED, AxisConfig, Computed, Explicit, Generator, LinesGroup, Orientation, ValueSource, Viewport
from luvatrix_grid.errors import GridConfigurationError
from luvatrix_grid.scales import format_locale_number, nice_step, spans_zero, step_decimals, trim_float


PIXELS_PER_STEP = 50.0
LOG_BASE_SETS: tuple[tuple[int, ...], ...] = (
    (1, 2, 3, 4, 5, 6, 7, 8, 9),
    (1, 2, 5),
    (1,),
)


@dataclass
class GridStats:
    """Per-group context handed to value/title/label generator hooks."""

    index: int
    instance_id: int
    low: float = 0.0
    high: float = 0.0
    lines: LinesGroup | None = None
    values: list[float] = field(default_factory=list)
    titles: list[Any] = field(default_factory=list)
    offsets: list[float] = field(default_factory=list)
    axis: AxisConfig | None = None
    axis_values: list[Any] = field(default_factory=list)
    axis_titles: list[Any] = field(default_factory=list)
    labels: list[Any] = field(default_factory=list)


@dataclass(frozen=True)
class TickRequest:
    low: float
    high: float
    inverted: bool
    logarithmic: bool
    orientation: Orientation
    perpendicular_extent_px: float
    values: ValueSource = COMPUTED

    @classmethod
    def for_group(cls, group: LinesGroup, viewport: Viewport) -> "TickRequest":
        return cls(
            low=group.low,
            high=group.high,
            inverted=group.inverted,
            logarithmic=group.logarithmic,
            orientation=group.orientation,
            perpendicular_extent_px=perpendicular_extent(group.orientation, viewport),
            values=group.values,
        )


def perpendicular_extent(orientation: Orientation, viewport: Viewport) -> float:
    if orientation == "horizontal":
        return viewport.width
    return viewport.height


def generate_ticks(request: TickRequest, stats: GridStats | None = None) -> list[float]:
    """Ascending tick values for one lines group."""

    source = request.values
    if isinstance(source, Explicit):
        return [v for v in source.items if v is not None]

    candidates = candidate_ticks(request)
    if isinstance(source, Generator):
        mapped = (source.fn(v, i, stats) for i, v in enumerate(candidates))
        return [v for v in mapped if v is not None]
    return candidates


def candidate_ticks(request: TickRequest) -> list[float]:
    low, high = request.low, request.high
    intersteps = request.perpendicular_extent_px / PIXELS_PER_STEP
    if request.logarithmic and spans_zero(low, high):
        raise GridConfigurationError("Cannot create logarithmic grid spanning over zero, including zero")
    if intersteps < 1:
        return [low, high]
    if low == high:
        return [low]
    if request.logarithmic:
        return _log_ticks(low, high, max_count=math.floor(intersteps))
    return _linear_ticks(low, high, math.floor(intersteps))


def _linear_ticks(low: float, high: float, steps: int) -> list[float]:
    step = nice_step((high - low) / steps)
    decimals = step_decimals(step)
    start = step * round(low / step)
    out: list[float] = []
    k = 0
    while True:
        value = round(start + k * step, decimals) + 0.0
        if value > high:
            break
        if value >= low:
            out.append(value)
        k += 1
    return out


def _log_ticks(low: float, high: float, *, max_count: int) -> list[float]:
    negative = high < 0
    lo, hi = (abs(high), abs(low)) if negative else (low, high)
    first_decade = math.floor(math.log10(lo))
    last_decade = math.floor(math.log10(hi))

    chosen: list[float] = []
    for bases in LOG_BASE_SETS:
        chosen = _decade_multiples(lo, hi, first_decade, last_decade, bases)
        if len(chosen) <= max_count:
            break

    if not chosen or chosen[0] != lo:
        chosen.insert(0, lo)
    if chosen[-1] != hi:
        chosen.append(hi)
    if negative:
        return sorted(-v for v in chosen)
    return chosen


def _decade_multiples(lo: float, hi: float, first: int, last: int, bases: tuple[int, ...]) -> list[float]:
    out: list[float] = []
    for decade in range(first, last + 1):
        for base in bases:
            value = trim_float(base * 10.0**decade)
            if lo <= value <= hi:
                out.append(value)
    return out


def resolve_titles(source: ValueSource, values: list[Any], stats: GridStats | None = None) -> list[Any]:
    if isinstance(source, Generator):
        return [source.fn(v, i, stats) for i, v in enumerate(values)]
    if isinstance(source, Explicit):
        return list(source.items)
    return [format_locale_number(v) for v in values]


def resolve_axis_values(axis: AxisConfig, values: list[float], stats: GridStats | None = None) -> list[Any]:
    source = axis.values
    if isinstance(source, Explicit):
        return list(source.items)
    if isinstance(source, Generator):
        return [source.fn(v, i, stats) for i, v in enumerate(values)]
    return values


def resolve_axis_titles(
    axis: AxisConfig,
    axis_values: list[Any],
    values: list[float],
    titles: list[Any],
    stats: GridStats | None = None,
) -> list[Any]:
    source = axis.titles
    if isinstance(source, Computed):
        if axis_values is values:
            return titles
        return [None if v is None else format_locale_number(v) for v in axis_values]
    return resolve_titles(source, axis_values, stats)


def resolve_labels(axis: AxisConfig, axis_values: list[Any], axis_titles: list[Any], stats: GridStats | None = None) -> list[Any]:
    source = axis.labels
    if isinstance(source, Generator):
        return [source.fn(v, i, stats) for i, v in enumerate(axis_values)]
    if isinstance(source, Explicit):
        return list(source.items)
    return axis_titles
