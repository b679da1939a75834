from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Literal, Protocol

from luvatrix_grid.layout import LayoutDirective


ElementRole = Literal["line", "label", "axis"]


class GridRenderer(Protocol):
    """Backend-agnostic visual element tree used by the reconciler.

    Handles are opaque to the reconciler; it only passes them back to the
    renderer that produced them.
    """

    def find_element(self, key: str) -> Any | None:
        ...

    def create_element(self, role: ElementRole, key: str, attributes: Mapping[str, Any]) -> Any:
        ...

    def set_layout(self, handle: Any, layout: LayoutDirective) -> None:
        ...

    def set_visible(self, handle: Any, visible: bool) -> None:
        ...

    def set_text(self, handle: Any, text: str) -> None:
        ...


@dataclass
class GridElement:
    element_id: str
    role: ElementRole
    attributes: dict[str, Any] = field(default_factory=dict)
    layout: LayoutDirective | None = None
    visible: bool = True
    text: str | None = None

    @property
    def markers(self) -> tuple[str, ...]:
        return tuple(self.attributes.get("markers", ()))


class ElementTreeRenderer:
    """In-memory renderer keeping elements in insertion (paint) order."""

    def __init__(self) -> None:
        self._elements: dict[str, GridElement] = {}
        self.created_count = 0

    def find_element(self, key: str) -> GridElement | None:
        return self._elements.get(key)

    def create_element(self, role: ElementRole, key: str, attributes: Mapping[str, Any]) -> GridElement:
        if key in self._elements:
            raise ValueError(f"element `{key}` already exists")
        element = GridElement(element_id=key, role=role, attributes=dict(attributes))
        self._elements[key] = element
        self.created_count += 1
        return element

    def set_layout(self, handle: GridElement, layout: LayoutDirective) -> None:
        handle.layout = layout

    def set_visible(self, handle: GridElement, visible: bool) -> None:
        handle.visible = visible

    def set_text(self, handle: GridElement, text: str) -> None:
        handle.text = text

    def elements(self, role: ElementRole | None = None) -> list[GridElement]:
        return [e for e in self._elements.values() if role is None or e.role == role]

    def visible_elements(self, role: ElementRole | None = None) -> list[GridElement]:
        return [e for e in self.elements(role) if e.visible]

    def __len__(self) -> int:
        return len(self._elements)
