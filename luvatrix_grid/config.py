from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass, field, fields, replace
import math
from typing import Any, Literal, TypeAlias, Union

from luvatrix_grid.errors import GridConfigurationError
from luvatrix_grid.scales import spans_zero


Orientation = Literal["horizontal", "vertical", "radial", "angular"]

ORIENTATION_CODES: dict[str, str] = {
    "horizontal": "x",
    "vertical": "y",
    "radial": "r",
    "angular": "a",
}
_ORIENTATION_ALIASES = {code: name for name, code in ORIENTATION_CODES.items()}


def normalize_orientation(raw: str) -> Orientation:
    """Accept either the full orientation name or its one-letter code."""

    if not isinstance(raw, str):
        raise GridConfigurationError(f"orientation must be a string, got {type(raw).__name__}")
    key = raw.strip().lower()
    if key in ORIENTATION_CODES:
        return key  # type: ignore[return-value]
    if key in _ORIENTATION_ALIASES:
        return _ORIENTATION_ALIASES[key]  # type: ignore[return-value]
    raise GridConfigurationError(f"unknown orientation: {raw!r}")


@dataclass(frozen=True)
class Computed:
    """Derive the sequence automatically."""


@dataclass(frozen=True)
class Explicit:
    items: tuple[Any, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "items", tuple(self.items))


@dataclass(frozen=True)
class Generator:
    """Per-item hook called as `fn(value, index, stats)`; a `None` result drops the item."""

    fn: Callable[[Any, int, Any], Any]


ValueSource: TypeAlias = Union[Computed, Explicit, Generator]
COMPUTED = Computed()


def coerce_source(raw: Any, *, field_name: str) -> ValueSource:
    if raw is None:
        return COMPUTED
    if isinstance(raw, (Computed, Explicit, Generator)):
        return raw
    if callable(raw):
        return Generator(raw)
    if isinstance(raw, (str, bytes)) or not isinstance(raw, Iterable):
        raise GridConfigurationError(f"`{field_name}` must be a sequence, a callable or None")
    return Explicit(tuple(raw))


def _coerce_bound(value: Any, name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise GridConfigurationError(f"`{name}` must be a number")
    out = float(value)
    if not math.isfinite(out):
        raise GridConfigurationError(f"`{name}` must be finite")
    return out


@dataclass(frozen=True)
class LinesGroup:
    """One set of ruled lines along one orientation."""

    orientation: Orientation = "horizontal"
    logarithmic: bool = False
    min: float = 0.0
    max: float = 100.0
    values: ValueSource = COMPUTED
    titles: ValueSource = COMPUTED
    style: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "orientation", normalize_orientation(self.orientation))
        object.__setattr__(self, "logarithmic", bool(self.logarithmic))
        object.__setattr__(self, "min", _coerce_bound(self.min, "min"))
        object.__setattr__(self, "max", _coerce_bound(self.max, "max"))
        object.__setattr__(self, "values", coerce_source(self.values, field_name="values"))
        object.__setattr__(self, "titles", coerce_source(self.titles, field_name="titles"))
        if not isinstance(self.style, Mapping):
            raise GridConfigurationError("`style` must be a mapping")
        object.__setattr__(self, "style", dict(self.style))
        if self.logarithmic and spans_zero(self.low, self.high):
            raise GridConfigurationError("Cannot create logarithmic grid spanning over zero, including zero")

    @property
    def low(self) -> float:
        return self.min if self.min <= self.max else self.max

    @property
    def high(self) -> float:
        return self.max if self.min <= self.max else self.min

    @property
    def inverted(self) -> bool:
        return self.min > self.max

    @property
    def orientation_code(self) -> str:
        return ORIENTATION_CODES[self.orientation]


@dataclass(frozen=True)
class AxisConfig:
    """Value-to-label mapping drawn alongside the lines group with the same index."""

    name: str = ""
    values: ValueSource = COMPUTED
    titles: ValueSource = COMPUTED
    labels: ValueSource = COMPUTED

    def __post_init__(self) -> None:
        object.__setattr__(self, "name", "" if self.name is None else str(self.name))
        object.__setattr__(self, "values", coerce_source(self.values, field_name="values"))
        object.__setattr__(self, "titles", coerce_source(self.titles, field_name="titles"))
        object.__setattr__(self, "labels", coerce_source(self.labels, field_name="labels"))


_LINES_FIELDS = frozenset(f.name for f in fields(LinesGroup))
_AXIS_FIELDS = frozenset(f.name for f in fields(AxisConfig))

LinesOverride: TypeAlias = LinesGroup | Mapping[str, Any] | None
AxisOverride: TypeAlias = AxisConfig | Mapping[str, Any] | None


def _reject_unknown(override: Mapping[str, Any], allowed: frozenset[str], kind: str) -> None:
    unknown = sorted(str(k) for k in override if k not in allowed)
    if unknown:
        raise GridConfigurationError(f"Unknown {kind} option(s): {', '.join(unknown)}")


def merge_lines_group(current: LinesGroup | None, override: LinesOverride) -> LinesGroup | None:
    """Apply a partial override: `style` merges key-by-key, every other field replaces."""

    if override is None:
        return None
    if isinstance(override, LinesGroup):
        return override
    if not isinstance(override, Mapping):
        raise GridConfigurationError("lines entries must be LinesGroup, mapping or None")
    _reject_unknown(override, _LINES_FIELDS, "lines")
    base = current if current is not None else LinesGroup()
    changes = dict(override)
    if "style" in changes:
        extra = changes["style"] or {}
        if not isinstance(extra, Mapping):
            raise GridConfigurationError("`style` must be a mapping")
        style = dict(base.style)
        style.update(extra)
        changes["style"] = style
    return replace(base, **changes)


def merge_axis(current: AxisConfig | None, override: AxisOverride) -> AxisConfig | None:
    if override is None:
        return None
    if isinstance(override, AxisConfig):
        return override
    if not isinstance(override, Mapping):
        raise GridConfigurationError("axes entries must be AxisConfig, mapping or None")
    _reject_unknown(override, _AXIS_FIELDS, "axis")
    base = current if current is not None else AxisConfig()
    return replace(base, **dict(override))


@dataclass(frozen=True)
class Viewport:
    x: float
    y: float
    width: float
    height: float

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise GridConfigurationError("viewport width/height must be >= 0")

    @property
    def center(self) -> tuple[float, float]:
        return (self.width / 2.0, self.height / 2.0)

    @property
    def min_side(self) -> float:
        return min(self.width, self.height)


ViewportRect: TypeAlias = Sequence[float | int | str]
ViewportSpec: TypeAlias = ViewportRect | Callable[[float, float], ViewportRect] | Viewport | None


def parse_length(value: float | int | str, reference: float) -> float:
    """Resolve a number, `"12px"`, `"12"` or `"50%"` (of `reference`) to pixels."""

    if isinstance(value, bool):
        raise GridConfigurationError(f"invalid length: {value!r}")
    if isinstance(value, (int, float)):
        return float(value)
    if not isinstance(value, str):
        raise GridConfigurationError(f"invalid length: {value!r}")
    raw = value.strip()
    try:
        if raw.endswith("%"):
            return float(raw[:-1]) * reference / 100.0
        if raw.endswith("px"):
            raw = raw[:-2]
        return float(raw)
    except ValueError as exc:
        raise GridConfigurationError(f"invalid length: {value!r}") from exc


def resolve_viewport(spec: ViewportSpec, container_width: float, container_height: float) -> Viewport:
    if callable(spec) and not isinstance(spec, Viewport):
        spec = spec(container_width, container_height)
    if spec is None:
        return Viewport(0.0, 0.0, float(container_width), float(container_height))
    if isinstance(spec, Viewport):
        return spec
    if isinstance(spec, (str, bytes)) or not isinstance(spec, Sequence) or len(spec) != 4:
        raise GridConfigurationError("viewport must be a [x, y, width, height] sequence")
    x, y, w, h = spec
    return Viewport(
        x=parse_length(x, container_width),
        y=parse_length(y, container_height),
        width=parse_length(w, container_width),
        height=parse_length(h, container_height),
    )
