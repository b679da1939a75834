from __future__ import annotations

import math

from luvatrix_grid.errors import GridConfigurationError


NICE_STEP_BASES = (1.0, 2.0, 2.5, 5.0, 10.0)
LOCALE_FRACTION_DIGITS = 3


def order_of_magnitude(value: float) -> float:
    """Power of ten at or below `value`, e.g. 0.037 -> 0.01."""
    if not math.isfinite(value) or value <= 0:
        raise ValueError("order_of_magnitude requires a finite value > 0")
    order = 10.0 ** math.floor(math.log10(value))
    # log10 can land one ulp under an exact power of ten.
    if order * 10.0 <= value:
        order *= 10.0
    elif order > value:
        order /= 10.0
    return order


def nice_step(raw_step: float) -> float:
    if not math.isfinite(raw_step) or raw_step <= 0:
        raise ValueError("raw_step must be a finite value > 0")
    order = order_of_magnitude(raw_step)
    best = NICE_STEP_BASES[0] * order
    best_distance = abs(raw_step - best)
    for base in NICE_STEP_BASES[1:]:
        candidate = base * order
        distance = abs(raw_step - candidate)
        if distance < best_distance:
            best = candidate
            best_distance = distance
    return trim_float(best)


def trim_float(value: float, digits: int = 12) -> float:
    return float(f"{value:.{digits}g}")


def step_decimals(step: float) -> int:
    """Decimal places that hold every multiple of `step` (three digits below its order)."""
    if not math.isfinite(step) or step <= 0:
        raise ValueError("step must be a finite value > 0")
    return max(0, 3 - math.floor(math.log10(step)))


def spans_zero(low: float, high: float) -> bool:
    return low <= 0 <= high


def log_ratio(value: float, low: float, high: float) -> float:
    if spans_zero(low, high):
        raise GridConfigurationError("Cannot create logarithmic grid spanning over zero, including zero")
    # Negative-only ranges are mapped through their magnitudes.
    lg_low = math.log10(abs(low))
    lg_high = math.log10(abs(high))
    if lg_high == lg_low:
        return 0.0
    return (math.log10(abs(value)) - lg_low) / (lg_high - lg_low)


def linear_ratio(value: float, low: float, high: float) -> float:
    if high == low:
        return 0.0
    return (value - low) / (high - low)


def contains(value: float, low: float, high: float) -> bool:
    return low <= value <= high


def format_locale_number(value: float) -> str:
    """Render `value` the way an en-US locale would: grouped, at most 3 decimals."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "∞" if value > 0 else "-∞"
    out = f"{value:,.{LOCALE_FRACTION_DIGITS}f}"
    if "." in out:
        out = out.rstrip("0").rstrip(".")
    if out == "-0":
        out = "0"
    return out
