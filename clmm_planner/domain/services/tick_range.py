from __future__ import annotations

from typing import Literal

from clmm_planner.domain.entities.pool import TickRange
from clmm_planner.domain.exceptions import InvalidRangeError


MIN_TICK = -443636
MAX_TICK = 443636
DEFAULT_RANGE_WIDTH_SPACINGS = 50

RangePreset = Literal["tight", "medium", "wide", "full"]

# Half-widths in ticks around the current tick.
PRESET_HALF_WIDTHS: dict[str, int] = {
    "tight": 1000,
    "medium": 5000,
    "wide": 20000,
}


def align_tick_floor(tick: int, tick_spacing: int) -> int:
    if tick_spacing <= 0:
        raise InvalidRangeError("tick_spacing must be positive.")
    return (tick // tick_spacing) * tick_spacing


def align_tick_ceil(tick: int, tick_spacing: int) -> int:
    if tick_spacing <= 0:
        raise InvalidRangeError("tick_spacing must be positive.")
    return -((-tick) // tick_spacing) * tick_spacing


def compute_tick_range(current_tick: int, tick_spacing: int, width_in_spacings: int) -> TickRange:
    """Aligned, bounds-clamped range of ``width_in_spacings`` spacings on each side.

    Bounds are clamped before alignment, aligned outward, then pulled back to
    the nearest in-bound multiple. A collapsed range is widened upward by one
    spacing, or shrunk from below when the upper side has no room.
    """
    if tick_spacing <= 0:
        raise InvalidRangeError("tick_spacing must be positive.")
    if width_in_spacings < 0:
        raise InvalidRangeError("width_in_spacings must not be negative.")

    offset = tick_spacing * width_in_spacings
    raw_lower = _clamp(current_tick - offset)
    raw_upper = _clamp(current_tick + offset)

    lower = align_tick_floor(raw_lower, tick_spacing)
    upper = align_tick_ceil(raw_upper, tick_spacing)

    if lower < MIN_TICK:
        lower = align_tick_ceil(MIN_TICK, tick_spacing)
    if upper > MAX_TICK:
        upper = align_tick_floor(MAX_TICK, tick_spacing)

    if lower >= upper:
        if lower + tick_spacing <= MAX_TICK:
            upper = lower + tick_spacing
        else:
            upper = align_tick_floor(MAX_TICK, tick_spacing)
            lower = upper - tick_spacing

    return validate_tick_range(lower, upper, tick_spacing)


def full_range_ticks(tick_spacing: int) -> TickRange:
    lower = align_tick_ceil(MIN_TICK, tick_spacing)
    upper = align_tick_floor(MAX_TICK, tick_spacing)
    return validate_tick_range(lower, upper, tick_spacing)


def validate_tick_range(lower: int, upper: int, tick_spacing: int) -> TickRange:
    if tick_spacing <= 0:
        raise InvalidRangeError("tick_spacing must be positive.")
    if lower >= upper:
        raise InvalidRangeError("Lower tick must be less than upper tick.")
    if lower % tick_spacing != 0 or upper % tick_spacing != 0:
        raise InvalidRangeError(f"Ticks must be aligned with tick spacing ({tick_spacing}).")
    if lower < MIN_TICK or upper > MAX_TICK:
        raise InvalidRangeError("Ticks out of bounds.")
    return TickRange(lower=lower, upper=upper)


def range_width_for_preset(preset: RangePreset, tick_spacing: int) -> int:
    if tick_spacing <= 0:
        raise InvalidRangeError("tick_spacing must be positive.")
    half_width = PRESET_HALF_WIDTHS.get(preset)
    if half_width is None:
        raise InvalidRangeError(f"Unknown range preset: {preset}.")
    return max(1, -(-half_width // tick_spacing))


def compute_preset_range(preset: RangePreset, current_tick: int, tick_spacing: int) -> TickRange:
    if preset == "full":
        return full_range_ticks(tick_spacing)
    width = range_width_for_preset(preset, tick_spacing)
    return compute_tick_range(current_tick, tick_spacing, width)


def _clamp(tick: int) -> int:
    return max(MIN_TICK, min(MAX_TICK, tick))
