from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from clmm_planner.domain.entities.pool import TickRange
from clmm_planner.domain.services.tick_range import RangePreset


@dataclass(frozen=True)
class ComputeTickRangeInput:
    pool_id: str
    width_in_spacings: int | None = None
    range_preset: RangePreset | None = None


@dataclass(frozen=True)
class ComputeTickRangeOutput:
    pool_id: str
    current_tick: int
    tick_spacing: int
    tick_range: TickRange
    tick_lower_encoded: int
    tick_upper_encoded: int
    lower_price: Decimal
    upper_price: Decimal
