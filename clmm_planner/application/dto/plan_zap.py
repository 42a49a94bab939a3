from __future__ import annotations

from dataclasses import dataclass

from clmm_planner.domain.entities.liquidity_plan import LiquidityPlan
from clmm_planner.domain.entities.operation_plan import OperationPlan
from clmm_planner.domain.entities.pool import PoolState, TickRange
from clmm_planner.domain.services.tick_range import RangePreset


@dataclass(frozen=True)
class PlanZapInput:
    pool_id: str
    owner: str
    input_asset: str
    input_amount: int
    fee_buffer_bps: int | None = None
    width_in_spacings: int | None = None
    range_preset: RangePreset | None = None
    tick_lower: int | None = None
    tick_upper: int | None = None
    position_id: str | None = None
    estimated_counter_amount: int | None = None


@dataclass(frozen=True)
class PlanZapOutput:
    pool: PoolState
    tick_range: TickRange | None
    liquidity_plan: LiquidityPlan
    operation_plan: OperationPlan
