from __future__ import annotations

from clmm_planner.application.dto.plan_zap import PlanZapInput, PlanZapOutput
from clmm_planner.application.ports.coin_inventory_port import CoinInventoryPort
from clmm_planner.application.ports.plan_trace_port import NullPlanTrace, PlanTracePort
from clmm_planner.application.ports.pool_reader_port import PoolReaderPort
from clmm_planner.application.use_cases.planning_common import (
    PlannerDefaults,
    collect_fragments,
    load_available_pool,
    resolve_tick_range,
)
from clmm_planner.domain.exceptions import DomainError, PlanInputError
from clmm_planner.domain.services.liquidity_allocation import plan_zap
from clmm_planner.domain.services.transaction_plan import PlanVariant, TransactionPlanBuilder


class PlanZapUseCase:
    def __init__(
        self,
        *,
        pool_reader: PoolReaderPort,
        coin_inventory: CoinInventoryPort,
        defaults: PlannerDefaults | None = None,
        trace: PlanTracePort | None = None,
    ):
        self._pool_reader = pool_reader
        self._coin_inventory = coin_inventory
        self._defaults = defaults or PlannerDefaults()
        self._trace = trace or NullPlanTrace()

    def execute(self, command: PlanZapInput) -> PlanZapOutput:
        try:
            return self._execute(command)
        except DomainError as exc:
            self._trace.record(
                "zap_rejected",
                pool_id=command.pool_id,
                input_asset=command.input_asset,
                input_amount=command.input_amount,
                error=type(exc).__name__,
                detail=str(exc),
            )
            raise

    def _execute(self, command: PlanZapInput) -> PlanZapOutput:
        pool = load_available_pool(self._pool_reader, command.pool_id)
        if not command.owner:
            raise PlanInputError("owner is required.")

        tick_range = resolve_tick_range(
            pool,
            position_id=command.position_id,
            tick_lower=command.tick_lower,
            tick_upper=command.tick_upper,
            range_preset=command.range_preset,
            width_in_spacings=command.width_in_spacings,
            default_width=self._defaults.range_width_spacings,
        )
        fee_buffer_bps = (
            self._defaults.fee_buffer_bps if command.fee_buffer_bps is None else command.fee_buffer_bps
        )
        liquidity_plan = plan_zap(
            command.input_asset,
            command.input_amount,
            pool,
            fee_buffer_bps,
            min_leg_policy=self._defaults.min_leg_policy,
            estimated_counter_amount=command.estimated_counter_amount,
        )
        fragments = collect_fragments(
            self._coin_inventory,
            owner=command.owner,
            requirements={command.input_asset: command.input_amount},
        )

        builder = TransactionPlanBuilder(
            PlanVariant.for_plan(liquidity_plan, position_id=command.position_id)
        )
        operation_plan = builder.build(
            pool=pool,
            owner=command.owner,
            plan=liquidity_plan,
            tick_range=tick_range,
            position_id=command.position_id,
            coin_fragments=fragments,
        )

        self._trace.record(
            "zap_planned",
            pool_id=pool.pool_id,
            input_asset=command.input_asset,
            input_amount=command.input_amount,
            swap_amount=liquidity_plan.swap_amount,
            deposit_amount_a=liquidity_plan.deposit_amount_a,
            deposit_amount_b=liquidity_plan.deposit_amount_b,
            fixed_side=liquidity_plan.fixed_side,
            tick_lower=tick_range.lower if tick_range else None,
            tick_upper=tick_range.upper if tick_range else None,
            operations=",".join(operation_plan.kinds),
        )
        return PlanZapOutput(
            pool=pool,
            tick_range=tick_range,
            liquidity_plan=liquidity_plan,
            operation_plan=operation_plan,
        )
