from __future__ import annotations

from clmm_planner.application.dto.tick_range import ComputeTickRangeInput, ComputeTickRangeOutput
from clmm_planner.application.ports.pool_reader_port import PoolReaderPort
from clmm_planner.application.use_cases.planning_common import (
    PlannerDefaults,
    load_available_pool,
    resolve_tick_range,
)
from clmm_planner.domain.services.clmm_math import tick_to_price
from clmm_planner.domain.services.tick_codec import encode_tick


class ComputeTickRangeUseCase:
    def __init__(self, *, pool_reader: PoolReaderPort, defaults: PlannerDefaults | None = None):
        self._pool_reader = pool_reader
        self._defaults = defaults or PlannerDefaults()

    def execute(self, command: ComputeTickRangeInput) -> ComputeTickRangeOutput:
        pool = load_available_pool(self._pool_reader, command.pool_id)
        tick_range = resolve_tick_range(
            pool,
            position_id=None,
            tick_lower=None,
            tick_upper=None,
            range_preset=command.range_preset,
            width_in_spacings=command.width_in_spacings,
            default_width=self._defaults.range_width_spacings,
        )
        return ComputeTickRangeOutput(
            pool_id=pool.pool_id,
            current_tick=pool.current_tick,
            tick_spacing=pool.tick_spacing,
            tick_range=tick_range,
            tick_lower_encoded=encode_tick(tick_range.lower),
            tick_upper_encoded=encode_tick(tick_range.upper),
            lower_price=tick_to_price(tick_range.lower, pool.decimals_a, pool.decimals_b),
            upper_price=tick_to_price(tick_range.upper, pool.decimals_a, pool.decimals_b),
        )
