from __future__ import annotations

from dataclasses import dataclass, field

from clmm_planner.application.ports.coin_inventory_port import CoinInventoryPort
from clmm_planner.application.ports.pool_reader_port import PoolReaderPort
from clmm_planner.domain.entities.pool import CoinFragment, PoolState, TickRange
from clmm_planner.domain.exceptions import PlanInputError, PoolNotFoundError
from clmm_planner.domain.services.liquidity_allocation import (
    DEFAULT_FEE_BUFFER_BPS,
    MinimumLegPolicy,
    ensure_pool_available,
    ensure_sufficient_balance,
)
from clmm_planner.domain.services.tick_range import (
    DEFAULT_RANGE_WIDTH_SPACINGS,
    RangePreset,
    compute_preset_range,
    compute_tick_range,
    validate_tick_range,
)


@dataclass(frozen=True)
class PlannerDefaults:
    fee_buffer_bps: int = DEFAULT_FEE_BUFFER_BPS
    range_width_spacings: int = DEFAULT_RANGE_WIDTH_SPACINGS
    min_leg_policy: MinimumLegPolicy = field(default_factory=MinimumLegPolicy)


def load_available_pool(pool_reader: PoolReaderPort, pool_id: str) -> PoolState:
    pool = pool_reader.get_pool_state(pool_id=pool_id)
    if pool is None:
        raise PoolNotFoundError("Pool not found.")
    ensure_pool_available(pool)
    return pool


def resolve_tick_range(
    pool: PoolState,
    *,
    position_id: str | None,
    tick_lower: int | None,
    tick_upper: int | None,
    range_preset: RangePreset | None,
    width_in_spacings: int | None,
    default_width: int,
) -> TickRange | None:
    """Range for a new position; None when adding to an existing one."""
    explicit = tick_lower is not None or tick_upper is not None
    if position_id is not None:
        if explicit or range_preset is not None or width_in_spacings is not None:
            raise PlanInputError("Range parameters are not allowed with an existing position.")
        return None

    if explicit:
        if tick_lower is None or tick_upper is None:
            raise PlanInputError("tick_lower and tick_upper must be provided together.")
        if range_preset is not None or width_in_spacings is not None:
            raise PlanInputError("Use either explicit ticks, a preset or a width.")
        return validate_tick_range(tick_lower, tick_upper, pool.tick_spacing)

    if range_preset is not None:
        if width_in_spacings is not None:
            raise PlanInputError("Use either range_preset or width_in_spacings.")
        return compute_preset_range(range_preset, pool.current_tick, pool.tick_spacing)

    width = default_width if width_in_spacings is None else width_in_spacings
    return compute_tick_range(pool.current_tick, pool.tick_spacing, width)


def collect_fragments(
    inventory: CoinInventoryPort,
    *,
    owner: str,
    requirements: dict[str, int],
) -> dict[str, list[CoinFragment]]:
    """Fetch coin fragments per asset and check they cover the required amounts."""
    fragments: dict[str, list[CoinFragment]] = {}
    for asset, required in requirements.items():
        if required <= 0:
            continue
        rows = inventory.list_coins(owner=owner, asset=asset)
        available = sum(row.balance for row in rows)
        ensure_sufficient_balance(asset=asset, required=required, available=available)
        fragments[asset] = rows
    return fragments
