from __future__ import annotations

from functools import lru_cache

from clmm_planner.application.use_cases.compute_tick_range import ComputeTickRangeUseCase
from clmm_planner.application.use_cases.get_pool_price import GetPoolPriceUseCase
from clmm_planner.application.use_cases.plan_direct_deposit import PlanDirectDepositUseCase
from clmm_planner.application.use_cases.plan_zap import PlanZapUseCase
from clmm_planner.application.use_cases.planning_common import PlannerDefaults
from clmm_planner.domain.services.liquidity_allocation import MinimumLegPolicy
from clmm_planner.infrastructure.clients.sui_coin_inventory import SuiCoinInventory
from clmm_planner.infrastructure.clients.sui_pool_reader import SuiPoolReader
from clmm_planner.infrastructure.clients.sui_rpc_client import SuiRpcClient, SuiRpcClientSettings
from clmm_planner.infrastructure.trace.logging_plan_trace import LoggingPlanTrace
from clmm_planner.shared.config import get_settings


@lru_cache(maxsize=1)
def _get_sui_rpc_client() -> SuiRpcClient:
    settings = get_settings()
    return SuiRpcClient(
        SuiRpcClientSettings(
            rpc_url=settings.sui_rpc_url,
            timeout_seconds=settings.sui_rpc_timeout_seconds,
            max_retries=settings.sui_rpc_max_retries,
        )
    )


@lru_cache(maxsize=1)
def _get_pool_reader() -> SuiPoolReader:
    return SuiPoolReader(_get_sui_rpc_client())


@lru_cache(maxsize=1)
def _get_planner_defaults() -> PlannerDefaults:
    settings = get_settings()
    return PlannerDefaults(
        fee_buffer_bps=settings.planner_fee_buffer_bps,
        range_width_spacings=settings.planner_range_width_spacings,
        min_leg_policy=MinimumLegPolicy(min_fraction=settings.planner_min_leg_fraction),
    )


def resolve_pool_id(pool_id: str) -> str:
    aliases = get_settings().pool_aliases
    return str(aliases.get(pool_id, pool_id))


def get_plan_zap_use_case() -> PlanZapUseCase:
    return PlanZapUseCase(
        pool_reader=_get_pool_reader(),
        coin_inventory=SuiCoinInventory(_get_sui_rpc_client()),
        defaults=_get_planner_defaults(),
        trace=LoggingPlanTrace(),
    )


def get_plan_direct_deposit_use_case() -> PlanDirectDepositUseCase:
    return PlanDirectDepositUseCase(
        pool_reader=_get_pool_reader(),
        coin_inventory=SuiCoinInventory(_get_sui_rpc_client()),
        defaults=_get_planner_defaults(),
        trace=LoggingPlanTrace(),
    )


def get_compute_tick_range_use_case() -> ComputeTickRangeUseCase:
    return ComputeTickRangeUseCase(pool_reader=_get_pool_reader(), defaults=_get_planner_defaults())


def get_pool_price_use_case() -> GetPoolPriceUseCase:
    return GetPoolPriceUseCase(pool_reader=_get_pool_reader())
