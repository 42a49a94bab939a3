from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Sequence

from clmm_planner.domain.entities.liquidity_plan import LiquidityPlan
from clmm_planner.domain.entities.operation_plan import (
    AddLiquidity,
    MergeCoins,
    OpenPosition,
    Operation,
    OperationPlan,
    ReturnChange,
    Swap,
)
from clmm_planner.domain.entities.pool import AssetSide, CoinFragment, PoolState, TickRange
from clmm_planner.domain.exceptions import PlanInputError, UnsupportedAssetError
from clmm_planner.domain.services.clmm_math import sqrt_price_limit
from clmm_planner.domain.services.liquidity_allocation import ensure_pool_available
from clmm_planner.domain.services.tick_codec import encode_tick
from clmm_planner.domain.services.tick_range import validate_tick_range


@dataclass(frozen=True)
class PlanVariant:
    has_existing_position: bool
    is_zap: bool
    fixed_side: AssetSide

    @classmethod
    def for_plan(cls, plan: LiquidityPlan, *, position_id: str | None) -> "PlanVariant":
        return cls(
            has_existing_position=position_id is not None,
            is_zap=plan.is_zap,
            fixed_side=plan.fixed_side,
        )


class TransactionPlanBuilder:
    """Composes a liquidity plan into the ordered, atomic operation list.

    Operations are always emitted as MergeCoins, Swap, OpenPosition,
    AddLiquidity, ReturnChange, skipping the ones the variant does not need.
    """

    def __init__(self, variant: PlanVariant):
        self._variant = variant

    @property
    def variant(self) -> PlanVariant:
        return self._variant

    def build(
        self,
        *,
        pool: PoolState,
        owner: str,
        plan: LiquidityPlan,
        tick_range: TickRange | None = None,
        position_id: str | None = None,
        coin_fragments: Mapping[str, Sequence[CoinFragment]] | None = None,
    ) -> OperationPlan:
        ensure_pool_available(pool)
        self._check_inputs(pool=pool, owner=owner, plan=plan, tick_range=tick_range, position_id=position_id)

        operations: list[Operation] = []
        operations.extend(self._merge_operations(pool=pool, plan=plan, coin_fragments=coin_fragments or {}))

        input_side = pool.side_of(plan.input_asset)
        if self._variant.is_zap:
            a_to_b = input_side == "A"
            operations.append(
                Swap(
                    pool_id=pool.pool_id,
                    input_asset=plan.input_asset,
                    output_asset=pool.asset_b if a_to_b else pool.asset_a,
                    amount=plan.swap_amount,
                    a_to_b=a_to_b,
                    sqrt_price_limit=sqrt_price_limit(a_to_b),
                    by_amount_in=True,
                )
            )

        if not self._variant.has_existing_position and tick_range is not None:
            operations.append(
                OpenPosition(
                    pool_id=pool.pool_id,
                    tick_lower_encoded=encode_tick(tick_range.lower),
                    tick_upper_encoded=encode_tick(tick_range.upper),
                )
            )

        operations.append(
            AddLiquidity(
                pool_id=pool.pool_id,
                position_id=position_id,
                from_open_position=not self._variant.has_existing_position,
                amount_a=plan.deposit_amount_a,
                amount_b=plan.deposit_amount_b,
                fixed_side=plan.fixed_side,
            )
        )
        operations.append(ReturnChange(assets=(pool.asset_a, pool.asset_b), recipient=owner))

        return OperationPlan(pool_id=pool.pool_id, owner=owner, operations=tuple(operations))

    def _check_inputs(
        self,
        *,
        pool: PoolState,
        owner: str,
        plan: LiquidityPlan,
        tick_range: TickRange | None,
        position_id: str | None,
    ) -> None:
        if not owner:
            raise PlanInputError("owner is required.")
        if pool.side_of(plan.input_asset) is None:
            raise UnsupportedAssetError(f"Asset {plan.input_asset} is not part of pool {pool.pool_id}.")
        if self._variant.fixed_side != plan.fixed_side:
            raise PlanInputError("Plan fixed side does not match the builder variant.")
        if self._variant.is_zap != plan.is_zap:
            raise PlanInputError("Plan swap leg does not match the builder variant.")
        if self._variant.has_existing_position:
            if not position_id:
                raise PlanInputError("position_id is required to add to an existing position.")
        else:
            if position_id is not None:
                raise PlanInputError("position_id given for a variant that opens a new position.")
            if tick_range is None:
                raise PlanInputError("tick_range is required to open a new position.")
            validate_tick_range(tick_range.lower, tick_range.upper, pool.tick_spacing)

    def _merge_operations(
        self,
        *,
        pool: PoolState,
        plan: LiquidityPlan,
        coin_fragments: Mapping[str, Sequence[CoinFragment]],
    ) -> list[MergeCoins]:
        if self._variant.is_zap:
            consumed = [plan.input_asset]
        else:
            consumed = []
            if plan.deposit_amount_a > 0:
                consumed.append(pool.asset_a)
            if plan.deposit_amount_b > 0:
                consumed.append(pool.asset_b)

        merges: list[MergeCoins] = []
        for asset in consumed:
            fragments = [row for row in coin_fragments.get(asset, ()) if row.asset == asset]
            if len(fragments) <= 1:
                continue
            ordered = sorted(fragments, key=lambda row: (-row.balance, row.coin_id))
            merges.append(
                MergeCoins(
                    asset=asset,
                    primary_coin_id=ordered[0].coin_id,
                    merged_coin_ids=tuple(row.coin_id for row in ordered[1:]),
                )
            )
        return merges
