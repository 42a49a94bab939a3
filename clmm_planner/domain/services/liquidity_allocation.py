from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_CEILING, Decimal

from clmm_planner.domain.entities.liquidity_plan import LiquidityPlan
from clmm_planner.domain.entities.pool import AssetSide, PoolState
from clmm_planner.domain.exceptions import (
    InsufficientBalanceError,
    PlanInputError,
    PoolUnavailableError,
    RejectedAmountError,
    UnsupportedAssetError,
)
from clmm_planner.domain.services.clmm_math import estimate_swap_output


BPS_DENOMINATOR = 10_000
DEFAULT_FEE_BUFFER_BPS = 200
DEFAULT_MIN_LEG_FRACTION = Decimal("0.01")


@dataclass(frozen=True)
class MinimumLegPolicy:
    """Smallest leg worth sending on chain, as a fraction of one whole unit."""

    min_fraction: Decimal = DEFAULT_MIN_LEG_FRACTION

    def min_units(self, decimals: int) -> int:
        scaled = (self.min_fraction * (Decimal(10) ** int(decimals))).to_integral_value(
            rounding=ROUND_CEILING
        )
        return max(1, int(scaled))

    def check(self, *, amount: int, decimals: int, leg: str) -> None:
        minimum = self.min_units(decimals)
        if amount < minimum:
            raise RejectedAmountError(
                f"{leg} amount {amount} is below the minimum of {minimum} units."
            )


def ensure_pool_available(pool: PoolState) -> None:
    if pool.paused:
        raise PoolUnavailableError(f"Pool {pool.pool_id} is paused.")


def ensure_sufficient_balance(*, asset: str, required: int, available: int) -> None:
    if available < required:
        raise InsufficientBalanceError(
            f"Insufficient balance for {asset}: required {required}, available {available}."
        )


def apply_fee_buffer(amount: int, fee_buffer_bps: int) -> int:
    if fee_buffer_bps < 0 or fee_buffer_bps >= BPS_DENOMINATOR:
        raise PlanInputError("fee_buffer_bps must be between 0 and 9999.")
    return amount * (BPS_DENOMINATOR - fee_buffer_bps) // BPS_DENOMINATOR


def plan_zap(
    input_asset: str,
    input_amount: int,
    pool: PoolState,
    fee_buffer_bps: int = DEFAULT_FEE_BUFFER_BPS,
    *,
    min_leg_policy: MinimumLegPolicy | None = None,
    estimated_counter_amount: int | None = None,
) -> LiquidityPlan:
    """Split one input asset into a swap leg and a direct deposit leg.

    Half of the input (rounded down) is swapped to the other asset. The rest is
    deposited after withholding ``fee_buffer_bps`` against swap fees and
    slippage. The input side is the fixed side because its amount is known
    exactly; the counter amount is a hint the pool resolves at execution.
    """
    ensure_pool_available(pool)
    side = pool.side_of(input_asset)
    if side is None:
        raise UnsupportedAssetError(f"Asset {input_asset} is not part of pool {pool.pool_id}.")
    if input_amount <= 0:
        raise RejectedAmountError("input_amount must be positive.")

    policy = min_leg_policy or MinimumLegPolicy()
    counter_side: AssetSide = "B" if side == "A" else "A"

    swap_amount = input_amount // 2
    deposit_amount = input_amount - swap_amount
    deposit_adjusted = apply_fee_buffer(deposit_amount, fee_buffer_bps)

    if estimated_counter_amount is None:
        if pool.sqrt_price_raw <= 0:
            raise PlanInputError("Pool has no price; provide estimated_counter_amount.")
        counter_amount = estimate_swap_output(
            sqrt_price_raw=pool.sqrt_price_raw,
            amount_in=swap_amount,
            a_to_b=side == "A",
        )
    else:
        if estimated_counter_amount < 0:
            raise PlanInputError("estimated_counter_amount must not be negative.")
        counter_amount = estimated_counter_amount

    input_decimals = pool.decimals_for(side)
    policy.check(amount=swap_amount, decimals=input_decimals, leg="swap")
    policy.check(amount=deposit_adjusted, decimals=input_decimals, leg="deposit")
    policy.check(
        amount=counter_amount,
        decimals=pool.decimals_for(counter_side),
        leg="estimated counter",
    )

    deposit_a = deposit_adjusted if side == "A" else counter_amount
    deposit_b = counter_amount if side == "A" else deposit_adjusted
    return LiquidityPlan(
        input_asset=input_asset,
        input_amount=input_amount,
        swap_amount=swap_amount,
        deposit_amount_a=deposit_a,
        deposit_amount_b=deposit_b,
        fixed_side=side,
        buffer_amount=deposit_amount - deposit_adjusted,
    )


def plan_direct_deposit(
    amount_a: int,
    amount_b: int,
    fixed_side: AssetSide,
    pool: PoolState,
    *,
    min_leg_policy: MinimumLegPolicy | None = None,
) -> LiquidityPlan:
    ensure_pool_available(pool)
    if fixed_side not in ("A", "B"):
        raise PlanInputError("fixed_side must be 'A' or 'B'.")
    if amount_a < 0 or amount_b < 0:
        raise RejectedAmountError("Deposit amounts must not be negative.")

    policy = min_leg_policy or MinimumLegPolicy()
    fixed_amount = amount_a if fixed_side == "A" else amount_b
    if fixed_amount == 0:
        raise RejectedAmountError("The fixed side amount must be positive.")
    if amount_a > 0:
        policy.check(amount=amount_a, decimals=pool.decimals_a, leg="asset A")
    if amount_b > 0:
        policy.check(amount=amount_b, decimals=pool.decimals_b, leg="asset B")

    return LiquidityPlan(
        input_asset=pool.asset_for(fixed_side),
        input_amount=fixed_amount,
        swap_amount=0,
        deposit_amount_a=amount_a,
        deposit_amount_b=amount_b,
        fixed_side=fixed_side,
    )
