from __future__ import annotations

import unittest

from clmm_planner.domain.entities.operation_plan import AddLiquidity, MergeCoins, OpenPosition, Swap
from clmm_planner.domain.entities.pool import CoinFragment, PoolState, TickRange
from clmm_planner.domain.exceptions import (
    InvalidRangeError,
    PlanInputError,
    PoolUnavailableError,
    UnsupportedAssetError,
)
from clmm_planner.domain.services.clmm_math import MAX_SQRT_PRICE, MIN_SQRT_PRICE, Q64
from clmm_planner.domain.services.liquidity_allocation import plan_direct_deposit, plan_zap
from clmm_planner.domain.services.transaction_plan import PlanVariant, TransactionPlanBuilder


SUI = "0x2::sui::SUI"
USDC = "0xusdc::usdc::USDC"


def _pool(**overrides) -> PoolState:
    payload = {
        "pool_id": "0xpool",
        "asset_a": SUI,
        "asset_b": USDC,
        "decimals_a": 0,
        "decimals_b": 0,
        "tick_spacing": 60,
        "current_tick": 0,
        "sqrt_price_raw": Q64,
        "liquidity": 10**12,
    }
    payload.update(overrides)
    return PoolState(**payload)


class TransactionPlanBuilderTests(unittest.TestCase):
    def setUp(self):
        self.pool = _pool()
        self.tick_range = TickRange(lower=-6000, upper=6000)

    def _build(self, plan, *, position_id=None, tick_range=None, fragments=None, owner="0xowner"):
        builder = TransactionPlanBuilder(PlanVariant.for_plan(plan, position_id=position_id))
        return builder.build(
            pool=self.pool,
            owner=owner,
            plan=plan,
            tick_range=tick_range,
            position_id=position_id,
            coin_fragments=fragments,
        )

    def test_zap_into_new_position(self):
        plan = plan_zap(SUI, 1000, self.pool, 200)

        result = self._build(plan, tick_range=self.tick_range)

        self.assertEqual(result.kinds, ["swap", "open_position", "add_liquidity", "return_change"])
        swap = result.operations[0]
        self.assertIsInstance(swap, Swap)
        self.assertTrue(swap.a_to_b)
        self.assertEqual(swap.amount, 500)
        self.assertEqual(swap.output_asset, USDC)
        self.assertEqual(swap.sqrt_price_limit, MIN_SQRT_PRICE)

        open_position = result.operations[1]
        self.assertIsInstance(open_position, OpenPosition)
        self.assertEqual(open_position.tick_lower_encoded, 4294961296)
        self.assertEqual(open_position.tick_upper_encoded, 6000)

        add = result.operations[2]
        self.assertIsInstance(add, AddLiquidity)
        self.assertTrue(add.from_open_position)
        self.assertIsNone(add.position_id)
        self.assertEqual((add.amount_a, add.amount_b, add.fixed_side), (490, 500, "A"))

        change = result.operations[3]
        self.assertEqual(change.assets, (SUI, USDC))
        self.assertEqual(change.recipient, "0xowner")

    def test_zap_from_b_swaps_towards_a(self):
        plan = plan_zap(USDC, 1000, self.pool, 200)

        result = self._build(plan, tick_range=self.tick_range)

        swap = result.operations[0]
        self.assertFalse(swap.a_to_b)
        self.assertEqual(swap.output_asset, SUI)
        self.assertEqual(swap.sqrt_price_limit, MAX_SQRT_PRICE)
        self.assertEqual(result.operations[2].fixed_side, "B")

    def test_zap_into_existing_position(self):
        plan = plan_zap(SUI, 1000, self.pool, 200)

        result = self._build(plan, position_id="0xposition")

        self.assertEqual(result.kinds, ["swap", "add_liquidity", "return_change"])
        add = result.operations[1]
        self.assertEqual(add.position_id, "0xposition")
        self.assertFalse(add.from_open_position)

    def test_direct_deposit_into_new_position(self):
        plan = plan_direct_deposit(1000, 2000, "A", self.pool)

        result = self._build(plan, tick_range=self.tick_range)

        self.assertEqual(result.kinds, ["open_position", "add_liquidity", "return_change"])

    def test_direct_deposit_into_existing_position(self):
        plan = plan_direct_deposit(1000, 2000, "B", self.pool)

        result = self._build(plan, position_id="0xposition")

        self.assertEqual(result.kinds, ["add_liquidity", "return_change"])
        self.assertEqual(result.operations[0].fixed_side, "B")

    def test_fragmented_input_is_merged_first(self):
        plan = plan_zap(SUI, 1000, self.pool, 200)
        fragments = {
            SUI: [
                CoinFragment(coin_id="0xc1", asset=SUI, balance=300),
                CoinFragment(coin_id="0xc2", asset=SUI, balance=600),
                CoinFragment(coin_id="0xc3", asset=SUI, balance=300),
            ]
        }

        result = self._build(plan, tick_range=self.tick_range, fragments=fragments)

        self.assertEqual(result.kinds[0], "merge_coins")
        merge = result.operations[0]
        self.assertIsInstance(merge, MergeCoins)
        self.assertEqual(merge.primary_coin_id, "0xc2")
        self.assertEqual(merge.merged_coin_ids, ("0xc1", "0xc3"))
        self.assertEqual(result.kinds[1], "swap")

    def test_single_fragment_needs_no_merge(self):
        plan = plan_direct_deposit(1000, 2000, "A", self.pool)
        fragments = {
            SUI: [CoinFragment(coin_id="0xc1", asset=SUI, balance=5000)],
            USDC: [
                CoinFragment(coin_id="0xu1", asset=USDC, balance=1500),
                CoinFragment(coin_id="0xu2", asset=USDC, balance=1500),
            ],
        }

        result = self._build(plan, position_id="0xposition", fragments=fragments)

        self.assertEqual(result.kinds, ["merge_coins", "add_liquidity", "return_change"])
        self.assertEqual(result.operations[0].asset, USDC)

    def test_variant_must_match_plan(self):
        plan = plan_zap(SUI, 1000, self.pool, 200)
        builder = TransactionPlanBuilder(
            PlanVariant(has_existing_position=False, is_zap=True, fixed_side="B")
        )
        with self.assertRaises(PlanInputError):
            builder.build(pool=self.pool, owner="0xowner", plan=plan, tick_range=self.tick_range)

        builder = TransactionPlanBuilder(
            PlanVariant(has_existing_position=False, is_zap=False, fixed_side="A")
        )
        with self.assertRaises(PlanInputError):
            builder.build(pool=self.pool, owner="0xowner", plan=plan, tick_range=self.tick_range)

    def test_new_position_requires_range(self):
        plan = plan_zap(SUI, 1000, self.pool, 200)
        with self.assertRaises(PlanInputError):
            self._build(plan)

    def test_existing_position_requires_id(self):
        plan = plan_zap(SUI, 1000, self.pool, 200)
        builder = TransactionPlanBuilder(
            PlanVariant(has_existing_position=True, is_zap=True, fixed_side="A")
        )
        with self.assertRaises(PlanInputError):
            builder.build(pool=self.pool, owner="0xowner", plan=plan)

    def test_misaligned_range_is_rejected(self):
        plan = plan_zap(SUI, 1000, self.pool, 200)
        with self.assertRaises(InvalidRangeError):
            self._build(plan, tick_range=TickRange(lower=-100, upper=6000))

    def test_foreign_input_asset_is_rejected(self):
        plan = plan_zap(SUI, 1000, self.pool, 200)
        self.pool = _pool(asset_a="0xother::coin::COIN")
        with self.assertRaises(UnsupportedAssetError):
            self._build(plan, tick_range=self.tick_range)

    def test_paused_pool_is_rejected(self):
        plan = plan_zap(SUI, 1000, self.pool, 200)
        self.pool = _pool(paused=True)
        with self.assertRaises(PoolUnavailableError):
            self._build(plan, tick_range=self.tick_range)

    def test_owner_is_required(self):
        plan = plan_zap(SUI, 1000, self.pool, 200)
        with self.assertRaises(PlanInputError):
            self._build(plan, tick_range=self.tick_range, owner="")


if __name__ == "__main__":
    unittest.main()
