from __future__ import annotations

from dataclasses import dataclass

from clmm_planner.domain.entities.pool import AssetSide


@dataclass(frozen=True)
class LiquidityPlan:
    input_asset: str
    input_amount: int
    swap_amount: int
    deposit_amount_a: int
    deposit_amount_b: int
    fixed_side: AssetSide
    buffer_amount: int = 0

    @property
    def is_zap(self) -> bool:
        return self.swap_amount > 0

    @property
    def fixed_amount(self) -> int:
        return self.deposit_amount_a if self.fixed_side == "A" else self.deposit_amount_b

    @property
    def hint_amount(self) -> int:
        return self.deposit_amount_b if self.fixed_side == "A" else self.deposit_amount_a
