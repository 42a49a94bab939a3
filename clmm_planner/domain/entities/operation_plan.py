from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Union

from clmm_planner.domain.entities.pool import AssetSide


@dataclass(frozen=True)
class MergeCoins:
    asset: str
    primary_coin_id: str
    merged_coin_ids: tuple[str, ...]
    kind: Literal["merge_coins"] = field(default="merge_coins", init=False)


@dataclass(frozen=True)
class Swap:
    pool_id: str
    input_asset: str
    output_asset: str
    amount: int
    a_to_b: bool
    sqrt_price_limit: int
    by_amount_in: bool = True
    kind: Literal["swap"] = field(default="swap", init=False)


@dataclass(frozen=True)
class OpenPosition:
    pool_id: str
    tick_lower_encoded: int
    tick_upper_encoded: int
    kind: Literal["open_position"] = field(default="open_position", init=False)


@dataclass(frozen=True)
class AddLiquidity:
    pool_id: str
    position_id: str | None
    from_open_position: bool
    amount_a: int
    amount_b: int
    fixed_side: AssetSide
    kind: Literal["add_liquidity"] = field(default="add_liquidity", init=False)


@dataclass(frozen=True)
class ReturnChange:
    assets: tuple[str, ...]
    recipient: str
    kind: Literal["return_change"] = field(default="return_change", init=False)


Operation = Union[MergeCoins, Swap, OpenPosition, AddLiquidity, ReturnChange]


@dataclass(frozen=True)
class OperationPlan:
    pool_id: str
    owner: str
    operations: tuple[Operation, ...]

    @property
    def kinds(self) -> list[str]:
        return [operation.kind for operation in self.operations]
