from __future__ import annotations

from dataclasses import dataclass
from typing import Literal


AssetSide = Literal["A", "B"]


@dataclass(frozen=True)
class PoolState:
    pool_id: str
    asset_a: str
    asset_b: str
    decimals_a: int
    decimals_b: int
    tick_spacing: int
    current_tick: int
    sqrt_price_raw: int
    liquidity: int
    paused: bool = False

    def side_of(self, asset: str) -> AssetSide | None:
        if asset == self.asset_a:
            return "A"
        if asset == self.asset_b:
            return "B"
        return None

    def asset_for(self, side: AssetSide) -> str:
        return self.asset_a if side == "A" else self.asset_b

    def decimals_for(self, side: AssetSide) -> int:
        return self.decimals_a if side == "A" else self.decimals_b


@dataclass(frozen=True)
class TickRange:
    lower: int
    upper: int

    @property
    def width(self) -> int:
        return self.upper - self.lower

    def contains(self, tick: int) -> bool:
        return self.lower <= tick < self.upper


@dataclass(frozen=True)
class CoinFragment:
    coin_id: str
    asset: str
    balance: int
