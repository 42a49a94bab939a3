from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class GetPoolPriceInput:
    pool_id: str


@dataclass(frozen=True)
class GetPoolPriceOutput:
    pool_id: str
    asset_a: str
    asset_b: str
    price: Decimal
    current_tick: int
    sqrt_price_raw: int
    liquidity: int
    paused: bool
