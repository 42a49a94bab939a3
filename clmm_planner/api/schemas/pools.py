from __future__ import annotations

from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, Field


class TickRangeRequest(BaseModel):
    pool_id: str = Field(..., description="Pool object id or configured alias.")
    width_in_spacings: int | None = Field(None, ge=0, description="Range half-width in tick spacings.")
    range_preset: Literal["tight", "medium", "wide", "full"] | None = Field(None)


class TickRangeResponse(BaseModel):
    pool_id: str
    current_tick: int
    tick_spacing: int
    tick_lower: int
    tick_upper: int
    tick_lower_encoded: str
    tick_upper_encoded: str
    lower_price: Decimal
    upper_price: Decimal


class PoolPriceResponse(BaseModel):
    pool_id: str
    asset_a: str
    asset_b: str
    price: Decimal
    current_tick: int
    sqrt_price_raw: str
    liquidity: str
    paused: bool
