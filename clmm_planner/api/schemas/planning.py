from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field


class PlanZapRequest(BaseModel):
    pool_id: str = Field(..., description="Pool object id or configured alias.")
    owner: str = Field(..., description="Address that owns the input coins and receives change.")
    input_asset: str = Field(..., description="Coin type of the single deposited asset.")
    input_amount: int = Field(..., gt=0, description="Input amount in smallest units.")
    fee_buffer_bps: int | None = Field(None, ge=0, lt=10000, description="Buffer withheld from the deposit leg.")
    width_in_spacings: int | None = Field(None, ge=0, description="Range half-width in tick spacings.")
    range_preset: Literal["tight", "medium", "wide", "full"] | None = Field(None)
    tick_lower: int | None = Field(None, description="Explicit lower tick; requires tick_upper.")
    tick_upper: int | None = Field(None, description="Explicit upper tick; requires tick_lower.")
    position_id: str | None = Field(None, description="Existing position to add liquidity to.")
    estimated_counter_amount: int | None = Field(
        None,
        ge=0,
        description="Swap output quote; estimated from the pool price when omitted.",
    )


class PlanDirectDepositRequest(BaseModel):
    pool_id: str
    owner: str
    amount_a: int = Field(..., ge=0, description="Asset A amount in smallest units.")
    amount_b: int = Field(..., ge=0, description="Asset B amount in smallest units.")
    fixed_side: Literal["A", "B"] = Field(..., description="Leg the deposit treats as exact.")
    width_in_spacings: int | None = Field(None, ge=0)
    range_preset: Literal["tight", "medium", "wide", "full"] | None = Field(None)
    tick_lower: int | None = None
    tick_upper: int | None = None
    position_id: str | None = None


class TickRangePayload(BaseModel):
    lower: int
    upper: int


class LiquidityPlanResponse(BaseModel):
    input_asset: str
    input_amount: str
    swap_amount: str
    deposit_amount_a: str
    deposit_amount_b: str
    buffer_amount: str
    fixed_side: Literal["A", "B"]


class OperationResponse(BaseModel):
    kind: str
    params: dict[str, Any]


class PlanResponse(BaseModel):
    pool_id: str
    owner: str
    tick_range: TickRangePayload | None
    liquidity_plan: LiquidityPlanResponse
    operations: list[OperationResponse]
