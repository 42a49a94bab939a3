from __future__ import annotations

from dataclasses import asdict
from typing import Any

from fastapi import APIRouter, Depends, HTTPException

from clmm_planner.api.deps import (
    get_plan_direct_deposit_use_case,
    get_plan_zap_use_case,
    resolve_pool_id,
)
from clmm_planner.api.schemas.planning import (
    LiquidityPlanResponse,
    OperationResponse,
    PlanDirectDepositRequest,
    PlanResponse,
    PlanZapRequest,
    TickRangePayload,
)
from clmm_planner.application.dto.plan_direct_deposit import PlanDirectDepositInput
from clmm_planner.application.dto.plan_zap import PlanZapInput
from clmm_planner.application.use_cases.plan_direct_deposit import PlanDirectDepositUseCase
from clmm_planner.application.use_cases.plan_zap import PlanZapUseCase
from clmm_planner.domain.entities.liquidity_plan import LiquidityPlan
from clmm_planner.domain.entities.operation_plan import Operation, OperationPlan
from clmm_planner.domain.entities.pool import TickRange
from clmm_planner.domain.exceptions import (
    InsufficientBalanceError,
    InvalidPriceError,
    InvalidRangeError,
    PlanInputError,
    PoolNotFoundError,
    PoolReadError,
    PoolUnavailableError,
    RejectedAmountError,
    UnsupportedAssetError,
)

router = APIRouter()


@router.post("/v1/zap/plan", response_model=PlanResponse)
def plan_zap(
    req: PlanZapRequest,
    use_case: PlanZapUseCase = Depends(get_plan_zap_use_case),
):
    try:
        result = use_case.execute(
            PlanZapInput(
                pool_id=resolve_pool_id(req.pool_id),
                owner=req.owner,
                input_asset=req.input_asset,
                input_amount=req.input_amount,
                fee_buffer_bps=req.fee_buffer_bps,
                width_in_spacings=req.width_in_spacings,
                range_preset=req.range_preset,
                tick_lower=req.tick_lower,
                tick_upper=req.tick_upper,
                position_id=req.position_id,
                estimated_counter_amount=req.estimated_counter_amount,
            )
        )
    except PoolNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except PoolUnavailableError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    except InsufficientBalanceError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    except (
        InvalidPriceError,
        InvalidRangeError,
        PlanInputError,
        RejectedAmountError,
        UnsupportedAssetError,
    ) as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except PoolReadError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc

    return _plan_response(result.operation_plan, result.liquidity_plan, result.tick_range)


@router.post("/v1/liquidity/plan", response_model=PlanResponse)
def plan_direct_deposit(
    req: PlanDirectDepositRequest,
    use_case: PlanDirectDepositUseCase = Depends(get_plan_direct_deposit_use_case),
):
    try:
        result = use_case.execute(
            PlanDirectDepositInput(
                pool_id=resolve_pool_id(req.pool_id),
                owner=req.owner,
                amount_a=req.amount_a,
                amount_b=req.amount_b,
                fixed_side=req.fixed_side,
                width_in_spacings=req.width_in_spacings,
                range_preset=req.range_preset,
                tick_lower=req.tick_lower,
                tick_upper=req.tick_upper,
                position_id=req.position_id,
            )
        )
    except PoolNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except PoolUnavailableError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    except InsufficientBalanceError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    except (InvalidRangeError, PlanInputError, RejectedAmountError) as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except PoolReadError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc

    return _plan_response(result.operation_plan, result.liquidity_plan, result.tick_range)


def _plan_response(
    operation_plan: OperationPlan,
    liquidity_plan: LiquidityPlan,
    tick_range: TickRange | None,
) -> PlanResponse:
    return PlanResponse(
        pool_id=operation_plan.pool_id,
        owner=operation_plan.owner,
        tick_range=(
            TickRangePayload(lower=tick_range.lower, upper=tick_range.upper)
            if tick_range is not None
            else None
        ),
        liquidity_plan=LiquidityPlanResponse(
            input_asset=liquidity_plan.input_asset,
            input_amount=str(liquidity_plan.input_amount),
            swap_amount=str(liquidity_plan.swap_amount),
            deposit_amount_a=str(liquidity_plan.deposit_amount_a),
            deposit_amount_b=str(liquidity_plan.deposit_amount_b),
            buffer_amount=str(liquidity_plan.buffer_amount),
            fixed_side=liquidity_plan.fixed_side,
        ),
        operations=[_operation_response(operation) for operation in operation_plan.operations],
    )


def _operation_response(operation: Operation) -> OperationResponse:
    params = {key: _jsonable(value) for key, value in asdict(operation).items() if key != "kind"}
    return OperationResponse(kind=operation.kind, params=params)


def _jsonable(value: Any) -> Any:
    # u64/u128 values overflow JSON number precision in most clients.
    if isinstance(value, bool) or value is None:
        return value
    if isinstance(value, int):
        return str(value)
    if isinstance(value, (list, tuple)):
        return [_jsonable(item) for item in value]
    return value
