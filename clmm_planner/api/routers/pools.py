from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from clmm_planner.api.deps import (
    get_compute_tick_range_use_case,
    get_pool_price_use_case,
    resolve_pool_id,
)
from clmm_planner.api.schemas.pools import PoolPriceResponse, TickRangeRequest, TickRangeResponse
from clmm_planner.application.dto.pool_price import GetPoolPriceInput
from clmm_planner.application.dto.tick_range import ComputeTickRangeInput
from clmm_planner.application.use_cases.compute_tick_range import ComputeTickRangeUseCase
from clmm_planner.application.use_cases.get_pool_price import GetPoolPriceUseCase
from clmm_planner.domain.exceptions import (
    InvalidPriceError,
    InvalidRangeError,
    PlanInputError,
    PoolNotFoundError,
    PoolReadError,
    PoolUnavailableError,
)

router = APIRouter()


@router.get("/v1/pools/{pool_id}/price", response_model=PoolPriceResponse)
def get_pool_price(
    pool_id: str,
    use_case: GetPoolPriceUseCase = Depends(get_pool_price_use_case),
):
    try:
        result = use_case.execute(GetPoolPriceInput(pool_id=resolve_pool_id(pool_id)))
    except PoolNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except InvalidPriceError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except PoolReadError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc

    return PoolPriceResponse(
        pool_id=result.pool_id,
        asset_a=result.asset_a,
        asset_b=result.asset_b,
        price=result.price,
        current_tick=result.current_tick,
        sqrt_price_raw=str(result.sqrt_price_raw),
        liquidity=str(result.liquidity),
        paused=result.paused,
    )


@router.post("/v1/tick-range", response_model=TickRangeResponse)
def compute_tick_range(
    req: TickRangeRequest,
    use_case: ComputeTickRangeUseCase = Depends(get_compute_tick_range_use_case),
):
    try:
        result = use_case.execute(
            ComputeTickRangeInput(
                pool_id=resolve_pool_id(req.pool_id),
                width_in_spacings=req.width_in_spacings,
                range_preset=req.range_preset,
            )
        )
    except PoolNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except PoolUnavailableError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    except (InvalidRangeError, PlanInputError) as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except PoolReadError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc

    return TickRangeResponse(
        pool_id=result.pool_id,
        current_tick=result.current_tick,
        tick_spacing=result.tick_spacing,
        tick_lower=result.tick_range.lower,
        tick_upper=result.tick_range.upper,
        tick_lower_encoded=str(result.tick_lower_encoded),
        tick_upper_encoded=str(result.tick_upper_encoded),
        lower_price=result.lower_price,
        upper_price=result.upper_price,
    )
