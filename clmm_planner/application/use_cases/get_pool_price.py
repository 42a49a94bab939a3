from __future__ import annotations

from clmm_planner.application.dto.pool_price import GetPoolPriceInput, GetPoolPriceOutput
from clmm_planner.application.ports.pool_reader_port import PoolReaderPort
from clmm_planner.domain.exceptions import PoolNotFoundError
from clmm_planner.domain.services.clmm_math import sqrt_price_to_price


class GetPoolPriceUseCase:
    def __init__(self, *, pool_reader: PoolReaderPort):
        self._pool_reader = pool_reader

    def execute(self, command: GetPoolPriceInput) -> GetPoolPriceOutput:
        # Reading a price is allowed on paused pools.
        pool = self._pool_reader.get_pool_state(pool_id=command.pool_id)
        if pool is None:
            raise PoolNotFoundError("Pool not found.")

        return GetPoolPriceOutput(
            pool_id=pool.pool_id,
            asset_a=pool.asset_a,
            asset_b=pool.asset_b,
            price=sqrt_price_to_price(pool.sqrt_price_raw, pool.decimals_a, pool.decimals_b),
            current_tick=pool.current_tick,
            sqrt_price_raw=pool.sqrt_price_raw,
            liquidity=pool.liquidity,
            paused=pool.paused,
        )
