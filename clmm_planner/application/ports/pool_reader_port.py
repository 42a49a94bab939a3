from __future__ import annotations

from typing import Protocol

from clmm_planner.domain.entities.pool import PoolState


class PoolReaderPort(Protocol):
    def get_pool_state(self, *, pool_id: str) -> PoolState | None:
        ...
