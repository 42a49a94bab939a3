from __future__ import annotations

from typing import Protocol

from clmm_planner.domain.entities.pool import CoinFragment


class CoinInventoryPort(Protocol):
    def list_coins(self, *, owner: str, asset: str) -> list[CoinFragment]:
        ...
