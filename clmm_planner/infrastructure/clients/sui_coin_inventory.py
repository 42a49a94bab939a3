from __future__ import annotations

import logging

from clmm_planner.application.ports.coin_inventory_port import CoinInventoryPort
from clmm_planner.domain.entities.pool import CoinFragment
from clmm_planner.domain.exceptions import PoolReadError
from clmm_planner.infrastructure.clients.sui_rpc_client import SuiRpcClient, SuiRpcError


logger = logging.getLogger(__name__)


class SuiCoinInventory(CoinInventoryPort):
    def __init__(self, rpc_client: SuiRpcClient, *, page_size: int = 50):
        self._rpc = rpc_client
        self._page_size = page_size

    def list_coins(self, *, owner: str, asset: str) -> list[CoinFragment]:
        fragments: list[CoinFragment] = []
        cursor: str | None = None
        pages = 0
        while True:
            try:
                page = self._rpc.call("suix_getCoins", [owner, asset, cursor, self._page_size])
            except SuiRpcError as exc:
                raise PoolReadError(str(exc)) from exc
            pages += 1
            for row in (page or {}).get("data") or []:
                fragments.append(
                    CoinFragment(
                        coin_id=row["coinObjectId"],
                        asset=row.get("coinType", asset),
                        balance=int(row["balance"]),
                    )
                )
            cursor = (page or {}).get("nextCursor")
            if not (page or {}).get("hasNextPage") or cursor is None:
                break

        logger.info(
            "sui_coin_inventory: fetched_coins owner=%s asset=%s fragments=%s pages=%s",
            owner,
            asset,
            len(fragments),
            pages,
        )
        return fragments
