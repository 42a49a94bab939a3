from __future__ import annotations

import logging
from threading import Lock
from typing import Any

from clmm_planner.application.ports.pool_reader_port import PoolReaderPort
from clmm_planner.domain.entities.pool import PoolState
from clmm_planner.domain.exceptions import PoolReadError
from clmm_planner.domain.services.tick_codec import decode_tick
from clmm_planner.infrastructure.clients.sui_rpc_client import SuiRpcClient, SuiRpcError


logger = logging.getLogger(__name__)


class SuiPoolReader(PoolReaderPort):
    """Reads CLMM pool objects via sui_getObject and coin decimals via suix_getCoinMetadata."""

    def __init__(self, rpc_client: SuiRpcClient):
        self._rpc = rpc_client
        self._decimals_cache: dict[str, int] = {}
        self._lock = Lock()

    def get_pool_state(self, *, pool_id: str) -> PoolState | None:
        try:
            result = self._rpc.call(
                "sui_getObject",
                [pool_id, {"showType": True, "showContent": True}],
            )
        except SuiRpcError as exc:
            raise PoolReadError(str(exc)) from exc

        data = (result or {}).get("data")
        if not data:
            logger.info("sui_pool_reader: pool_not_found pool=%s", pool_id)
            return None

        content = data.get("content") or {}
        if content.get("dataType") != "moveObject":
            raise PoolReadError(f"Object {pool_id} is not a pool.")

        type_arguments = parse_type_arguments(content.get("type") or data.get("type") or "")
        if len(type_arguments) != 2:
            raise PoolReadError(f"Object {pool_id} does not expose two coin types.")
        asset_a, asset_b = type_arguments

        fields = content.get("fields") or {}
        try:
            pool = PoolState(
                pool_id=pool_id,
                asset_a=asset_a,
                asset_b=asset_b,
                decimals_a=self._coin_decimals(asset_a),
                decimals_b=self._coin_decimals(asset_b),
                tick_spacing=int(fields["tick_spacing"]),
                current_tick=decode_tick(_tick_bits(fields["current_tick_index"])),
                sqrt_price_raw=int(fields["current_sqrt_price"]),
                liquidity=int(fields.get("liquidity") or 0),
                paused=bool(fields.get("is_pause", False)),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise PoolReadError(f"Malformed pool object {pool_id}: {exc}") from exc

        logger.info(
            "sui_pool_reader: fetched_pool pool=%s tick=%s spacing=%s liquidity=%s paused=%s",
            pool.pool_id,
            pool.current_tick,
            pool.tick_spacing,
            pool.liquidity,
            pool.paused,
        )
        return pool

    def _coin_decimals(self, coin_type: str) -> int:
        with self._lock:
            cached = self._decimals_cache.get(coin_type)
        if cached is not None:
            return cached

        try:
            metadata = self._rpc.call("suix_getCoinMetadata", [coin_type])
        except SuiRpcError as exc:
            raise PoolReadError(str(exc)) from exc
        if not metadata or metadata.get("decimals") is None:
            raise PoolReadError(f"Coin metadata not found for {coin_type}.")

        decimals = int(metadata["decimals"])
        with self._lock:
            self._decimals_cache[coin_type] = decimals
        return decimals


def parse_type_arguments(type_tag: str) -> list[str]:
    """Top-level generic arguments of a Move type tag, e.g. ``Pool<A, B>`` -> [A, B]."""
    start = type_tag.find("<")
    end = type_tag.rfind(">")
    if start < 0 or end <= start:
        return []

    inner = type_tag[start + 1 : end]
    result: list[str] = []
    depth = 0
    current: list[str] = []
    for char in inner:
        if char == "<":
            depth += 1
        elif char == ">":
            depth -= 1
        if char == "," and depth == 0:
            result.append("".join(current).strip())
            current = []
            continue
        current.append(char)
    tail = "".join(current).strip()
    if tail:
        result.append(tail)
    return result


def _tick_bits(value: Any) -> int:
    # I32 ticks arrive either as {"fields": {"bits": n}} or already flattened.
    if isinstance(value, dict):
        nested = value.get("fields", value)
        return int(nested["bits"])
    return int(value)
