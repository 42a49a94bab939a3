from __future__ import annotations

from dataclasses import dataclass
import logging
from threading import Lock
import time
from typing import Any

import httpx


logger = logging.getLogger(__name__)


class SuiRpcError(RuntimeError):
    pass


class SuiRpcResponseError(SuiRpcError):
    """The node answered with a JSON-RPC error object."""


@dataclass(frozen=True)
class SuiRpcClientSettings:
    rpc_url: str
    timeout_seconds: float
    max_retries: int


class SuiRpcClient:
    def __init__(self, settings: SuiRpcClientSettings):
        self._settings = settings
        self._request_id = 0
        self._lock = Lock()

    def call(self, method: str, params: list[Any]) -> Any:
        attempts = max(1, self._settings.max_retries)
        delay = 0.25
        last_exc: Exception | None = None

        for attempt in range(1, attempts + 1):
            with self._lock:
                self._request_id += 1
                request_id = self._request_id
            body = {
                "jsonrpc": "2.0",
                "id": request_id,
                "method": method,
                "params": params,
            }
            try:
                with httpx.Client(timeout=self._settings.timeout_seconds) as client:
                    response = client.post(self._settings.rpc_url, json=body)
                    response.raise_for_status()
                    payload = response.json()
            except (httpx.HTTPError, ValueError) as exc:
                last_exc = exc
                if attempt == attempts:
                    break
                logger.warning(
                    "sui_rpc_client: rpc_retry method=%s attempt=%s/%s error=%s",
                    method,
                    attempt,
                    attempts,
                    exc,
                )
                time.sleep(delay)
                delay *= 2
                continue

            error = payload.get("error")
            if error:
                message = error.get("message", error) if isinstance(error, dict) else error
                raise SuiRpcResponseError(f"{method} failed: {message}")
            return payload.get("result")

        raise SuiRpcError(f"{method} failed after retries: {last_exc}") from last_exc
