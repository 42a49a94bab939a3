from __future__ import annotations

import json
import os
from dataclasses import dataclass
from decimal import Decimal

from dotenv import load_dotenv


load_dotenv()


def _env(name: str, default: str | None = None) -> str | None:
    return os.getenv(name, default)


def _json(name: str) -> dict:
    value = _env(name)
    if not value:
        return {}
    return json.loads(value)


@dataclass(frozen=True)
class Settings:
    sui_rpc_url: str
    sui_rpc_timeout_seconds: float
    sui_rpc_max_retries: int
    planner_fee_buffer_bps: int
    planner_range_width_spacings: int
    planner_min_leg_fraction: Decimal
    pool_aliases: dict
    log_level: str


def get_settings() -> Settings:
    return Settings(
        sui_rpc_url=_env("SUI_RPC_URL", "https://fullnode.mainnet.sui.io:443"),
        sui_rpc_timeout_seconds=float(_env("SUI_RPC_TIMEOUT_SECONDS", "10")),
        sui_rpc_max_retries=int(_env("SUI_RPC_MAX_RETRIES", "3")),
        planner_fee_buffer_bps=int(_env("PLANNER_FEE_BUFFER_BPS", "200")),
        planner_range_width_spacings=int(_env("PLANNER_RANGE_WIDTH_SPACINGS", "50")),
        planner_min_leg_fraction=Decimal(_env("PLANNER_MIN_LEG_FRACTION", "0.01")),
        pool_aliases=_json("POOL_ALIASES"),
        log_level=_env("LOG_LEVEL", "INFO").upper(),
    )
