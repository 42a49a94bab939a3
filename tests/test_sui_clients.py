from __future__ import annotations

import logging

import httpx
import pytest

from clmm_planner.domain.exceptions import PoolReadError
from clmm_planner.infrastructure.clients.sui_coin_inventory import SuiCoinInventory
from clmm_planner.infrastructure.clients.sui_pool_reader import SuiPoolReader, parse_type_arguments
from clmm_planner.infrastructure.clients.sui_rpc_client import (
    SuiRpcClient,
    SuiRpcClientSettings,
    SuiRpcError,
    SuiRpcResponseError,
)
from clmm_planner.infrastructure.trace.logging_plan_trace import LoggingPlanTrace


POOL_TYPE = (
    "0x1eab::pool::Pool<0x2::sui::SUI, "
    "0xdba3::usdc::USDC>"
)


def _make_client(*, max_retries: int = 1) -> SuiRpcClient:
    return SuiRpcClient(
        SuiRpcClientSettings(
            rpc_url="https://fullnode.example/",
            timeout_seconds=5,
            max_retries=max_retries,
        )
    )


def _pool_object(*, tick_bits, is_pause: bool = False) -> dict:
    return {
        "data": {
            "objectId": "0xpool",
            "type": POOL_TYPE,
            "content": {
                "dataType": "moveObject",
                "type": POOL_TYPE,
                "fields": {
                    "tick_spacing": 60,
                    "current_tick_index": tick_bits,
                    "current_sqrt_price": str(2**64),
                    "liquidity": "5000",
                    "is_pause": is_pause,
                },
            },
        }
    }


def _scripted_call(responses: dict[str, list]):
    calls: list[tuple[str, list]] = []

    def fake_call(method: str, params: list):
        calls.append((method, params))
        return responses[method].pop(0)

    return fake_call, calls


def test_parse_type_arguments_handles_nested_generics():
    assert parse_type_arguments(POOL_TYPE) == ["0x2::sui::SUI", "0xdba3::usdc::USDC"]
    assert parse_type_arguments("0x1::pool::Pool<0x1::a::Wrap<0x1::b::B, 0x1::c::C>, 0x2::sui::SUI>") == [
        "0x1::a::Wrap<0x1::b::B, 0x1::c::C>",
        "0x2::sui::SUI",
    ]
    assert parse_type_arguments("0x2::coin::Coin") == []


def test_pool_reader_decodes_negative_tick_and_metadata(monkeypatch: pytest.MonkeyPatch):
    client = _make_client()
    fake_call, calls = _scripted_call(
        {
            "sui_getObject": [
                _pool_object(tick_bits={"type": "0x1::i32::I32", "fields": {"bits": 4294967196}}),
                _pool_object(tick_bits=120, is_pause=True),
            ],
            "suix_getCoinMetadata": [{"decimals": 9}, {"decimals": 6}],
        }
    )
    monkeypatch.setattr(client, "call", fake_call)
    reader = SuiPoolReader(client)

    pool = reader.get_pool_state(pool_id="0xpool")

    assert pool is not None
    assert pool.asset_a == "0x2::sui::SUI"
    assert pool.asset_b == "0xdba3::usdc::USDC"
    assert (pool.decimals_a, pool.decimals_b) == (9, 6)
    assert pool.current_tick == -100
    assert pool.tick_spacing == 60
    assert pool.sqrt_price_raw == 2**64
    assert pool.liquidity == 5000
    assert pool.paused is False

    second = reader.get_pool_state(pool_id="0xpool")

    assert second is not None
    assert second.current_tick == 120
    assert second.paused is True
    assert [method for method, _ in calls].count("suix_getCoinMetadata") == 2


def test_pool_reader_returns_none_for_missing_object(monkeypatch: pytest.MonkeyPatch):
    client = _make_client()
    monkeypatch.setattr(client, "call", lambda method, params: {"error": {"code": "notExists"}})

    assert SuiPoolReader(client).get_pool_state(pool_id="0xmissing") is None


def test_pool_reader_rejects_non_pool_objects(monkeypatch: pytest.MonkeyPatch):
    client = _make_client()
    payload = {"data": {"content": {"dataType": "package"}}}
    monkeypatch.setattr(client, "call", lambda method, params: payload)

    with pytest.raises(PoolReadError):
        SuiPoolReader(client).get_pool_state(pool_id="0xpackage")


def test_pool_reader_maps_rpc_failures(monkeypatch: pytest.MonkeyPatch):
    client = _make_client()

    def failing_call(method: str, params: list):
        raise SuiRpcError("node unreachable")

    monkeypatch.setattr(client, "call", failing_call)

    with pytest.raises(PoolReadError, match="node unreachable"):
        SuiPoolReader(client).get_pool_state(pool_id="0xpool")


def test_pool_reader_requires_coin_metadata(monkeypatch: pytest.MonkeyPatch):
    client = _make_client()
    fake_call, _ = _scripted_call(
        {
            "sui_getObject": [_pool_object(tick_bits=0)],
            "suix_getCoinMetadata": [None],
        }
    )
    monkeypatch.setattr(client, "call", fake_call)

    with pytest.raises(PoolReadError):
        SuiPoolReader(client).get_pool_state(pool_id="0xpool")


def test_coin_inventory_follows_pagination(monkeypatch: pytest.MonkeyPatch):
    client = _make_client()
    fake_call, calls = _scripted_call(
        {
            "suix_getCoins": [
                {
                    "data": [
                        {"coinType": "0x2::sui::SUI", "coinObjectId": "0xc1", "balance": "100"},
                        {"coinType": "0x2::sui::SUI", "coinObjectId": "0xc2", "balance": "250"},
                    ],
                    "nextCursor": "0xc2",
                    "hasNextPage": True,
                },
                {
                    "data": [{"coinType": "0x2::sui::SUI", "coinObjectId": "0xc3", "balance": "7"}],
                    "nextCursor": "0xc3",
                    "hasNextPage": False,
                },
            ]
        }
    )
    monkeypatch.setattr(client, "call", fake_call)

    rows = SuiCoinInventory(client, page_size=2).list_coins(owner="0xowner", asset="0x2::sui::SUI")

    assert [row.coin_id for row in rows] == ["0xc1", "0xc2", "0xc3"]
    assert sum(row.balance for row in rows) == 357
    assert calls[0][1] == ["0xowner", "0x2::sui::SUI", None, 2]
    assert calls[1][1] == ["0xowner", "0x2::sui::SUI", "0xc2", 2]


class _FakeResponse:
    def __init__(self, payload: dict):
        self._payload = payload

    def raise_for_status(self) -> None:
        return None

    def json(self) -> dict:
        return self._payload


class _FakeHttpClient:
    script: list = []
    bodies: list[dict] = []

    def __init__(self, *, timeout: float):
        _ = timeout

    def __enter__(self) -> "_FakeHttpClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        _ = (exc_type, exc, tb)
        return None

    def post(self, url: str, *, json: dict) -> _FakeResponse:
        _ = url
        _FakeHttpClient.bodies.append(json)
        outcome = _FakeHttpClient.script.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return _FakeResponse(outcome)


def _install_fake_http(monkeypatch: pytest.MonkeyPatch, script: list) -> None:
    _FakeHttpClient.script = list(script)
    _FakeHttpClient.bodies = []
    monkeypatch.setattr(
        "clmm_planner.infrastructure.clients.sui_rpc_client.httpx.Client",
        _FakeHttpClient,
    )
    monkeypatch.setattr(
        "clmm_planner.infrastructure.clients.sui_rpc_client.time.sleep",
        lambda _seconds: None,
    )


def test_rpc_client_retries_transport_errors(monkeypatch: pytest.MonkeyPatch):
    _install_fake_http(
        monkeypatch,
        [
            httpx.ConnectError("connection refused"),
            {"jsonrpc": "2.0", "id": 2, "result": {"decimals": 9}},
        ],
    )
    client = _make_client(max_retries=3)

    result = client.call("suix_getCoinMetadata", ["0x2::sui::SUI"])

    assert result == {"decimals": 9}
    assert [body["id"] for body in _FakeHttpClient.bodies] == [1, 2]
    assert _FakeHttpClient.bodies[0]["method"] == "suix_getCoinMetadata"
    assert _FakeHttpClient.bodies[0]["jsonrpc"] == "2.0"


def test_rpc_client_gives_up_after_last_attempt(monkeypatch: pytest.MonkeyPatch):
    _install_fake_http(
        monkeypatch,
        [httpx.ConnectError("down"), httpx.ConnectError("still down")],
    )
    client = _make_client(max_retries=2)

    with pytest.raises(SuiRpcError, match="still down"):
        client.call("sui_getObject", ["0xpool", {}])


def test_rpc_client_does_not_retry_error_payloads(monkeypatch: pytest.MonkeyPatch):
    _install_fake_http(
        monkeypatch,
        [{"jsonrpc": "2.0", "id": 1, "error": {"code": -32602, "message": "Invalid params"}}],
    )
    client = _make_client(max_retries=3)

    with pytest.raises(SuiRpcResponseError, match="Invalid params"):
        client.call("suix_getCoins", [])
    assert len(_FakeHttpClient.bodies) == 1


def test_logging_plan_trace_renders_fields(caplog: pytest.LogCaptureFixture):
    trace = LoggingPlanTrace()

    with caplog.at_level(logging.INFO, logger="clmm_planner.trace"):
        trace.record("zap_planned", pool_id="0xpool", swap_amount=500)

    assert "plan_trace: zap_planned pool_id=0xpool swap_amount=500" in caplog.text
