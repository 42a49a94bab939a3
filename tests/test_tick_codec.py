from __future__ import annotations

import pytest

from clmm_planner.domain.services.tick_codec import I32_MAX, I32_MIN, decode_tick, encode_tick
from clmm_planner.domain.services.tick_range import MAX_TICK, MIN_TICK


def test_negative_tick_uses_twos_complement():
    assert encode_tick(-100) == 4294967196
    assert decode_tick(4294967196) == -100


def test_non_negative_tick_is_unchanged():
    assert encode_tick(0) == 0
    assert encode_tick(443636) == 443636
    assert decode_tick(443636) == 443636


@pytest.mark.parametrize("tick", [I32_MIN, MIN_TICK, -6000, -1, 0, 1, 6000, MAX_TICK, I32_MAX])
def test_round_trip_at_edges(tick: int):
    assert decode_tick(encode_tick(tick)) == tick


def test_round_trip_over_planner_tick_domain():
    for tick in range(MIN_TICK, MAX_TICK + 1, 997):
        assert decode_tick(encode_tick(tick)) == tick


def test_decode_threshold():
    assert decode_tick(2**31 - 1) == 2**31 - 1
    assert decode_tick(2**31) == -(2**31)
    assert decode_tick(2**32 - 1) == -1


@pytest.mark.parametrize("tick", [I32_MIN - 1, I32_MAX + 1])
def test_encode_rejects_values_outside_i32(tick: int):
    with pytest.raises(ValueError):
        encode_tick(tick)


@pytest.mark.parametrize("value", [-1, 2**32])
def test_decode_rejects_values_outside_u32(value: int):
    with pytest.raises(ValueError):
        decode_tick(value)
