from __future__ import annotations


# Ticks are i32 on chain but travel as u32 in the transaction encoding.
I32_MIN = -(2**31)
I32_MAX = 2**31 - 1
U32_MAX = 2**32 - 1
U32_MODULUS = 2**32


def encode_tick(tick: int) -> int:
    tick = int(tick)
    if tick < I32_MIN or tick > I32_MAX:
        raise ValueError(f"tick {tick} is outside the i32 range.")
    if tick >= 0:
        return tick
    return U32_MODULUS + tick


def decode_tick(value: int) -> int:
    value = int(value)
    if value < 0 or value > U32_MAX:
        raise ValueError(f"value {value} is outside the u32 range.")
    if value > I32_MAX:
        return value - U32_MODULUS
    return value
