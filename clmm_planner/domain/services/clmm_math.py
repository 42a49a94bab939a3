from __future__ import annotations

from decimal import ROUND_FLOOR, Decimal, InvalidOperation, localcontext

from clmm_planner.domain.exceptions import InvalidPriceError


# sqrt prices are Q64.64 fixed point: value = sqrt(price) * 2^64.
Q64 = 2**64
PRECISION = 80
TICK_BASE = Decimal("1.0001")

# Extreme sqrt prices the pool accepts as swap limits (ticks -443636 and 443636).
MIN_SQRT_PRICE = 4295048016
MAX_SQRT_PRICE = 79226673515401279992447579055


def sqrt_price_to_price(sqrt_price_raw: int, decimals_a: int, decimals_b: int) -> Decimal:
    """Human price of the pool for a raw Q64.64 sqrt price.

    The decimal adjustment is derived from the assets' metadata only:
    ``price = (sqrt_price_raw / 2^64)^2 * 10^(decimals_b - decimals_a)``.
    """
    if sqrt_price_raw < 0:
        raise InvalidPriceError("sqrt_price_raw must not be negative.")
    with localcontext() as ctx:
        ctx.prec = PRECISION
        sqrt_price = Decimal(sqrt_price_raw) / Decimal(Q64)
        raw_price = sqrt_price * sqrt_price
        return raw_price * _decimal_adjust(decimals_a, decimals_b)


def price_to_sqrt_price_raw(
    price: Decimal | int | float | str,
    *,
    decimals_a: int = 0,
    decimals_b: int = 0,
) -> int:
    value = _positive_price(price)
    with localcontext() as ctx:
        ctx.prec = PRECISION
        raw_price = value / _decimal_adjust(decimals_a, decimals_b)
        scaled = raw_price.sqrt() * Decimal(Q64)
        return int(scaled.to_integral_value(rounding=ROUND_FLOOR))


def price_to_tick(price: Decimal | int | float | str) -> int:
    value = _positive_price(price)
    with localcontext() as ctx:
        ctx.prec = PRECISION
        tick_value = value.ln() / TICK_BASE.ln()
        return int(tick_value.to_integral_value(rounding=ROUND_FLOOR))


def tick_to_price(tick: int, decimals_a: int, decimals_b: int) -> Decimal:
    with localcontext() as ctx:
        ctx.prec = PRECISION
        return (TICK_BASE ** int(tick)) * _decimal_adjust(decimals_a, decimals_b)


def sqrt_price_limit(a_to_b: bool) -> int:
    # A->B pushes the price down, B->A pushes it up.
    return MIN_SQRT_PRICE if a_to_b else MAX_SQRT_PRICE


def estimate_swap_output(*, sqrt_price_raw: int, amount_in: int, a_to_b: bool) -> int:
    """Fee-less output estimate at the current price, in smallest units.

    The pool resolves the real amount at execution time; this value is only a
    planning hint.
    """
    if sqrt_price_raw <= 0:
        raise ValueError("sqrt_price_raw must be positive.")
    if amount_in < 0:
        raise ValueError("amount_in must not be negative.")
    price_x128 = sqrt_price_raw * sqrt_price_raw
    if a_to_b:
        return (amount_in * price_x128) >> 128
    return (amount_in << 128) // price_x128


def _decimal_adjust(decimals_a: int, decimals_b: int) -> Decimal:
    return Decimal(10) ** (int(decimals_b) - int(decimals_a))


def _positive_price(price: Decimal | int | float | str) -> Decimal:
    try:
        value = Decimal(str(price)) if isinstance(price, float) else Decimal(price)
    except (InvalidOperation, TypeError, ValueError) as exc:
        raise InvalidPriceError(f"invalid price: {price!r}") from exc
    if not value.is_finite() or value <= 0:
        raise InvalidPriceError("price must be positive.")
    return value
