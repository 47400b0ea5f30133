"""
Farmhand Sim — Money and scaling helpers
"""

from typing import Union

Number = Union[int, float]


def clamp_number(num: Number, minimum: Number, maximum: Number) -> Number:
    if num <= minimum:
        return minimum
    if num >= maximum:
        return maximum
    return num


def scale_number(value: float, minimum: float, maximum: float,
                 base_min: float, base_max: float) -> float:
    """
    Linearly map value from [minimum, maximum] onto [base_min, base_max].

    base_min may be greater than base_max, which inverts the mapping.
    The result is not clamped.
    """
    return (value - minimum) * (base_max - base_min) / (maximum - minimum) + base_min


def to_cents(value: float) -> int:
    return round(value * 100)


def cast_to_money(value: float) -> float:
    """Round to whole cents."""
    return to_cents(value) / 100


def money_total(*values: float) -> float:
    """Sum money values in integer cents to avoid float drift."""
    return sum(to_cents(v) for v in values) / 100


def _format(cents: int, precision: int, symbol: str) -> str:
    sign = "-" if cents < 0 else ""
    amount = abs(cents) / 100
    if precision == 0:
        # Half-up, matching how the engine rounds cents
        return f"{sign}{symbol}{(abs(cents) + 50) // 100:,}"
    return f"{sign}{symbol}{amount:,.{precision}f}"


def money_string(value: float) -> str:
    """Currency symbol, thousands separators and cents, e.g. $1,234.56."""
    return _format(to_cents(value), 2, "$")


def dollar_string(value: float) -> str:
    """Currency symbol and separators, cents rounded away, e.g. $1,235."""
    return _format(to_cents(value), 0, "$")


def integer_string(value: float) -> str:
    """Separators only, cents rounded away, e.g. 1,235."""
    return _format(to_cents(value), 0, "")
