"""Helpers for Decimal normalization."""

from decimal import Decimal, InvalidOperation


def coerce_decimal(value) -> Decimal:
    """Normalize numeric values to Decimal.

    ERP rows and bank feeds deliver money as ints, floats, strings or
    already-built Decimals. Floats go through ``str`` so that ``0.1``
    becomes ``Decimal("0.1")`` rather than its binary expansion.

    Args:
        value: Raw numeric value from SQL or adapters.

    Returns:
        Decimal: Normalized numeric value, ``0`` for missing values.

    Raises:
        ValueError: If the value cannot be read as a number.
    """
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return Decimal("0")
    try:
        return Decimal(str(value))
    except InvalidOperation as exc:
        raise ValueError(f"Not a numeric value: {value!r}") from exc


def coerce_int(value) -> int:
    """Normalize day counters such as GECIKMEGUN to int."""
    if value is None or value == "":
        return 0
    return int(coerce_decimal(value))


__all__ = ["coerce_decimal", "coerce_int"]
