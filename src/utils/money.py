"""Helpers for minor-unit money normalization."""

from decimal import Decimal


def coerce_minor_units(value) -> int:
    """Normalize numeric values to integer minor units.

    Args:
        value: Raw numeric value from SQL or adapters.

    Returns:
        int: Normalized amount in minor units.

    Raises:
        ValueError: If the value is not integral.
    """
    if value is None:
        return 0
    if isinstance(value, bool):
        raise ValueError(f"Not a money amount: {value!r}")
    if isinstance(value, int):
        return value
    decimal_value = value if isinstance(value, Decimal) else Decimal(str(value))
    if decimal_value != decimal_value.to_integral_value():
        raise ValueError(f"Amount is not in minor units: {value!r}")
    return int(decimal_value)


def format_minor_units(value: int, symbol: str = "R$") -> str:
    """Format minor units for display.

    Args:
        value: Amount in minor units.
        symbol: Currency symbol prefix.

    Returns:
        str: Human readable amount such as ``R$ 1,234.56``.
    """
    sign = "-" if value < 0 else ""
    units, cents = divmod(abs(value), 100)
    return f"{sign}{symbol} {units:,}.{cents:02d}"


__all__ = ["coerce_minor_units", "format_minor_units"]
