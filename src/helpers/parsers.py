"""Parsing utilities for amount and flag conversions."""

from decimal import Decimal, InvalidOperation, localcontext


TRUTHY_VALUES = frozenset({"1", "true", "yes", "on"})
FALSY_VALUES = frozenset({"", "0", "false", "no", "off"})


def to_minor_units(amount: Decimal | int | str, decimals: int) -> int:
    """Convert a major-unit amount to integer minor units.

    Scaling is exact: the amount is multiplied by 10**decimals as a Decimal
    and truncated toward zero. Floats are never involved.

    Args:
        amount: Amount in major (display) units
        decimals: Number of chain decimals

    Returns:
        int: Amount in minor units

    Raises:
        ValueError: If decimals is negative or amount is not a finite number

    Example:
        >>> to_minor_units(Decimal("1.5"), 10)
        15000000000
        >>> to_minor_units(3, 0)
        3
        >>> to_minor_units("0.000000000019", 10)
        0
    """
    if decimals < 0:
        msg = f"Chain decimals must be non-negative, got {decimals}"
        raise ValueError(msg)

    value = parse_decimal(amount)
    if not value.is_finite():
        msg = f"Amount must be finite, got {amount!r}"
        raise ValueError(msg)

    # scaleb rounds to context precision once the coefficient is long enough
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, len(value.as_tuple().digits) + decimals + 1)
        return int(value.scaleb(decimals))


def from_minor_units(amount: int, decimals: int) -> Decimal:
    """Convert integer minor units back to a major-unit Decimal for display.

    Example:
        >>> from_minor_units(15000000000, 10)
        Decimal('1.5000000000')
    """
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, len(str(abs(amount))) + 1)
        return Decimal(amount).scaleb(-decimals)


def parse_decimal(value: Decimal | int | str) -> Decimal:
    """Parse a decimal number from a config or whitelist value.

    Example:
        >>> parse_decimal("12.50")
        Decimal('12.50')

    Raises:
        ValueError: If the value is not a decimal number
    """
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value).strip())
    except InvalidOperation as e:
        msg = f"Invalid decimal value: {value!r}"
        raise ValueError(msg) from e


def parse_bool(value: str | None, default: bool = False) -> bool:
    """Parse a boolean flag from an environment string.

    Example:
        >>> parse_bool("true")
        True
        >>> parse_bool(None)
        False

    Raises:
        ValueError: If the value is not a recognised flag
    """
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in TRUTHY_VALUES:
        return True
    if normalized in FALSY_VALUES:
        return False
    msg = f"Invalid boolean value: {value!r}"
    raise ValueError(msg)


__all__ = [
    "from_minor_units",
    "parse_bool",
    "parse_decimal",
    "to_minor_units",
]
