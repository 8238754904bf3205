"""Rounding policy table and fixed-point helpers.

Each supported tick size maps to the number of decimal places allowed for
price, size, and the derived collateral amount.  An unmapped tick size is a
configuration error, never a silent default.
"""

from decimal import ROUND_CEILING, ROUND_FLOOR, ROUND_HALF_UP, Decimal

from clob_orders.orders.exceptions import UnsupportedTickSizeError
from clob_orders.orders.models import RoundConfig

TOKEN_DECIMALS = 6

ROUNDING_CONFIG: dict[str, RoundConfig] = {
    "0.1": RoundConfig(price=1, size=2, amount=3),
    "0.01": RoundConfig(price=2, size=2, amount=4),
    "0.001": RoundConfig(price=3, size=2, amount=5),
    "0.0001": RoundConfig(price=4, size=2, amount=6),
}

_TOKEN_SCALE = Decimal(10) ** TOKEN_DECIMALS


def get_rounding_config(tick_size: str) -> RoundConfig:
    """Return the rounding policy for a tick size.

    Raises:
        UnsupportedTickSizeError: If the tick size is not in the table.

    """
    try:
        return ROUNDING_CONFIG[tick_size]
    except KeyError:
        raise UnsupportedTickSizeError(tick_size) from None


def _exponent(places: int) -> Decimal:
    return Decimal(1).scaleb(-places)


def round_down(value: Decimal, places: int) -> Decimal:
    """Round towards negative infinity to ``places`` decimals."""
    return value.quantize(_exponent(places), rounding=ROUND_FLOOR)


def round_up(value: Decimal, places: int) -> Decimal:
    """Round towards positive infinity to ``places`` decimals."""
    return value.quantize(_exponent(places), rounding=ROUND_CEILING)


def round_normal(value: Decimal, places: int) -> Decimal:
    """Round half away from zero to ``places`` decimals."""
    return value.quantize(_exponent(places), rounding=ROUND_HALF_UP)


def decimal_places(value: Decimal) -> int:
    """Return the number of significant decimal places in ``value``.

    Trailing zeros do not count, so ``Decimal("1.50")`` has one place.
    """
    exponent = value.normalize().as_tuple().exponent
    if not isinstance(exponent, int):
        msg = f"Cannot count decimal places of {value}"
        raise ValueError(msg)
    return max(0, -exponent)


def fit_amount(value: Decimal, places: int) -> Decimal:
    """Reduce a derived amount to at most ``places`` decimals.

    Round up at four extra places first to absorb representation noise
    from the multiplication, then truncate if still too precise.
    """
    if decimal_places(value) > places:
        value = round_up(value, places + 4)
        if decimal_places(value) > places:
            value = round_down(value, places)
    return value


def to_token_decimals(value: Decimal) -> int:
    """Convert a decimal amount to integer units with six decimals."""
    return int((value * _TOKEN_SCALE).quantize(Decimal(1), rounding=ROUND_HALF_UP))
