"""Convert side, price, and size into integer settlement amounts.

For a BUY the maker pays collateral and receives outcome tokens; for a SELL
the roles invert.  Rounding is applied in a fixed order (price, then size,
then the derived amount) so identical inputs always yield identical integers.
"""

from decimal import Decimal

from clob_orders.orders.exceptions import InvalidSideError
from clob_orders.orders.models import RoundConfig, Side
from clob_orders.orders.rounding import (
    fit_amount,
    round_down,
    round_normal,
    to_token_decimals,
)


def _require_side(side: object) -> Side:
    if not isinstance(side, Side):
        msg = f"order side must be 'BUY' or 'SELL', got {side!r}"
        raise InvalidSideError(msg)
    return side


def get_order_amounts(
    side: Side,
    size: Decimal,
    price: Decimal,
    round_config: RoundConfig,
) -> tuple[Side, int, int]:
    """Return ``(side, maker_amount, taker_amount)`` for a limit order.

    Args:
        side: Order side.
        size: Number of outcome tokens.
        price: Limit price between 0 and 1.
        round_config: Rounding policy for the market's tick size.

    Returns:
        The side and the maker/taker amounts in six-decimal integer units.

    Raises:
        InvalidSideError: If ``side`` is not a ``Side``.

    """
    side = _require_side(side)
    raw_price = round_normal(price, round_config.price)
    raw_size = round_down(size, round_config.size)
    raw_collateral = fit_amount(raw_size * raw_price, round_config.amount)

    if side is Side.BUY:
        return side, to_token_decimals(raw_collateral), to_token_decimals(raw_size)
    return side, to_token_decimals(raw_size), to_token_decimals(raw_collateral)


def get_market_order_amounts(
    side: Side,
    amount: Decimal,
    price: Decimal,
    round_config: RoundConfig,
) -> tuple[Side, int, int]:
    """Return ``(side, maker_amount, taker_amount)`` for a market order.

    ``amount`` is the collateral to spend for a BUY and the number of tokens
    to sell for a SELL.

    Raises:
        InvalidSideError: If ``side`` is not a ``Side``.

    """
    side = _require_side(side)
    raw_price = round_down(price, round_config.price)
    raw_maker = round_down(amount, round_config.size)

    if side is Side.BUY:
        raw_taker = fit_amount(raw_maker / raw_price, round_config.amount)
    else:
        raw_taker = fit_amount(raw_maker * raw_price, round_config.amount)
    return side, to_token_decimals(raw_maker), to_token_decimals(raw_taker)


def get_raw_order_amounts(side: Side, size: Decimal, price: Decimal) -> tuple[Side, int, int]:
    """Return amounts computed from the literal price and size, unrounded.

    No tick size or rounding policy is consulted; only the final conversion
    to integer units rounds.

    Raises:
        InvalidSideError: If ``side`` is not a ``Side``.

    """
    side = _require_side(side)
    collateral = to_token_decimals(price * size)
    tokens = to_token_decimals(size)
    if side is Side.BUY:
        return side, collateral, tokens
    return side, tokens, collateral
