"""Derive an execution price for a market order from order book depth.

Walk the relevant side of the book from the best level outwards and return
the size-weighted average price of the levels the order would consume.
"""

from collections.abc import Sequence
from decimal import ROUND_CEILING, ROUND_FLOOR, Decimal

from clob_orders.orders.exceptions import (
    InsufficientLiquidityError,
    InvalidSideError,
    NoMatchingLiquidityError,
)
from clob_orders.orders.models import ZERO, OrderBook, OrderLevel, OrderType, Side


def calculate_buy_market_price(
    asks: Sequence[OrderLevel],
    amount: Decimal,
    order_type: OrderType,
) -> Decimal:
    """Return the average price paid when spending ``amount`` collateral.

    Args:
        asks: Ask levels ordered by ascending price.
        amount: Collateral notional to spend.
        order_type: ``OrderType.FOK`` requires the whole notional to fill.

    Returns:
        Size-weighted average price over the consumed levels.

    Raises:
        NoMatchingLiquidityError: If there are no asks.
        InsufficientLiquidityError: If a FOK order cannot be filled in full.

    """
    if not asks:
        raise NoMatchingLiquidityError("no asks to match a BUY order")

    remaining = amount
    filled_size = ZERO
    cost = ZERO
    for level in asks:
        level_cost = level.price * level.size
        if level_cost >= remaining:
            filled_size += remaining / level.price
            cost += remaining
            remaining = ZERO
            break
        filled_size += level.size
        cost += level_cost
        remaining -= level_cost

    if remaining > ZERO and order_type is OrderType.FOK:
        raise InsufficientLiquidityError(requested=amount, available=cost)
    if filled_size == ZERO:
        raise NoMatchingLiquidityError("asks carry no size")
    return cost / filled_size


def calculate_sell_market_price(
    bids: Sequence[OrderLevel],
    amount: Decimal,
    order_type: OrderType,
) -> Decimal:
    """Return the average price received when selling ``amount`` tokens.

    Args:
        bids: Bid levels ordered by descending price.
        amount: Number of outcome tokens to sell.
        order_type: ``OrderType.FOK`` requires the whole quantity to fill.

    Returns:
        Size-weighted average price over the consumed levels.

    Raises:
        NoMatchingLiquidityError: If there are no bids.
        InsufficientLiquidityError: If a FOK order cannot be filled in full.

    """
    if not bids:
        raise NoMatchingLiquidityError("no bids to match a SELL order")

    remaining = amount
    filled_size = ZERO
    proceeds = ZERO
    for level in bids:
        take = min(level.size, remaining)
        filled_size += take
        proceeds += take * level.price
        remaining -= take
        if remaining <= ZERO:
            break

    if remaining > ZERO and order_type is OrderType.FOK:
        raise InsufficientLiquidityError(requested=amount, available=filled_size)
    if filled_size == ZERO:
        raise NoMatchingLiquidityError("bids carry no size")
    return proceeds / filled_size


def align_price_to_tick(price: Decimal, tick_size: str, side: Side) -> Decimal:
    """Snap an average price onto the tick grid.

    BUY prices round up and SELL prices round down, towards the side of the
    book being consumed.  The result is still an average, not a sweep limit:
    when the walk spans several levels, the worst of them lies beyond it and
    an order at this price may not fill in full.
    """
    tick = Decimal(tick_size)
    rounding = ROUND_CEILING if side is Side.BUY else ROUND_FLOOR
    return (price / tick).to_integral_value(rounding=rounding) * tick


def calculate_market_price(
    book: OrderBook,
    side: Side,
    amount: Decimal,
    order_type: OrderType,
) -> Decimal:
    """Dispatch to the BUY or SELL calculation for an order book snapshot.

    Raises:
        InvalidSideError: If ``side`` is not a ``Side``.

    """
    if side is Side.BUY:
        return calculate_buy_market_price(book.asks, amount, order_type)
    if side is Side.SELL:
        return calculate_sell_market_price(book.bids, amount, order_type)
    msg = f"order side must be 'BUY' or 'SELL', got {side!r}"
    raise InvalidSideError(msg)
