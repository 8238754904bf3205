"""Resolve tick size, fee rate, and neg-risk for a token.

Each resolver prefers a caller override and otherwise asks the market data
source.  Errors propagate immediately; nothing here retries or defaults.
"""

import logging
from decimal import Decimal

from clob_orders.orders.exceptions import (
    FeeRateMismatchError,
    InvalidPriceError,
    InvalidTickSizeError,
)
from clob_orders.orders.models import ONE, ZERO, TickSize
from clob_orders.orders.protocols import MarketDataSource

logger = logging.getLogger(__name__)


def is_tick_size_smaller(tick_size: str, other: str) -> bool:
    """Return ``True`` when ``tick_size`` is a finer increment than ``other``."""
    return Decimal(tick_size) < Decimal(other)


def resolve_tick_size(
    market_data: MarketDataSource,
    token_id: str,
    tick_size: TickSize | None = None,
) -> str:
    """Return the tick size to use for an order.

    Args:
        market_data: Source of the market's minimum tick size.
        token_id: CLOB token identifier.
        tick_size: Optional caller override.

    Returns:
        The override when it is at least as coarse as the market minimum,
        otherwise the market minimum.

    Raises:
        InvalidTickSizeError: If the override is finer than the market minimum.

    """
    minimum = market_data.get_tick_size(token_id)
    if tick_size is None:
        logger.debug("Tick size for %s resolved from market: %s", token_id, minimum)
        return minimum
    if is_tick_size_smaller(tick_size, minimum):
        raise InvalidTickSizeError(tick_size, minimum)
    return tick_size


def resolve_fee_rate(
    market_data: MarketDataSource,
    token_id: str,
    user_fee_rate_bps: int = 0,
) -> int:
    """Return the market fee rate after checking the caller's hint.

    A user rate of 0 always defers to the market.

    Raises:
        FeeRateMismatchError: If both rates are non-zero and differ.

    """
    market_fee_rate_bps = market_data.get_fee_rate_bps(token_id)
    if market_fee_rate_bps > 0 and user_fee_rate_bps > 0 and user_fee_rate_bps != market_fee_rate_bps:
        raise FeeRateMismatchError(user_fee_rate_bps, market_fee_rate_bps)
    return market_fee_rate_bps


def resolve_neg_risk(
    market_data: MarketDataSource,
    token_id: str,
    neg_risk: bool | None = None,
) -> bool:
    """Return the caller's neg-risk override or the market classification."""
    if neg_risk is not None:
        return neg_risk
    return market_data.get_neg_risk(token_id)


def price_valid(price: Decimal, tick_size: str) -> bool:
    """Return ``True`` when ``price`` is a tick multiple within ``[tick, 1 - tick]``."""
    tick = Decimal(tick_size)
    if price < tick or price > ONE - tick:
        return False
    return price % tick == ZERO


def validate_price(price: Decimal, tick_size: str) -> None:
    """Raise ``InvalidPriceError`` unless ``price`` is valid for ``tick_size``."""
    if not price_valid(price, tick_size):
        tick = Decimal(tick_size)
        raise InvalidPriceError(price, tick, ONE - tick)
