"""Polymarket CLOB market-data client used to resolve order constraints."""

from clob_orders.clients.polymarket.client import ClobMarketDataClient
from clob_orders.clients.polymarket.exceptions import (
    PolymarketAPIError,
    PolymarketError,
)

__all__ = [
    "ClobMarketDataClient",
    "PolymarketAPIError",
    "PolymarketError",
]
