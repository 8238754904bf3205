"""Structural protocols for the collaborators the order pipeline consumes.

Any object whose shape matches these protocols can be plugged into the
``OrderFactory`` without explicit inheritance: the HTTP market-data client,
a caching wrapper around it, or an in-memory fake in tests.
"""

from typing import Any, Protocol, runtime_checkable

from clob_orders.orders.models import OrderBook, OrderType, SignedOrder


@runtime_checkable
class MarketDataSource(Protocol):
    """Read-only market facts needed to build an order for a token."""

    def get_tick_size(self, token_id: str) -> str:
        """Return the market's minimum tick size as a decimal string."""
        ...

    def get_fee_rate_bps(self, token_id: str) -> int:
        """Return the market's fee rate in basis points."""
        ...

    def get_neg_risk(self, token_id: str) -> bool:
        """Return whether the market settles through the neg-risk exchange."""
        ...

    def get_order_book(self, token_id: str) -> OrderBook:
        """Return the current order book snapshot."""
        ...


@runtime_checkable
class OrderPoster(Protocol):
    """Submission collaborator that receives signed orders."""

    def post_order(self, signed_order: SignedOrder, order_type: OrderType) -> Any:
        """Submit a signed order and return the raw response."""
        ...
