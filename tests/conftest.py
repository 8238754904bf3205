"""Shared test configuration and fixtures."""

from collections import Counter
from dataclasses import dataclass, field

import pytest

from clob_orders.orders.models import OrderBook

# Well-known development key (Hardhat account #0); never holds real funds.
TEST_PRIVATE_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
TEST_ADDRESS = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"


@dataclass
class FakeMarketData:
    """In-memory ``MarketDataSource`` that counts calls per method."""

    tick_size: str = "0.01"
    fee_rate_bps: int = 0
    neg_risk: bool = False
    book: OrderBook | None = None
    calls: Counter[str] = field(default_factory=Counter)

    def get_tick_size(self, token_id: str) -> str:
        """Return the configured tick size."""
        self.calls["tick_size"] += 1
        return self.tick_size

    def get_fee_rate_bps(self, token_id: str) -> int:
        """Return the configured fee rate."""
        self.calls["fee_rate"] += 1
        return self.fee_rate_bps

    def get_neg_risk(self, token_id: str) -> bool:
        """Return the configured neg-risk flag."""
        self.calls["neg_risk"] += 1
        return self.neg_risk

    def get_order_book(self, token_id: str) -> OrderBook:
        """Return the configured book, or an empty one."""
        self.calls["order_book"] += 1
        if self.book is None:
            return OrderBook(token_id=token_id, bids=(), asks=())
        return self.book


@pytest.fixture
def market_data() -> FakeMarketData:
    """Provide a fresh fake market data source."""
    return FakeMarketData()


@pytest.fixture
def private_key() -> str:
    """Provide the test signing key."""
    return TEST_PRIVATE_KEY


@pytest.fixture
def signer_address() -> str:
    """Provide the address of the test signing key."""
    return TEST_ADDRESS
