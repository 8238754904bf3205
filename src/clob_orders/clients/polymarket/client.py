"""Synchronous HTTP client for the market facts an order needs.

Implement the ``MarketDataSource`` protocol against the Polymarket CLOB
REST API: minimum tick size, fee rate, neg-risk classification, and the
order book.  Retries are left to the calling layer.
"""

import logging
from decimal import Decimal, InvalidOperation
from typing import Any

import httpx

from clob_orders.clients.polymarket.exceptions import PolymarketAPIError
from clob_orders.core.config import ConfigError, ConfigLoader
from clob_orders.orders.exceptions import NoOrderBookError
from clob_orders.orders.models import ZERO, OrderBook, OrderLevel

logger = logging.getLogger(__name__)

_HTTP_BAD_REQUEST = 400
_HTTP_NOT_FOUND = 404
_DEFAULT_TIMEOUT = 30.0


class ClobMarketDataClient:
    """Fetch per-token market data from the CLOB API.

    Args:
        host: Base URL for the CLOB API.
        timeout: Request timeout in seconds.
        http_client: Pre-built ``httpx.Client``; overrides ``host`` and
            ``timeout`` when given.

    """

    CLOB_HOST = "https://clob.polymarket.com"

    def __init__(
        self,
        host: str = CLOB_HOST,
        timeout: float = _DEFAULT_TIMEOUT,
        http_client: httpx.Client | None = None,
    ) -> None:
        """Initialize the client."""
        self.host = host.rstrip("/")
        self._http_client = http_client or httpx.Client(base_url=self.host, timeout=timeout)

    @classmethod
    def from_config(cls, config: ConfigLoader) -> "ClobMarketDataClient":
        """Create a client from the ``clob`` configuration section.

        Args:
            config: Loaded configuration.

        Returns:
            Client pointed at ``clob.host`` with ``clob.timeout``.

        Raises:
            ConfigError: If the section is malformed or the timeout is not a number.

        """
        clob = config.get_clob_config()
        raw_timeout = clob.get("timeout", _DEFAULT_TIMEOUT)
        try:
            timeout = float(raw_timeout)
        except (TypeError, ValueError) as exc:
            msg = f"clob.timeout must be a number, got {raw_timeout!r}"
            raise ConfigError(msg) from exc
        return cls(host=clob.get("host") or cls.CLOB_HOST, timeout=timeout)

    def _get(self, path: str, token_id: str) -> Any:
        """Issue a GET for ``token_id`` and return the decoded JSON body.

        Raises:
            PolymarketAPIError: On transport errors or non-2xx responses.

        """
        try:
            response = self._http_client.get(path, params={"token_id": token_id})
        except httpx.HTTPError as exc:
            raise PolymarketAPIError(
                msg=f"Request to {path} failed: {exc}",
                status_code=0,
            ) from exc

        if response.status_code >= _HTTP_BAD_REQUEST:
            raise PolymarketAPIError(
                msg=f"CLOB API error on {path} for {token_id}: {response.text}",
                status_code=response.status_code,
            )
        return response.json()

    def get_tick_size(self, token_id: str) -> str:
        """Return the market's minimum tick size as a decimal string.

        Raises:
            PolymarketAPIError: When the request fails or the value is malformed.

        """
        raw = self._get("/tick-size", token_id)
        return _format_tick_size(_require_field(raw, "minimum_tick_size", "/tick-size"))

    def get_fee_rate_bps(self, token_id: str) -> int:
        """Return the market's base fee rate in basis points.

        Raises:
            PolymarketAPIError: When the request fails or the value is malformed.

        """
        raw = self._get("/fee-rate", token_id)
        value = _require_field(raw, "base_fee", "/fee-rate")
        try:
            return int(value)
        except (TypeError, ValueError) as exc:
            raise PolymarketAPIError(msg=f"Malformed fee rate {value!r}", status_code=0) from exc

    def get_neg_risk(self, token_id: str) -> bool:
        """Return whether the token's market uses the neg-risk exchange.

        Raises:
            PolymarketAPIError: When the request fails.

        """
        raw = self._get("/neg-risk", token_id)
        return bool(_require_field(raw, "neg_risk", "/neg-risk"))

    def get_order_book(self, token_id: str) -> OrderBook:
        """Return the order book with asks ascending and bids descending.

        Raises:
            NoOrderBookError: When the CLOB has no book for the token (HTTP 404).
            PolymarketAPIError: When the request fails for any other reason.

        """
        try:
            raw = self._get("/book", token_id)
        except PolymarketAPIError as exc:
            if exc.status_code == _HTTP_NOT_FOUND:
                raise NoOrderBookError(f"no order book for {token_id}") from exc
            raise
        return _parse_order_book(token_id, raw)

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._http_client.close()

    def __enter__(self) -> "ClobMarketDataClient":
        """Enter context manager."""
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Exit context manager."""
        self.close()


def _require_field(raw: Any, key: str, path: str) -> Any:
    if not isinstance(raw, dict) or key not in raw:
        raise PolymarketAPIError(msg=f"Response from {path} lacks {key!r}", status_code=0)
    return raw[key]  # pyright: ignore[reportUnknownVariableType]


def _format_tick_size(value: Any) -> str:
    """Normalise a numeric tick size (``0.01``) to its string form (``"0.01"``)."""
    try:
        tick = Decimal(str(value))
    except (InvalidOperation, ValueError) as exc:
        raise PolymarketAPIError(msg=f"Malformed tick size {value!r}", status_code=0) from exc
    return format(tick.normalize(), "f")


def _safe_decimal(value: Any) -> Decimal:
    """Convert a value to Decimal, returning zero for None/empty strings.

    Raises:
        PolymarketAPIError: If the value is non-empty but malformed.

    """
    if value is None or (isinstance(value, str) and value.strip() == ""):
        return ZERO
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError) as exc:
        msg = f"Cannot convert {value!r} to Decimal"
        raise PolymarketAPIError(msg=msg, status_code=0) from exc


def _parse_levels(raw_levels: Any, *, descending: bool) -> tuple[OrderLevel, ...]:
    levels = [
        OrderLevel(
            price=_safe_decimal(level.get("price", "0")),
            size=_safe_decimal(level.get("size", "0")),
        )
        for level in raw_levels or []
    ]
    return tuple(sorted(levels, key=lambda lvl: lvl.price, reverse=descending))


def _parse_order_book(token_id: str, raw: Any) -> OrderBook:
    """Convert a raw CLOB order book dict into a typed ``OrderBook``.

    The CLOB lists levels worst-to-best; sort them best-first so the
    market price calculator can walk them in order.
    """
    if not isinstance(raw, dict):
        raise PolymarketAPIError(msg=f"Malformed order book for {token_id}", status_code=0)
    book = OrderBook(
        token_id=token_id,
        bids=_parse_levels(raw.get("bids"), descending=True),  # pyright: ignore[reportUnknownArgumentType]
        asks=_parse_levels(raw.get("asks"), descending=False),  # pyright: ignore[reportUnknownArgumentType]
    )
    logger.debug(
        "Order book for %s: %d bids, %d asks", token_id, len(book.bids), len(book.asks)
    )
    return book
