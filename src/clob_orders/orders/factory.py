"""Entry point that turns order arguments into signed orders.

Compose the resolvers, amount calculators, order builder, and typed-data
signer.  Each call runs the full pipeline (amounts resolved, record
assembled, record signed) and returns only the final immutable
``SignedOrder``; intermediate values never escape.
"""

import logging
from decimal import Decimal
from typing import Any

from clob_orders.core.config import ConfigLoader
from clob_orders.orders.amounts import (
    get_market_order_amounts,
    get_order_amounts,
    get_raw_order_amounts,
)
from clob_orders.orders.builder import OrderBuilder
from clob_orders.orders.cache import CachedMarketData
from clob_orders.orders.exceptions import AuthLevelError, InvalidExpirationError
from clob_orders.orders.market_price import align_price_to_tick, calculate_market_price
from clob_orders.orders.models import (
    ZERO,
    CreateOrderOptions,
    MarketOrderArgs,
    OrderArgs,
    OrderData,
    OrderType,
    Side,
    SignatureType,
    SignedOrder,
)
from clob_orders.orders.protocols import MarketDataSource, OrderPoster
from clob_orders.orders.resolvers import (
    resolve_fee_rate,
    resolve_neg_risk,
    resolve_tick_size,
    validate_price,
)
from clob_orders.orders.rounding import get_rounding_config
from clob_orders.orders.signer import OrderSigner

logger = logging.getLogger(__name__)

_DEFAULT_OPTIONS = CreateOrderOptions()


class OrderFactory:
    """Build and sign limit and market orders for one trading account.

    Without a signer the factory can still price market orders from the
    book, but creating orders raises ``AuthLevelError``.

    Args:
        market_data: Source of tick size, fee rate, neg-risk, and books.
        chain_id: EVM chain ID of the exchange deployment.
        signer: Holder of the signing key, or ``None`` for read-only use.
        funder: Maker address holding the funds; defaults to the signer.
        signature_type: Relationship between signer and maker.
        builder: Pre-built order builder, mainly for tests.

    """

    def __init__(
        self,
        market_data: MarketDataSource,
        chain_id: int,
        signer: OrderSigner | None = None,
        funder: str | None = None,
        signature_type: SignatureType = SignatureType.EOA,
        builder: OrderBuilder | None = None,
    ) -> None:
        """Initialize the factory."""
        self._market_data = market_data
        self.chain_id = chain_id
        self._signer = signer
        if builder is None and signer is not None:
            builder = OrderBuilder(
                chain_id,
                signer.address,
                funder=funder,
                signature_type=signature_type,
            )
        self._builder = builder

    @classmethod
    def from_config(
        cls,
        config: ConfigLoader,
        market_data: MarketDataSource,
    ) -> "OrderFactory":
        """Create a factory from loaded configuration.

        The market data source is wrapped in a read-through cache using
        ``cache.ttl_seconds``.  When ``signing.private_key`` is empty the
        factory is read-only.

        Args:
            config: Loaded configuration.
            market_data: Uncached market data source, typically
                ``ClobMarketDataClient.from_config(config)``.

        Returns:
            Configured ``OrderFactory``.

        Raises:
            ConfigError: If the chain ID, cache TTL, or signature type is invalid.
            SigningError: If the configured private key cannot be parsed.

        """
        signer = None
        if config.get("signing.private_key"):
            signer = OrderSigner(config.get_private_key())
        return cls(
            CachedMarketData(market_data, ttl_seconds=config.get_cache_ttl()),
            chain_id=config.get_chain_id(),
            signer=signer,
            funder=config.get("signing.funder_address") or None,
            signature_type=SignatureType(config.get_signature_type()),
        )

    def _require_signer(self) -> tuple[OrderSigner, OrderBuilder]:
        """Return the signer and builder, or raise when no key is configured.

        Raises:
            AuthLevelError: When the factory was created without a signer.

        """
        if self._signer is None or self._builder is None:
            raise AuthLevelError("A signing key is required to create orders.")
        return self._signer, self._builder

    def _sign(self, order: OrderData, neg_risk: bool) -> SignedOrder:
        signer, builder = self._require_signer()
        contract = builder.contract_config(neg_risk)
        return signer.sign_order(order, self.chain_id, contract.exchange)

    def create_order(
        self,
        order_args: OrderArgs,
        options: CreateOrderOptions | None = None,
    ) -> SignedOrder:
        """Create and sign a limit order.

        In raw mode price and size are used as given: no tick size, fee, or
        rounding lookup happens, but neg-risk is still resolved because it
        selects the signing contract.

        Args:
            order_args: Limit order arguments.
            options: Per-order overrides.

        Returns:
            The signed order.

        Raises:
            AuthLevelError: When no signing key is configured.
            InvalidTickSizeError: When the tick size override is too fine.
            InvalidPriceError: When the price is off the tick grid or out of range.
            InvalidSideError: When the side is not BUY or SELL.
            FeeRateMismatchError: When the fee hint disagrees with the market.
            UnsupportedTickSizeError: When the tick size has no rounding policy.
            SigningError: When signing fails.

        """
        signer, builder = self._require_signer()
        options = options or _DEFAULT_OPTIONS
        token_id = order_args.token_id

        if options.raw:
            side, maker_amount, taker_amount = get_raw_order_amounts(
                order_args.side, order_args.size, order_args.price
            )
            neg_risk = resolve_neg_risk(self._market_data, token_id, options.neg_risk)
            fee_rate_bps = order_args.fee_rate_bps
        else:
            tick_size = resolve_tick_size(self._market_data, token_id, options.tick_size)
            validate_price(order_args.price, tick_size)
            neg_risk = resolve_neg_risk(self._market_data, token_id, options.neg_risk)
            fee_rate_bps = resolve_fee_rate(self._market_data, token_id, order_args.fee_rate_bps)
            side, maker_amount, taker_amount = get_order_amounts(
                order_args.side,
                order_args.size,
                order_args.price,
                get_rounding_config(tick_size),
            )

        order = builder.build_order(
            token_id=token_id,
            side=side,
            maker_amount=maker_amount,
            taker_amount=taker_amount,
            fee_rate_bps=fee_rate_bps,
            nonce=order_args.nonce,
            expiration=order_args.expiration,
            taker=order_args.taker,
            signer_address=signer.address,
        )
        logger.debug(
            "Built %s order for %s: maker=%d taker=%d neg_risk=%s raw=%s",
            side.value,
            token_id,
            maker_amount,
            taker_amount,
            neg_risk,
            options.raw,
        )
        return self._sign(order, neg_risk)

    def create_market_order(
        self,
        order_args: MarketOrderArgs,
        options: CreateOrderOptions | None = None,
    ) -> SignedOrder:
        """Create and sign a market order.

        When no price is given, derive it from the order book's
        size-weighted average, snap it onto the tick grid, and validate it
        like any limit price.  Market orders never expire.

        Args:
            order_args: Market order arguments.
            options: Per-order overrides; ``raw`` is ignored.

        Returns:
            The signed order.

        Raises:
            AuthLevelError: When no signing key is configured.
            NoOrderBookError: When the book cannot be fetched.
            NoMatchingLiquidityError: When the relevant side of the book is empty.
            InsufficientLiquidityError: When a FOK order cannot fill in full.
            InvalidPriceError: When the price is off the tick grid or out of range.
            FeeRateMismatchError: When the fee hint disagrees with the market.
            UnsupportedTickSizeError: When the tick size has no rounding policy.
            SigningError: When signing fails.

        """
        signer, builder = self._require_signer()
        options = options or _DEFAULT_OPTIONS
        token_id = order_args.token_id

        tick_size = resolve_tick_size(self._market_data, token_id, options.tick_size)
        price = order_args.price
        if price is None or price <= ZERO:
            average = self.calculate_market_price(
                token_id, order_args.side, order_args.amount, order_args.order_type
            )
            price = align_price_to_tick(average, tick_size, order_args.side)
            logger.debug("Market price for %s: average=%s limit=%s", token_id, average, price)
        validate_price(price, tick_size)

        neg_risk = resolve_neg_risk(self._market_data, token_id, options.neg_risk)
        fee_rate_bps = resolve_fee_rate(self._market_data, token_id, order_args.fee_rate_bps)
        side, maker_amount, taker_amount = get_market_order_amounts(
            order_args.side,
            order_args.amount,
            price,
            get_rounding_config(tick_size),
        )

        order = builder.build_order(
            token_id=token_id,
            side=side,
            maker_amount=maker_amount,
            taker_amount=taker_amount,
            fee_rate_bps=fee_rate_bps,
            nonce=order_args.nonce,
            expiration=0,
            taker=order_args.taker,
            signer_address=signer.address,
        )
        return self._sign(order, neg_risk)

    def calculate_market_price(
        self,
        token_id: str,
        side: Side,
        amount: Decimal,
        order_type: OrderType,
    ) -> Decimal:
        """Return the size-weighted average execution price from the live book.

        Args:
            token_id: CLOB token identifier.
            side: ``Side.BUY`` walks the asks, ``Side.SELL`` the bids.
            amount: Collateral notional (BUY) or token quantity (SELL).
            order_type: ``OrderType.FOK`` requires full depth.

        Returns:
            Unrounded average price.

        Raises:
            NoOrderBookError: When the book cannot be fetched.
            NoMatchingLiquidityError: When the relevant side is empty.
            InsufficientLiquidityError: When a FOK order cannot fill in full.

        """
        book = self._market_data.get_order_book(token_id)
        return calculate_market_price(book, side, amount, order_type)

    def create_and_post_order(
        self,
        order_args: OrderArgs,
        poster: OrderPoster,
        options: CreateOrderOptions | None = None,
        order_type: OrderType = OrderType.GTC,
    ) -> Any:
        """Create, sign, and submit a limit order.

        Args:
            order_args: Limit order arguments.
            poster: Submission collaborator.
            options: Per-order overrides.
            order_type: Time-in-force; GTD requires a non-zero expiration.

        Returns:
            The poster's raw response.

        Raises:
            InvalidExpirationError: When a GTD order has no expiration.

        """
        if order_type is OrderType.GTD and order_args.expiration == 0:
            raise InvalidExpirationError("GTD orders require a non-zero expiration")
        signed_order = self.create_order(order_args, options)
        return poster.post_order(signed_order, order_type)
