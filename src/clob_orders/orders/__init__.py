"""Client-side construction and EIP-712 signing of CLOB orders."""

from clob_orders.orders.cache import CachedMarketData, TTLCache
from clob_orders.orders.exceptions import (
    AuthLevelError,
    FeeRateMismatchError,
    InsufficientLiquidityError,
    InvalidExpirationError,
    InvalidPriceError,
    InvalidSideError,
    InvalidTickSizeError,
    NoMatchingLiquidityError,
    NoOrderBookError,
    OrderError,
    SigningError,
    UnknownChainError,
    UnsupportedTickSizeError,
)
from clob_orders.orders.factory import OrderFactory
from clob_orders.orders.market_price import calculate_market_price
from clob_orders.orders.models import (
    ZERO_ADDRESS,
    CreateOrderOptions,
    MarketOrderArgs,
    OrderArgs,
    OrderBook,
    OrderData,
    OrderLevel,
    OrderType,
    Side,
    SignatureType,
    SignedOrder,
    TickSize,
)
from clob_orders.orders.signer import OrderSigner

__all__ = [
    "ZERO_ADDRESS",
    "AuthLevelError",
    "CachedMarketData",
    "CreateOrderOptions",
    "FeeRateMismatchError",
    "InsufficientLiquidityError",
    "InvalidExpirationError",
    "InvalidPriceError",
    "InvalidSideError",
    "InvalidTickSizeError",
    "MarketOrderArgs",
    "NoMatchingLiquidityError",
    "NoOrderBookError",
    "OrderArgs",
    "OrderBook",
    "OrderData",
    "OrderError",
    "OrderFactory",
    "OrderLevel",
    "OrderSigner",
    "OrderType",
    "Side",
    "SignatureType",
    "SignedOrder",
    "SigningError",
    "TTLCache",
    "TickSize",
    "UnknownChainError",
    "UnsupportedTickSizeError",
    "calculate_market_price",
]
