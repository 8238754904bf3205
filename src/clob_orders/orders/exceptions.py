"""Exception hierarchy for order construction and signing.

Follow the same pattern as the Polymarket client exceptions: a base class
with specialised subclasses that carry the offending values as attributes so
callers can react without parsing the message.
"""


class OrderError(Exception):
    """Base exception for all order construction and signing errors."""


class AuthLevelError(OrderError):
    """Raise when an operation needs a signing key and none is configured."""


class InvalidTickSizeError(OrderError):
    """Requested tick size is finer than the market minimum.

    Args:
        tick_size: Tick size requested by the caller.
        minimum_tick_size: Minimum tick size of the market.

    """

    def __init__(self, tick_size: str, minimum_tick_size: str) -> None:
        """Initialize the error with both tick sizes."""
        super().__init__(
            f"invalid tick size ({tick_size}), minimum for the market is {minimum_tick_size}"
        )
        self.tick_size = tick_size
        self.minimum_tick_size = minimum_tick_size


class InvalidPriceError(OrderError):
    """Price is outside ``[tick, 1 - tick]`` or not a multiple of the tick.

    Args:
        price: Offending price.
        min_price: Lowest accepted price (the tick size).
        max_price: Highest accepted price (one minus the tick size).

    """

    def __init__(self, price: object, min_price: object, max_price: object) -> None:
        """Initialize the error with the price and the allowed range."""
        super().__init__(f"price ({price}), min: {min_price} - max: {max_price}")
        self.price = price
        self.min_price = min_price
        self.max_price = max_price


class InvalidSideError(OrderError):
    """Raise when an order side is neither BUY nor SELL."""


class UnsupportedTickSizeError(OrderError):
    """Resolved tick size has no entry in the rounding policy table.

    Args:
        tick_size: The unmapped tick size.

    """

    def __init__(self, tick_size: str) -> None:
        """Initialize the error with the unmapped tick size."""
        super().__init__(f"unsupported tick size: {tick_size}")
        self.tick_size = tick_size


class FeeRateMismatchError(OrderError):
    """User and market fee rates are both non-zero and differ.

    Args:
        user_fee_rate_bps: Fee rate supplied by the caller.
        market_fee_rate_bps: Fee rate reported by the market.

    """

    def __init__(self, user_fee_rate_bps: int, market_fee_rate_bps: int) -> None:
        """Initialize the error with both fee rates."""
        super().__init__(
            f"invalid user provided fee rate: ({user_fee_rate_bps}), "
            f"fee rate for the market must be {market_fee_rate_bps}"
        )
        self.user_fee_rate_bps = user_fee_rate_bps
        self.market_fee_rate_bps = market_fee_rate_bps


class NoOrderBookError(OrderError):
    """Raise when the order book for a token cannot be fetched."""


class NoMatchingLiquidityError(OrderError):
    """Raise when the relevant side of the book has no levels."""


class InsufficientLiquidityError(NoMatchingLiquidityError):
    """Book depth cannot fill a fill-or-kill order in full.

    Args:
        requested: Notional (BUY) or token quantity (SELL) requested.
        available: Notional or quantity the book can absorb.

    """

    def __init__(self, requested: object, available: object) -> None:
        """Initialize the error with requested and available depth."""
        super().__init__(f"insufficient liquidity: requested {requested}, available {available}")
        self.requested = requested
        self.available = available


class SigningError(OrderError):
    """Raise when the typed-data signature cannot be produced."""


class UnknownChainError(OrderError):
    """Raise when no contract configuration exists for a chain ID."""


class InvalidExpirationError(OrderError):
    """Raise when a GTD order is submitted without an expiration."""
