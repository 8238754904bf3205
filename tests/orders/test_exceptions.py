"""Tests for the order exception hierarchy."""

from decimal import Decimal

import pytest

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


class TestOrderErrorHierarchy:
    """Test suite for the shared base class."""

    @pytest.mark.parametrize(
        "error_type",
        [
            AuthLevelError,
            FeeRateMismatchError,
            InsufficientLiquidityError,
            InvalidExpirationError,
            InvalidPriceError,
            InvalidSideError,
            InvalidTickSizeError,
            NoMatchingLiquidityError,
            NoOrderBookError,
            SigningError,
            UnknownChainError,
            UnsupportedTickSizeError,
        ],
    )
    def test_caught_as_base(self, error_type: type[Exception]) -> None:
        """Test every order error can be caught as OrderError."""
        assert issubclass(error_type, OrderError)

    def test_insufficient_is_no_matching(self) -> None:
        """Test insufficient depth is a kind of missing liquidity."""
        assert issubclass(InsufficientLiquidityError, NoMatchingLiquidityError)


class TestErrorAttributes:
    """Test suite for errors that carry the offending values."""

    def test_invalid_price(self) -> None:
        """Test InvalidPriceError exposes the price and range."""
        error = InvalidPriceError(Decimal("0.995"), Decimal("0.01"), Decimal("0.99"))
        assert error.price == Decimal("0.995")
        assert error.min_price == Decimal("0.01")
        assert error.max_price == Decimal("0.99")
        assert str(error) == "price (0.995), min: 0.01 - max: 0.99"

    def test_invalid_tick_size(self) -> None:
        """Test InvalidTickSizeError exposes both tick sizes."""
        error = InvalidTickSizeError("0.001", "0.01")
        assert error.tick_size == "0.001"
        assert error.minimum_tick_size == "0.01"

    def test_fee_rate_mismatch(self) -> None:
        """Test FeeRateMismatchError exposes both rates."""
        error = FeeRateMismatchError(150, 200)
        assert error.user_fee_rate_bps == 150
        assert error.market_fee_rate_bps == 200
        assert "200" in str(error)

    def test_unsupported_tick_size(self) -> None:
        """Test UnsupportedTickSizeError names the tick size."""
        error = UnsupportedTickSizeError("0.05")
        assert error.tick_size == "0.05"
        assert str(error) == "unsupported tick size: 0.05"

    def test_insufficient_liquidity(self) -> None:
        """Test InsufficientLiquidityError exposes requested and available depth."""
        error = InsufficientLiquidityError(requested=Decimal(100), available=Decimal("62.5"))
        assert error.requested == Decimal(100)
        assert error.available == Decimal("62.5")
