"""Tests for the order amount calculator."""

from decimal import Decimal
from typing import Any

import pytest

from clob_orders.orders.amounts import (
    get_market_order_amounts,
    get_order_amounts,
    get_raw_order_amounts,
)
from clob_orders.orders.exceptions import InvalidSideError
from clob_orders.orders.models import Side
from clob_orders.orders.rounding import get_rounding_config

_CENT_TICK = get_rounding_config("0.01")
_DIME_TICK = get_rounding_config("0.1")


class TestGetOrderAmounts:
    """Test suite for limit order amounts."""

    def test_buy_amounts(self) -> None:
        """BUY pays collateral (maker) and receives tokens (taker)."""
        side, maker, taker = get_order_amounts(
            Side.BUY, Decimal(100), Decimal("0.5"), _CENT_TICK
        )
        assert side is Side.BUY
        assert maker == 50_000_000
        assert taker == 100_000_000

    def test_sell_amounts(self) -> None:
        """SELL gives tokens (maker) and receives collateral (taker)."""
        side, maker, taker = get_order_amounts(
            Side.SELL, Decimal(100), Decimal("0.5"), _CENT_TICK
        )
        assert side is Side.SELL
        assert maker == 100_000_000
        assert taker == 50_000_000

    def test_fractional_amounts(self) -> None:
        """Keep four decimals of collateral for a cent tick."""
        _, maker, taker = get_order_amounts(
            Side.BUY, Decimal("21.04"), Decimal("0.56"), _CENT_TICK
        )
        assert maker == 11_782_400
        assert taker == 21_040_000

    def test_size_truncated_to_policy(self) -> None:
        """Truncate size to two decimals before deriving collateral."""
        _, maker, taker = get_order_amounts(
            Side.BUY, Decimal("10.129"), Decimal("0.5"), _CENT_TICK
        )
        assert taker == 10_120_000
        assert maker == 5_060_000

    def test_coarse_tick(self) -> None:
        """Apply the 0.1 tick policy."""
        _, maker, taker = get_order_amounts(
            Side.BUY, Decimal("10.33"), Decimal("0.3"), _DIME_TICK
        )
        assert maker == 3_099_000
        assert taker == 10_330_000

    def test_idempotent(self) -> None:
        """Return identical integers for identical inputs."""
        args = (Side.SELL, Decimal("33.33"), Decimal("0.37"), _CENT_TICK)
        assert get_order_amounts(*args) == get_order_amounts(*args)

    @pytest.mark.parametrize(
        ("price", "size"),
        [("0.5", "100"), ("0.56", "21.04"), ("0.01", "7.77"), ("0.99", "1234.56")],
    )
    def test_buy_sell_symmetry(self, price: str, size: str) -> None:
        """BUY maker equals SELL taker and vice versa."""
        _, buy_maker, buy_taker = get_order_amounts(
            Side.BUY, Decimal(size), Decimal(price), _CENT_TICK
        )
        _, sell_maker, sell_taker = get_order_amounts(
            Side.SELL, Decimal(size), Decimal(price), _CENT_TICK
        )
        assert buy_maker == sell_taker
        assert buy_taker == sell_maker

    def test_invalid_side_raises(self) -> None:
        """Reject anything that is not a Side."""
        bad_side: Any = "HOLD"
        with pytest.raises(InvalidSideError):
            get_order_amounts(bad_side, Decimal(1), Decimal("0.5"), _CENT_TICK)


class TestGetMarketOrderAmounts:
    """Test suite for market order amounts."""

    def test_buy_spends_notional(self) -> None:
        """BUY maker is the notional, taker is notional divided by price."""
        _, maker, taker = get_market_order_amounts(
            Side.BUY, Decimal(100), Decimal("0.5"), _CENT_TICK
        )
        assert maker == 100_000_000
        assert taker == 200_000_000

    def test_buy_repeating_quotient(self) -> None:
        """Truncate a repeating token quantity to the amount precision."""
        _, maker, taker = get_market_order_amounts(
            Side.BUY, Decimal(10), Decimal("0.3"), _CENT_TICK
        )
        assert maker == 10_000_000
        assert taker == 33_333_300

    def test_sell_sells_tokens(self) -> None:
        """SELL maker is the token quantity, taker is quantity times price."""
        _, maker, taker = get_market_order_amounts(
            Side.SELL, Decimal(50), Decimal("0.45"), _CENT_TICK
        )
        assert maker == 50_000_000
        assert taker == 22_500_000

    def test_price_truncated_to_tick_precision(self) -> None:
        """Truncate the price before dividing."""
        _, _, taker = get_market_order_amounts(
            Side.BUY, Decimal(10), Decimal("0.509"), _CENT_TICK
        )
        assert taker == 20_000_000


class TestGetRawOrderAmounts:
    """Test suite for raw (unrounded) amounts."""

    def test_buy_uses_literal_values(self) -> None:
        """Use price and size as given, even off the tick grid."""
        _, maker, taker = get_raw_order_amounts(Side.BUY, Decimal("13.37"), Decimal("0.523"))
        assert maker == 6_992_510
        assert taker == 13_370_000

    def test_sell_inverts_roles(self) -> None:
        """SELL swaps maker and taker."""
        _, maker, taker = get_raw_order_amounts(Side.SELL, Decimal("13.37"), Decimal("0.523"))
        assert maker == 13_370_000
        assert taker == 6_992_510

    def test_rounds_to_nearest_unit(self) -> None:
        """Round sub-unit remainders to the nearest integer unit."""
        _, maker, _ = get_raw_order_amounts(Side.BUY, Decimal(1), Decimal("0.1234567"))
        assert maker == 123_457

    def test_invalid_side_raises(self) -> None:
        """Reject anything that is not a Side."""
        bad_side: Any = "buy"
        with pytest.raises(InvalidSideError):
            get_raw_order_amounts(bad_side, Decimal(1), Decimal("0.5"))
