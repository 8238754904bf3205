"""Tests for the order record builder."""

import pytest

from clob_orders.orders.builder import OrderBuilder, generate_salt
from clob_orders.orders.contracts import POLYGON
from clob_orders.orders.exceptions import UnknownChainError
from clob_orders.orders.models import ZERO_ADDRESS, OrderData, Side, SignatureType

_TOKEN_ID = "71321045679252212594626385532706912750332728571942532289631379312455583992563"
_FUNDER = "0x70997970C51812dc3A010C7d01b50e0d17dc79C8"
_TAKER = "0x3C44CdDdB6a900fa2b585dd299e03d12FA4293BC"
_SALT = 123456789


def _build(builder: OrderBuilder, taker: str | None = None) -> OrderData:
    return builder.build_order(
        token_id=_TOKEN_ID,
        side=Side.BUY,
        maker_amount=50_000_000,
        taker_amount=100_000_000,
        fee_rate_bps=0,
        nonce=3,
        expiration=0,
        taker=taker,
    )


class TestOrderBuilder:
    """Test suite for OrderBuilder."""

    def test_maker_defaults_to_signer(self, signer_address: str) -> None:
        """Use the signer as maker when no funder is configured."""
        order = _build(OrderBuilder(POLYGON, signer_address, salt_generator=lambda: _SALT))
        assert order.maker == signer_address
        assert order.signer == signer_address

    def test_maker_is_funder(self, signer_address: str) -> None:
        """Use the proxy funder as maker while the signer authorizes."""
        builder = OrderBuilder(
            POLYGON,
            signer_address,
            funder=_FUNDER.lower(),
            signature_type=SignatureType.POLY_PROXY,
            salt_generator=lambda: _SALT,
        )
        order = _build(builder)
        assert order.maker == _FUNDER
        assert order.signer == signer_address
        assert order.signature_type is SignatureType.POLY_PROXY

    def test_signer_override_moves_default_maker(self, signer_address: str) -> None:
        """Use an overriding signer as maker when no funder is configured."""
        order = OrderBuilder(POLYGON, signer_address).build_order(
            token_id=_TOKEN_ID,
            side=Side.BUY,
            maker_amount=1,
            taker_amount=2,
            fee_rate_bps=0,
            nonce=0,
            expiration=0,
            signer_address=_FUNDER.lower(),
        )
        assert order.signer == _FUNDER
        assert order.maker == _FUNDER

    def test_signer_override_keeps_funder(self, signer_address: str) -> None:
        """Keep the funder as maker when the signer is overridden."""
        builder = OrderBuilder(POLYGON, signer_address, funder=_TAKER)
        order = builder.build_order(
            token_id=_TOKEN_ID,
            side=Side.SELL,
            maker_amount=1,
            taker_amount=2,
            fee_rate_bps=0,
            nonce=0,
            expiration=0,
            signer_address=_FUNDER,
        )
        assert order.maker == _TAKER
        assert order.signer == _FUNDER
        assert builder.funder == _TAKER

    def test_taker_defaults_to_zero_address(self, signer_address: str) -> None:
        """Allow any taker when none is given."""
        order = _build(OrderBuilder(POLYGON, signer_address))
        assert order.taker == ZERO_ADDRESS

    def test_explicit_taker_checksummed(self, signer_address: str) -> None:
        """Checksum an explicit taker address."""
        order = _build(OrderBuilder(POLYGON, signer_address), taker=_TAKER.lower())
        assert order.taker == _TAKER

    def test_fields_carried_through(self, signer_address: str) -> None:
        """Copy amounts, nonce, and salt into the record."""
        order = _build(OrderBuilder(POLYGON, signer_address, salt_generator=lambda: _SALT))
        assert order.salt == _SALT
        assert order.token_id == _TOKEN_ID
        assert order.maker_amount == 50_000_000
        assert order.taker_amount == 100_000_000
        assert order.nonce == 3
        assert order.expiration == 0

    def test_fresh_salt_per_order(self, signer_address: str) -> None:
        """Draw a salt for every order built."""
        salts = iter([1, 2])
        builder = OrderBuilder(POLYGON, signer_address, salt_generator=lambda: next(salts))
        assert _build(builder).salt == 1
        assert _build(builder).salt == 2

    def test_unknown_chain_rejected(self, signer_address: str) -> None:
        """Refuse to build for a chain with no contracts."""
        with pytest.raises(UnknownChainError):
            OrderBuilder(1, signer_address)

    def test_contract_config_by_neg_risk(self, signer_address: str) -> None:
        """Look up different exchanges for the two market classes."""
        builder = OrderBuilder(POLYGON, signer_address)
        assert builder.contract_config(True).exchange != builder.contract_config(False).exchange


class TestGenerateSalt:
    """Test suite for the default salt generator."""

    def test_non_negative_int(self) -> None:
        """Return a non-negative integer."""
        salt = generate_salt()
        assert isinstance(salt, int)
        assert salt >= 0
