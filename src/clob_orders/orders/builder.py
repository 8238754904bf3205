"""Assemble the canonical order record from resolved amounts.

The builder owns the trading account configuration: the maker (funder)
address that holds the funds, the signer address that authorizes on its
behalf, and the signature type describing how the two relate.
"""

import random
import time
from collections.abc import Callable

from web3 import Web3

from clob_orders.orders.contracts import get_contract_config
from clob_orders.orders.models import (
    ZERO_ADDRESS,
    ContractConfig,
    OrderData,
    Side,
    SignatureType,
)


def generate_salt() -> int:
    """Return a fresh order salt derived from the clock and a random factor."""
    return round(time.time() * random.random())  # noqa: S311


class OrderBuilder:
    """Build ``OrderData`` records for one trading account and chain.

    Args:
        chain_id: EVM chain ID of the exchange deployment.
        signer_address: Address of the key that signs orders.
        funder: Address that holds funds and appears as maker; defaults to
            the signer address.
        signature_type: Relationship between signer and maker.
        salt_generator: Source of per-order salts, injectable for tests.

    Raises:
        UnknownChainError: If the chain has no contract configuration.

    """

    def __init__(
        self,
        chain_id: int,
        signer_address: str,
        funder: str | None = None,
        signature_type: SignatureType = SignatureType.EOA,
        salt_generator: Callable[[], int] = generate_salt,
    ) -> None:
        """Initialize the builder and check the chain is supported."""
        get_contract_config(chain_id, neg_risk=False)
        self.chain_id = chain_id
        self._signer = Web3.to_checksum_address(signer_address)
        self._funder = Web3.to_checksum_address(funder) if funder else None
        self._signature_type = signature_type
        self._salt_generator = salt_generator

    @property
    def funder(self) -> str:
        """Return the maker address."""
        return self._funder or self._signer

    @property
    def signer_address(self) -> str:
        """Return the signer address."""
        return self._signer

    @property
    def signature_type(self) -> SignatureType:
        """Return the configured signature type."""
        return self._signature_type

    def contract_config(self, neg_risk: bool) -> ContractConfig:
        """Return the contract addresses for this chain and market class."""
        return get_contract_config(self.chain_id, neg_risk)

    def build_order(
        self,
        *,
        token_id: str,
        side: Side,
        maker_amount: int,
        taker_amount: int,
        fee_rate_bps: int,
        nonce: int,
        expiration: int,
        taker: str | None = None,
        signer_address: str | None = None,
    ) -> OrderData:
        """Return a fresh order record.

        An empty ``taker`` becomes the zero address, meaning any taker.
        ``signer_address`` overrides the configured signer, e.g. after a key
        rotation; without a funder the maker follows it.
        """
        signer = Web3.to_checksum_address(signer_address) if signer_address else self._signer
        return OrderData(
            salt=self._salt_generator(),
            maker=self._funder or signer,
            signer=signer,
            taker=Web3.to_checksum_address(taker or ZERO_ADDRESS),
            token_id=token_id,
            maker_amount=maker_amount,
            taker_amount=taker_amount,
            expiration=expiration,
            nonce=nonce,
            fee_rate_bps=fee_rate_bps,
            side=side,
            signature_type=self._signature_type,
        )
