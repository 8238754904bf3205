"""EIP-712 typed-data signing of exchange orders.

The domain binds a signature to the exchange contract and chain; the
``Order`` struct binds it to every field of the order record in a fixed
order.  Field names, order, and types below are part of the cryptographic
contract with the exchange and must not change.
"""

import logging
import threading
from typing import Any

from eth_account import Account
from eth_account.messages import SignableMessage, encode_typed_data
from eth_account.signers.local import LocalAccount
from web3 import Web3

from clob_orders.orders.exceptions import SigningError
from clob_orders.orders.models import OrderData, SignedOrder

logger = logging.getLogger(__name__)

DOMAIN_NAME = "Polymarket CTF Exchange"
DOMAIN_VERSION = "1"

_EIP712_DOMAIN_FIELDS = [
    {"name": "name", "type": "string"},
    {"name": "version", "type": "string"},
    {"name": "chainId", "type": "uint256"},
    {"name": "verifyingContract", "type": "address"},
]

_ORDER_FIELDS = [
    {"name": "salt", "type": "uint256"},
    {"name": "maker", "type": "address"},
    {"name": "signer", "type": "address"},
    {"name": "taker", "type": "address"},
    {"name": "tokenId", "type": "uint256"},
    {"name": "makerAmount", "type": "uint256"},
    {"name": "takerAmount", "type": "uint256"},
    {"name": "expiration", "type": "uint256"},
    {"name": "nonce", "type": "uint256"},
    {"name": "feeRateBps", "type": "uint256"},
    {"name": "side", "type": "uint8"},
    {"name": "signatureType", "type": "uint8"},
]


def build_typed_data(order: OrderData, chain_id: int, verifying_contract: str) -> dict[str, Any]:
    """Return the full EIP-712 structure for an order.

    Args:
        order: Order record to sign.
        chain_id: EVM chain ID of the exchange deployment.
        verifying_contract: Exchange contract address for the order's market class.

    Returns:
        Dictionary accepted by ``eth_account.messages.encode_typed_data``.

    """
    return {
        "types": {"EIP712Domain": _EIP712_DOMAIN_FIELDS, "Order": _ORDER_FIELDS},
        "primaryType": "Order",
        "domain": {
            "name": DOMAIN_NAME,
            "version": DOMAIN_VERSION,
            "chainId": chain_id,
            "verifyingContract": verifying_contract,
        },
        "message": {
            "salt": order.salt,
            "maker": order.maker,
            "signer": order.signer,
            "taker": order.taker,
            "tokenId": int(order.token_id),
            "makerAmount": order.maker_amount,
            "takerAmount": order.taker_amount,
            "expiration": order.expiration,
            "nonce": order.nonce,
            "feeRateBps": order.fee_rate_bps,
            "side": order.side.typed_value,
            "signatureType": int(order.signature_type),
        },
    }


def _encode(order: OrderData, chain_id: int, verifying_contract: str) -> SignableMessage:
    try:
        return encode_typed_data(full_message=build_typed_data(order, chain_id, verifying_contract))
    except (ValueError, TypeError) as exc:
        msg = f"Cannot encode order for signing: {exc}"
        raise SigningError(msg) from exc


def order_digest(order: OrderData, chain_id: int, verifying_contract: str) -> bytes:
    """Return the 32-byte EIP-712 digest that gets signed.

    Raises:
        SigningError: If the order or domain cannot be encoded.

    """
    signable = _encode(order, chain_id, verifying_contract)
    return bytes(Web3.keccak(b"\x19" + signable.version + signable.header + signable.body))


def recover_signer(signed_order: SignedOrder, chain_id: int, verifying_contract: str) -> str:
    """Return the address that produced ``signed_order``'s signature.

    Raises:
        SigningError: If the order or domain cannot be encoded.

    """
    signable = _encode(signed_order.order, chain_id, verifying_contract)
    return Account.recover_message(signable, signature=bytes.fromhex(signed_order.signature[2:]))


class OrderSigner:
    """Hold a private key and sign order records with it.

    The key never leaves this object: it is not logged, not part of
    ``repr``, and not serialized.  Signing and key rotation share a lock so
    an order is never signed with half-rotated key material.

    Args:
        private_key: Hex-encoded secp256k1 private key.

    Raises:
        SigningError: If the key cannot be parsed.

    """

    def __init__(self, private_key: str) -> None:
        """Initialize the signer from a hex private key."""
        self._lock = threading.Lock()
        self._account = self._load(private_key)

    @staticmethod
    def _load(private_key: str) -> LocalAccount:
        try:
            account: LocalAccount = Account.from_key(private_key)
        except (ValueError, TypeError):
            # Drop the cause so key material never reaches a traceback.
            raise SigningError("invalid private key") from None
        return account

    @property
    def address(self) -> str:
        """Return the checksummed address of the signing key."""
        with self._lock:
            return self._account.address

    def rotate_key(self, private_key: str) -> None:
        """Replace the signing key once in-flight signatures complete."""
        account = self._load(private_key)
        with self._lock:
            self._account = account
        logger.info("Signing key rotated; signer is now %s", account.address)

    def sign_order(self, order: OrderData, chain_id: int, verifying_contract: str) -> SignedOrder:
        """Sign an order record under the exchange's EIP-712 domain.

        Args:
            order: Order record; its ``signer`` must be this key's address.
            chain_id: EVM chain ID of the exchange deployment.
            verifying_contract: Exchange contract for the order's market class.

        Returns:
            The order with a ``0x``-prefixed 65-byte ``r || s || v`` signature.

        Raises:
            SigningError: If the signer field does not match the key or
                encoding or signing fails.

        """
        signable = _encode(order, chain_id, verifying_contract)
        with self._lock:
            if order.signer.lower() != self._account.address.lower():
                msg = f"order signer {order.signer} does not match signing key {self._account.address}"
                raise SigningError(msg)
            try:
                signed = self._account.sign_message(signable)
            except (ValueError, TypeError) as exc:
                msg = f"Failed to sign order: {exc}"
                raise SigningError(msg) from exc
        signature = "0x" + bytes(signed.signature).hex()
        logger.debug("Signed order salt=%s for verifying contract %s", order.salt, verifying_contract)
        return SignedOrder(order=order, signature=signature)

    def __repr__(self) -> str:
        """Return a representation that omits the key."""
        return f"OrderSigner(address={self._account.address!r})"
