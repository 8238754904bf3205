"""Typed data models for CLOB order construction.

Provide frozen dataclasses for the caller-facing order arguments, the
canonical on-chain order record, and the signed result.  All prices, sizes,
and notional amounts use ``Decimal``; settlement amounts are integers in
the collateral's smallest unit (USDC has six decimals).
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum, IntEnum
from typing import Any, Literal

ZERO = Decimal(0)
ONE = Decimal(1)
ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

TickSize = Literal["0.1", "0.01", "0.001", "0.0001"]


class Side(Enum):
    """Order side: BUY spends collateral, SELL spends outcome tokens."""

    BUY = "BUY"
    SELL = "SELL"

    @property
    def typed_value(self) -> int:
        """Return the ``uint8`` value used in the signed order struct."""
        return 0 if self is Side.BUY else 1


class OrderType(Enum):
    """Time-in-force of a submitted order."""

    GTC = "GTC"
    FOK = "FOK"
    FAK = "FAK"
    GTD = "GTD"


class SignatureType(IntEnum):
    """How the signer relates to the maker address.

    ``EOA`` signs for its own address, ``POLY_PROXY`` for an email or
    social-recovery proxy wallet, ``POLY_GNOSIS_SAFE`` for a browser-wallet
    Gnosis Safe proxy.
    """

    EOA = 0
    POLY_PROXY = 1
    POLY_GNOSIS_SAFE = 2


@dataclass(frozen=True)
class OrderLevel:
    """Single price level in an order book.

    Args:
        price: Price of the level as a decimal between 0 and 1.
        size: Available quantity of outcome tokens at this price.

    """

    price: Decimal
    size: Decimal


@dataclass(frozen=True)
class OrderBook:
    """Order book snapshot for one outcome token.

    Args:
        token_id: CLOB token identifier.
        bids: Buy levels, highest price first.
        asks: Sell levels, lowest price first.

    """

    token_id: str
    bids: tuple[OrderLevel, ...]
    asks: tuple[OrderLevel, ...]


@dataclass(frozen=True)
class OrderArgs:
    """Caller input for a limit order.

    Args:
        token_id: CLOB token identifier of the outcome to trade.
        price: Limit price between 0 and 1.
        size: Number of outcome tokens.
        side: ``Side.BUY`` or ``Side.SELL``.
        fee_rate_bps: Fee rate hint in basis points; 0 defers to the market.
        nonce: Exchange nonce used for onchain cancellations.
        expiration: Unix timestamp after which the order expires, 0 for never.
        taker: Counterparty address; the zero address allows any taker.

    """

    token_id: str
    price: Decimal
    size: Decimal
    side: Side
    fee_rate_bps: int = 0
    nonce: int = 0
    expiration: int = 0
    taker: str = ZERO_ADDRESS


@dataclass(frozen=True)
class MarketOrderArgs:
    """Caller input for a market order.

    Args:
        token_id: CLOB token identifier of the outcome to trade.
        amount: USDC notional to spend (BUY) or tokens to sell (SELL).
        side: ``Side.BUY`` or ``Side.SELL``.
        order_type: ``OrderType.FOK`` or ``OrderType.FAK`` (``GTC`` accepted).
        price: Explicit price; ``None`` derives it from the order book.
        fee_rate_bps: Fee rate hint in basis points; 0 defers to the market.
        nonce: Exchange nonce used for onchain cancellations.
        taker: Counterparty address; the zero address allows any taker.

    """

    token_id: str
    amount: Decimal
    side: Side
    order_type: OrderType = OrderType.FOK
    price: Decimal | None = None
    fee_rate_bps: int = 0
    nonce: int = 0
    taker: str = ZERO_ADDRESS


@dataclass(frozen=True)
class CreateOrderOptions:
    """Per-order overrides for values otherwise looked up from the market.

    Each field is either set or ``None``; a ``None`` field is resolved from
    the market data source.

    Args:
        tick_size: Tick size to use; must not be finer than the market's.
        neg_risk: Neg-risk classification; selects the signing contract.
        raw: Skip tick-size lookup and rounding, using price and size as given.

    """

    tick_size: TickSize | None = None
    neg_risk: bool | None = None
    raw: bool = False


@dataclass(frozen=True)
class RoundConfig:
    """Decimal places allowed for price, size, and the derived amount."""

    price: int
    size: int
    amount: int


@dataclass(frozen=True)
class ContractConfig:
    """Exchange contract addresses for one ``(chain_id, neg_risk)`` pair.

    Args:
        exchange: Exchange contract; the EIP-712 verifying contract.
        collateral: Collateral (USDC) token address.
        conditional_tokens: Conditional token framework contract.
        neg_risk_adapter: Neg-risk adapter, empty for standard markets.

    """

    exchange: str
    collateral: str
    conditional_tokens: str
    neg_risk_adapter: str = ""


@dataclass(frozen=True)
class OrderData:
    """Canonical order record committed to by the signature.

    Field order matches the exchange's ``Order`` struct.  Numeric fields are
    plain integers; they are stringified only in the wire payload.
    """

    salt: int
    maker: str
    signer: str
    taker: str
    token_id: str
    maker_amount: int
    taker_amount: int
    expiration: int
    nonce: int
    fee_rate_bps: int
    side: Side
    signature_type: SignatureType


@dataclass(frozen=True)
class SignedOrder:
    """An order record together with its EIP-712 signature.

    Args:
        order: The signed order record.
        signature: ``0x``-prefixed hex of the 65-byte ``r || s || v`` signature.

    """

    order: OrderData
    signature: str

    def to_payload(self) -> dict[str, Any]:
        """Return the JSON-ready order dict expected by the submission endpoint."""
        order = self.order
        return {
            "salt": order.salt,
            "maker": order.maker,
            "signer": order.signer,
            "taker": order.taker,
            "tokenId": order.token_id,
            "makerAmount": str(order.maker_amount),
            "takerAmount": str(order.taker_amount),
            "expiration": str(order.expiration),
            "nonce": str(order.nonce),
            "feeRateBps": str(order.fee_rate_bps),
            "side": order.side.value,
            "signatureType": int(order.signature_type),
            "signature": self.signature,
        }
