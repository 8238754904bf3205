"""Exchange contract addresses keyed by chain and neg-risk classification.

Neg-risk markets settle through a separate exchange contract, so the
classification selects the EIP-712 verifying contract, not just a payload
flag.  The lookup is table-driven and fails loudly for unknown chains.
"""

from web3 import Web3

from clob_orders.orders.exceptions import UnknownChainError
from clob_orders.orders.models import ContractConfig

POLYGON = 137
AMOY = 80002

_POLYGON_USDC_E = "0x2791Bca1f2de4661ED88A30C99A7a9449Aa84174"
_POLYGON_CTF = "0x4D97DCd97eC945f40cF65F87097ACe5EA0476045"
_POLYGON_NEG_RISK_ADAPTER = "0xd91E80cF2E7be2e162c6513ceD06f1dD0dA35296"
_AMOY_COLLATERAL = "0x9c4e1703476e875070ee25b56a58b008cfb8fa78"
_AMOY_CTF = "0x69308FB512518e39F9b16112fA8d994F4e2Bf8bB"

_CONTRACTS: dict[tuple[int, bool], ContractConfig] = {
    (POLYGON, False): ContractConfig(
        exchange="0x4bFb41d5B3570DeFd03C39a9A4D8dE6Bd8B8982E",
        collateral=_POLYGON_USDC_E,
        conditional_tokens=_POLYGON_CTF,
    ),
    (POLYGON, True): ContractConfig(
        exchange="0xC5d563A36AE78145C45a50134d48A1215220f80a",
        collateral=_POLYGON_USDC_E,
        conditional_tokens=_POLYGON_CTF,
        neg_risk_adapter=_POLYGON_NEG_RISK_ADAPTER,
    ),
    (AMOY, False): ContractConfig(
        exchange="0xdFE02Eb6733538f8Ea35D585af8DE5958AD99E40",
        collateral=_AMOY_COLLATERAL,
        conditional_tokens=_AMOY_CTF,
    ),
    (AMOY, True): ContractConfig(
        exchange="0xd91E80cF2E7be2e162c6513ceD06f1dD0dA35296",
        collateral=_AMOY_COLLATERAL,
        conditional_tokens=_AMOY_CTF,
    ),
}


def get_contract_config(chain_id: int, neg_risk: bool) -> ContractConfig:
    """Return checksummed contract addresses for a chain and market class.

    Args:
        chain_id: EVM chain ID (137 for Polygon, 80002 for Amoy).
        neg_risk: Whether the market settles through the neg-risk exchange.

    Returns:
        Contract configuration with EIP-55 checksummed addresses.

    Raises:
        UnknownChainError: If the chain has no configuration.

    """
    config = _CONTRACTS.get((chain_id, neg_risk))
    if config is None:
        msg = f"no contract configuration for chain {chain_id} (neg_risk={neg_risk})"
        raise UnknownChainError(msg)
    return ContractConfig(
        exchange=Web3.to_checksum_address(config.exchange),
        collateral=Web3.to_checksum_address(config.collateral),
        conditional_tokens=Web3.to_checksum_address(config.conditional_tokens),
        neg_risk_adapter=(
            Web3.to_checksum_address(config.neg_risk_adapter) if config.neg_risk_adapter else ""
        ),
    )
