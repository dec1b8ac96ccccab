from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .constants import (
    GAS_STATION_URL,
    HTTP_TIMEOUT_SECONDS,
    SIGNATURE_DATABASE_URL,
)

__all__ = [
    "Network",
    "NetworkConfig",
    "NETWORKS",
    "get_network_config",
    "find_network_by_rpc_url",
    "TransactOptions",
    "ServiceEndpoints",
]


class Network(str, Enum):
    MAINNET = "mainnet"
    SEPOLIA = "sepolia"
    HOLESKY = "holesky"
    BASE = "base"
    BASE_SEPOLIA = "base-sepolia"


@dataclass
class NetworkConfig:
    name: Network
    chain_id: int
    rpc_url: str
    explorer_tx_url: str


NETWORKS: dict[Network, NetworkConfig] = {
    Network.MAINNET: NetworkConfig(
        name=Network.MAINNET,
        chain_id=1,
        rpc_url="https://ethereum-rpc.publicnode.com",
        explorer_tx_url="https://etherscan.io/tx/",
    ),
    Network.SEPOLIA: NetworkConfig(
        name=Network.SEPOLIA,
        chain_id=11155111,
        rpc_url="https://ethereum-sepolia-rpc.publicnode.com",
        explorer_tx_url="https://sepolia.etherscan.io/tx/",
    ),
    Network.HOLESKY: NetworkConfig(
        name=Network.HOLESKY,
        chain_id=17000,
        rpc_url="https://ethereum-holesky-rpc.publicnode.com",
        explorer_tx_url="https://holesky.etherscan.io/tx/",
    ),
    Network.BASE: NetworkConfig(
        name=Network.BASE,
        chain_id=8453,
        rpc_url="https://mainnet.base.org",
        explorer_tx_url="https://basescan.org/tx/",
    ),
    Network.BASE_SEPOLIA: NetworkConfig(
        name=Network.BASE_SEPOLIA,
        chain_id=84532,
        rpc_url="https://sepolia.base.org",
        explorer_tx_url="https://sepolia.basescan.org/tx/",
    ),
}


def get_network_config(network: Network, rpc_url: Optional[str] = None) -> NetworkConfig:
    cfg = NETWORKS[network]
    if rpc_url:
        return replace(cfg, rpc_url=rpc_url)
    return cfg


def find_network_by_rpc_url(rpc_url: str) -> Optional[NetworkConfig]:
    """Return the known network whose default RPC URL is ``rpc_url``, if any.

    Explorer links are only logged for nodes found in ``NETWORKS``.
    """
    for cfg in NETWORKS.values():
        if cfg.rpc_url == rpc_url:
            return cfg
    return None


class TransactOptions(BaseModel):
    """
    Behavioural switches for a single ``TxClient.transact`` call.

    Fee, nonce and gas-limit overrides live on ``TransactionRequest``;
    these options only control side effects and how far the pipeline runs.

    Example:
        ```python
        options = TransactOptions(dry_run=True, show_raw_tx=True)
        result = client.transact(request, options)
        ```
    """

    model_config = ConfigDict(frozen=True)

    dry_run: bool = Field(
        default=False,
        description="Sign the transaction and report its hash without broadcasting",
    )
    show_raw_tx: bool = Field(
        default=False,
        description="Log the 0x-prefixed raw signed transaction before sending",
    )
    show_estimate_gas: bool = Field(
        default=False,
        description="Run eth_estimateGas against the built transaction and log the result",
    )
    terse_output: bool = Field(
        default=False,
        description="Suppress block-explorer URL logging",
    )
    skip_confirmation: bool = Field(
        default=False,
        description="Return right after broadcast without waiting for a receipt",
    )
    receipt_timeout: float = Field(
        default=0,
        ge=0,
        description="Receipt polling budget in seconds (0 = wait forever)",
    )


class ServiceEndpoints(BaseModel):
    """
    HTTP services consulted outside the JSON-RPC node.

    Example:
        ```python
        endpoints = ServiceEndpoints(gas_station_url="https://oracle.example/gas.json")
        ```
    """

    model_config = ConfigDict(frozen=True)

    gas_station_url: str = Field(
        default=GAS_STATION_URL,
        description="Gas-price oracle returning a JSON object with a 'fast' field",
    )
    signature_database_url: str = Field(
        default=SIGNATURE_DATABASE_URL,
        description="Function-selector lookup service",
    )
    timeout: float = Field(
        default=HTTP_TIMEOUT_SECONDS,
        gt=0,
        description="HTTP request timeout in seconds",
    )
