"""Constants for ethtx.

This module defines the constant values used across the package,
including gas-limit heuristics, fee-history parameters, polling
settings and the remote services consulted for prices and selectors.
"""

# Unit Constants
MAX_UINT256 = 2**256 - 1

# ABI Encoding Constants
SELECTOR_HEX_LENGTH = 10  # "0x" + 8 hex digits
REVERT_SELECTOR = "0x08c379a0"  # Error(string)

# Signature Constants
HASH_LENGTH = 32

# Gas Limit Heuristics (no eth_estimateGas round trip)
TRANSFER_GAS_LIMIT = 21_000
CONTRACT_CALL_GAS_LIMIT = 900_000
CONTRACT_CREATION_GAS_LIMIT = 7_000_000

# Fee History (EIP-1559)
FEE_HISTORY_BLOCK_COUNT = 4
FEE_HISTORY_PERCENTILES = (5, 50, 95)
FEE_HISTORY_AVERAGE_WINDOW = 3  # most recent blocks averaged per percentile

# Gas Station Oracle (legacy gas price)
GAS_STATION_URL = "https://ethgasstation.info/json/ethgasAPI.json"
GAS_STATION_SCALE = 100_000_000  # oracle units -> wei

# Signature Database
SIGNATURE_DATABASE_URL = "https://api.openchain.xyz/signature-database/v1/lookup"

# Receipt Polling
RECEIPT_POLL_INTERVAL_SECONDS = 5

# Network Constants
PROVIDER_TIMEOUT_SECONDS = 30
HTTP_TIMEOUT_SECONDS = 10

__all__ = [
    "MAX_UINT256",
    "SELECTOR_HEX_LENGTH",
    "REVERT_SELECTOR",
    "HASH_LENGTH",
    "TRANSFER_GAS_LIMIT",
    "CONTRACT_CALL_GAS_LIMIT",
    "CONTRACT_CREATION_GAS_LIMIT",
    "FEE_HISTORY_BLOCK_COUNT",
    "FEE_HISTORY_PERCENTILES",
    "FEE_HISTORY_AVERAGE_WINDOW",
    "GAS_STATION_URL",
    "GAS_STATION_SCALE",
    "SIGNATURE_DATABASE_URL",
    "RECEIPT_POLL_INTERVAL_SECONDS",
    "PROVIDER_TIMEOUT_SECONDS",
    "HTTP_TIMEOUT_SECONDS",
]
