from typing import Any, Optional

__all__ = [
    "EthTxError",
    "ValidationError",
    "InvalidKeyError",
    "InvalidUnitError",
    "InvalidSignatureError",
    "RpcError",
    "ReceiptTimeoutError",
    "TransactionFailedError",
    "GasOracleError",
    "SelectorLookupError",
]


class EthTxError(Exception):
    """Base exception for ethtx."""


class ValidationError(EthTxError):
    """Raised when input validation fails."""


class InvalidKeyError(ValidationError):
    """Raised when a private key cannot be parsed (the key is never echoed)."""


class InvalidUnitError(ValidationError):
    """Raised when an amount string or unit cannot be converted to wei."""


class InvalidSignatureError(ValidationError):
    """Raised when (v, r, s) or the message hash cannot be used for recovery."""


class RpcError(EthTxError):
    """Raised when an RPC/provider request fails.

    Attributes:
        operation: Name of the RPC operation that failed (e.g. "eth_sendRawTransaction")
        data: Structured error data returned by the node, if any
    """

    def __init__(self, message: str, operation: Optional[str] = None, data: Optional[str] = None):
        self.operation = operation
        self.data = data
        super().__init__(message)


class ReceiptTimeoutError(EthTxError):
    """Raised when no receipt shows up before the polling budget runs out."""

    def __init__(self, tx_hash: str, timeout: float):
        self.tx_hash = tx_hash
        self.timeout = timeout
        super().__init__(f"Receipt for {tx_hash} not found within {timeout}s")


class TransactionFailedError(EthTxError):
    """Raised when a transaction was mined but its execution reverted.

    The transaction consumed gas and is part of a block, so this is never
    conflated with a missing receipt or a transport failure.
    """

    def __init__(self, tx_hash: str, receipt: Any = None):
        self.tx_hash = tx_hash
        self.receipt = receipt
        super().__init__(f"Transaction {tx_hash} was mined but its status is failed, check it in a block explorer")


class GasOracleError(EthTxError):
    """Raised when the gas-price oracle cannot supply a price."""


class SelectorLookupError(EthTxError):
    """Raised when the signature database lookup fails."""
