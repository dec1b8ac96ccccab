from typing import Optional

from web3 import Web3

from .diagnostics import ErrorDiagnostics
from .models import SignedTransaction
from .rpc import wrap_rpc_error
from .utils.logging import get_logger

__all__ = ["encode_raw_transaction", "Broadcaster"]

_logger = get_logger(__name__)


def encode_raw_transaction(signed: SignedTransaction) -> str:
    """Return the canonical encoding of ``signed`` as a 0x-prefixed hex string."""
    return Web3.to_hex(signed.raw_transaction)


class Broadcaster:
    """Submits signed transactions with ``eth_sendRawTransaction``."""

    def __init__(self, w3: Web3, diagnostics: Optional[ErrorDiagnostics] = None):
        self.w3 = w3
        self.diagnostics = diagnostics

    def broadcast(self, signed: SignedTransaction) -> str:
        """Send ``signed`` and return the transaction hash reported by the node.

        The node's hash is authoritative. If it differs from the locally
        computed one a warning is logged and the node's hash is returned.

        Raises:
            RpcError: If the node rejects the transaction or cannot be reached
        """
        raw_tx = encode_raw_transaction(signed)
        try:
            returned = self.w3.eth.send_raw_transaction(raw_tx)
        except Exception as e:
            raise wrap_rpc_error("eth_sendRawTransaction", e, self.diagnostics) from e

        node_hash = Web3.to_hex(returned)
        if node_hash.lower() != signed.hash.lower():
            _logger.warning(
                "Transaction hash mismatch, using the hash returned by eth_sendRawTransaction",
                extra={"computed_hash": signed.hash, "returned_hash": node_hash},
            )
        return node_hash
