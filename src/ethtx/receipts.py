"""
Receipt polling.

A receipt only exists once the transaction is mined, so the poller keeps
asking until it appears:

    querying --not found--> waiting (fixed interval) --> querying
    querying --found--> done
    waiting --budget spent--> ReceiptTimeoutError

Only "not found" is retried. Any other lookup error ends polling at once.
"""

from __future__ import annotations

import time
from typing import Any, Callable, Optional

from web3 import Web3
from web3.exceptions import TransactionNotFound

from .constants import RECEIPT_POLL_INTERVAL_SECONDS
from .diagnostics import ErrorDiagnostics
from .errors import ReceiptTimeoutError, TransactionFailedError
from .rpc import wrap_rpc_error
from .utils.logging import get_logger

__all__ = ["ReceiptPoller"]

_logger = get_logger(__name__)


class ReceiptPoller:
    """
    Wait for transaction receipts.

    Args:
        w3: Web3 instance
        interval: Seconds to sleep between lookups
        diagnostics: Optional diagnostics for lookup errors
        sleep: Sleep function (injectable for tests)
        clock: Monotonic clock function (injectable for tests)
    """

    def __init__(
        self,
        w3: Web3,
        interval: float = RECEIPT_POLL_INTERVAL_SECONDS,
        diagnostics: Optional[ErrorDiagnostics] = None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.w3 = w3
        self.interval = interval
        self.diagnostics = diagnostics
        self._sleep = sleep
        self._clock = clock

    def _lookup(self, tx_hash: str) -> Optional[Any]:
        try:
            return self.w3.eth.get_transaction_receipt(tx_hash)
        except TransactionNotFound:
            return None
        except Exception as e:
            raise wrap_rpc_error("eth_getTransactionReceipt", e, self.diagnostics) from e

    def wait_for_receipt(self, tx_hash: str, timeout: float = 0) -> Any:
        """
        Block until the receipt for ``tx_hash`` is available.

        Args:
            tx_hash: 0x-prefixed transaction hash
            timeout: Polling budget in seconds; 0 waits forever

        Returns:
            The receipt, whatever its status

        Raises:
            ReceiptTimeoutError: If ``timeout`` elapses first
            RpcError: If a lookup fails for any reason other than "not found"
        """
        started = self._clock()
        while True:
            receipt = self._lookup(tx_hash)
            if receipt is not None:
                return receipt

            _logger.info("Transaction not found (may be pending)", extra={"tx_hash": tx_hash})
            _logger.debug(f"Re-checking transaction after {self.interval} seconds", extra={"tx_hash": tx_hash})
            self._sleep(self.interval)

            # Never look up again once the budget is spent
            if timeout > 0 and self._clock() - started >= timeout:
                raise ReceiptTimeoutError(tx_hash, timeout)

    @staticmethod
    def check_status(receipt: Any, tx_hash: str) -> Any:
        """Return ``receipt`` if it reports success.

        Raises:
            TransactionFailedError: If the transaction was mined but reverted
        """
        if receipt["status"] != 1:
            raise TransactionFailedError(tx_hash, receipt)
        return receipt

    def confirm(self, tx_hash: str, timeout: float = 0) -> Any:
        """Wait for the receipt and require a successful status."""
        return self.check_status(self.wait_for_receipt(tx_hash, timeout), tx_hash)
