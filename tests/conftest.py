"""
Shared fixtures for ethtx tests.
"""

from types import SimpleNamespace
from typing import Any, Dict, List, Optional

import pytest
from eth_account import Account
from eth_utils import keccak
from web3.exceptions import TransactionNotFound


# =============================================================================
# Test Constants
# =============================================================================

# Private key for tests (DO NOT USE IN PRODUCTION)
PRIVATE_KEY = "0x" + "11" * 32
SENDER = Account.from_key(PRIVATE_KEY).address

RECIPIENT = "0x1234567890123456789012345678901234567890"
CONTRACT = "0xabcdefabcdefabcdefabcdefabcdefabcdefabcd"

SEPOLIA_CHAIN_ID = 11155111

# 4 blocks of (5th, 50th, 95th) percentile rewards, oldest first
FEE_HISTORY = {
    "oldestBlock": 100,
    "baseFeePerGas": [900, 950, 1000, 1000, 1050],
    "gasUsedRatio": [0.4, 0.5, 0.5, 0.4],
    "reward": [[1, 10, 100], [2, 20, 200], [3, 30, 300], [4, 40, 400]],
}
LATEST_BASE_FEE = 1_000

NOT_FOUND = object()


# =============================================================================
# Stub Web3
# =============================================================================


class StubEth:
    """Minimal stand-in for ``web3.eth`` recording every call."""

    def __init__(
        self,
        chain_id: int = SEPOLIA_CHAIN_ID,
        pending_nonce: int = 7,
        code: Optional[Dict[str, bytes]] = None,
        fee_history: Optional[dict] = None,
        block: Optional[dict] = None,
        send_hash: Optional[bytes] = None,
        receipts: Optional[List[Any]] = None,
        estimate: int = 21_000,
    ):
        self._chain_id = chain_id
        self.pending_nonce = pending_nonce
        self.code = {k.lower(): v for k, v in (code or {}).items()}
        self.fee_history_result = fee_history or FEE_HISTORY
        self.block = block if block is not None else {"number": 104, "baseFeePerGas": LATEST_BASE_FEE}
        self.send_hash = send_hash
        self.receipts = list(receipts or [])
        self.estimate = estimate
        self.calls: List[tuple] = []
        self.errors: Dict[str, Exception] = {}

    def _record(self, name: str, *args: Any) -> None:
        self.calls.append((name, *args))
        if name in self.errors:
            raise self.errors[name]

    def called(self, name: str) -> List[tuple]:
        return [c for c in self.calls if c[0] == name]

    @property
    def chain_id(self) -> int:
        self._record("chain_id")
        return self._chain_id

    def get_transaction_count(self, address, block_identifier):
        self._record("get_transaction_count", address, block_identifier)
        return self.pending_nonce

    def get_code(self, address, block_identifier):
        self._record("get_code", address, block_identifier)
        return self.code.get(address.lower(), b"")

    def fee_history(self, block_count, newest_block, reward_percentiles):
        self._record("fee_history", block_count, newest_block, reward_percentiles)
        return self.fee_history_result

    def get_block(self, block_identifier):
        self._record("get_block", block_identifier)
        return self.block

    def send_raw_transaction(self, raw):
        self._record("send_raw_transaction", raw)
        if self.send_hash is not None:
            return self.send_hash
        return keccak(hexstr=raw)

    def get_transaction_receipt(self, tx_hash):
        self._record("get_transaction_receipt", tx_hash)
        item = self.receipts.pop(0) if self.receipts else NOT_FOUND
        if item is NOT_FOUND:
            raise TransactionNotFound(f"Transaction with hash: '{tx_hash}' not found.")
        if isinstance(item, Exception):
            raise item
        return item

    def estimate_gas(self, transaction):
        self._record("estimate_gas", transaction)
        return self.estimate

    def call(self, transaction, block_identifier):
        self._record("call", transaction, block_identifier)
        return b"\x00" * 31 + b"\x01"


def make_w3(**kwargs: Any) -> SimpleNamespace:
    return SimpleNamespace(eth=StubEth(**kwargs))


class FakeClock:
    """Monotonic clock advanced only by ``sleep``."""

    def __init__(self) -> None:
        self.now = 0.0
        self.sleeps: List[float] = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


class StubLookup:
    """SelectorLookup replacement returning canned candidates."""

    def __init__(self, candidates: Optional[List[str]] = None, error: Optional[Exception] = None):
        self.candidates = candidates or []
        self.error = error
        self.selectors: List[str] = []

    def lookup(self, selector: str):
        from ethtx.models import SelectorEntry

        self.selectors.append(selector)
        if self.error is not None:
            raise self.error
        return SelectorEntry(selector=selector, candidates=list(self.candidates))


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture()
def w3() -> SimpleNamespace:
    return make_w3()


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()
