from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional

from .constants import FEE_HISTORY_AVERAGE_WINDOW
from .errors import ValidationError

__all__ = [
    "FeeModel",
    "TransactionRequest",
    "FeeHistorySample",
    "DynamicFees",
    "SignedTransaction",
    "SelectorEntry",
    "TransactResult",
]


class FeeModel(str, Enum):
    LEGACY = "legacy"
    DYNAMIC_FEE = "dynamic-fee"  # EIP-1559


@dataclass
class TransactionRequest:
    """Everything needed to build one transaction.

    Attributes:
        private_key: Sender private key (hex string, 0x prefix optional)
        to: Destination address; None means contract creation
        value: Amount in wei
        data: Call data, or contract bytecode for a creation
        nonce: Explicit nonce, or -1 to use the sender's pending nonce
        gas_limit: Explicit gas limit, or 0 to infer one
        gas_price: Legacy gas price in gwei (decimal string)
        max_priority_fee_per_gas: Dynamic-fee tip in gwei (decimal string)
        max_fee_per_gas: Dynamic-fee cap in gwei (decimal string)
        fee_model: Which transaction shape to build
    """
    private_key: str
    to: Optional[str] = None
    value: int = 0
    data: bytes = b""
    nonce: int = -1
    gas_limit: int = 0
    gas_price: Optional[str] = None
    max_priority_fee_per_gas: Optional[str] = None
    max_fee_per_gas: Optional[str] = None
    fee_model: FeeModel = FeeModel.DYNAMIC_FEE

    @property
    def is_contract_creation(self) -> bool:
        return self.to is None


@dataclass
class FeeHistorySample:
    """Reward percentiles and base fees from ``eth_feeHistory``.

    ``rewards`` holds one (5th, 50th, 95th) triple per block, oldest first.
    ``base_fees`` holds one entry per block plus the next-block projection
    the node appends.
    """
    rewards: List[List[int]]
    base_fees: List[int]

    def _percentile_average(self, index: int) -> int:
        recent = self.rewards[-FEE_HISTORY_AVERAGE_WINDOW:]
        if not recent:
            raise ValidationError("fee history has no priority fee rewards to average")
        return sum(int(r[index]) for r in recent) // len(recent)

    @property
    def slow(self) -> int:
        return self._percentile_average(0)

    @property
    def average(self) -> int:
        return self._percentile_average(1)

    @property
    def fast(self) -> int:
        return self._percentile_average(2)


@dataclass
class DynamicFees:
    max_priority_fee_per_gas: int
    max_fee_per_gas: int


@dataclass(frozen=True)
class SignedTransaction:
    """Signed transaction ready for broadcast.

    ``hash`` is computed locally and identifies the transaction when the
    node echoes its own hash back.
    """
    raw_transaction: bytes
    hash: str
    tx: dict
    sender: str

    @property
    def nonce(self) -> int:
        return self.tx["nonce"]


@dataclass
class SelectorEntry:
    """Candidate signatures for a 4-byte selector. Advisory only; collisions happen."""
    selector: str
    candidates: List[str] = field(default_factory=list)


@dataclass
class TransactResult:
    tx_hash: str
    nonce: int
    dry_run: bool = False
    contract_address: Optional[str] = None
    receipt: Optional[Any] = None
    signed: Optional[SignedTransaction] = None
