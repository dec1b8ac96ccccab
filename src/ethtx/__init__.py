from .broadcast import Broadcaster, encode_raw_transaction
from .builder import Signer, TransactionBuilder
from .client import TxClient, contract_address
from .config import (
    NETWORKS,
    Network,
    NetworkConfig,
    ServiceEndpoints,
    TransactOptions,
    find_network_by_rpc_url,
    get_network_config,
)
from .constants import (
    CONTRACT_CALL_GAS_LIMIT,
    CONTRACT_CREATION_GAS_LIMIT,
    FEE_HISTORY_BLOCK_COUNT,
    FEE_HISTORY_PERCENTILES,
    GAS_STATION_URL,
    PROVIDER_TIMEOUT_SECONDS,
    RECEIPT_POLL_INTERVAL_SECONDS,
    SIGNATURE_DATABASE_URL,
    TRANSFER_GAS_LIMIT,
)
from .diagnostics import ErrorDiagnostics, decode_revert_reason, extract_error_data
from .errors import (
    EthTxError,
    GasOracleError,
    InvalidKeyError,
    InvalidSignatureError,
    InvalidUnitError,
    ReceiptTimeoutError,
    RpcError,
    SelectorLookupError,
    TransactionFailedError,
    ValidationError,
)
from .fees import FeeEstimator, parse_gwei
from .gas import GasLimitEstimator
from .models import (
    DynamicFees,
    FeeHistorySample,
    FeeModel,
    SelectorEntry,
    SignedTransaction,
    TransactionRequest,
    TransactResult,
)
from .receipts import ReceiptPoller
from .recovery import build_signature, get_recovery_id, recover_address, recover_pubkey
from .selectors import SelectorLookup

__version__ = "0.1.0"

__all__ = [
    # Client
    "TxClient",
    "contract_address",
    # Pipeline
    "TransactionBuilder",
    "Signer",
    "Broadcaster",
    "encode_raw_transaction",
    "ReceiptPoller",
    "FeeEstimator",
    "parse_gwei",
    "GasLimitEstimator",
    # Config
    "Network",
    "NetworkConfig",
    "NETWORKS",
    "get_network_config",
    "find_network_by_rpc_url",
    "TransactOptions",
    "ServiceEndpoints",
    # Models
    "FeeModel",
    "TransactionRequest",
    "FeeHistorySample",
    "DynamicFees",
    "SignedTransaction",
    "SelectorEntry",
    "TransactResult",
    # Errors
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
    # Signature recovery
    "get_recovery_id",
    "build_signature",
    "recover_pubkey",
    "recover_address",
    # Diagnostics
    "SelectorLookup",
    "ErrorDiagnostics",
    "extract_error_data",
    "decode_revert_reason",
    # Constants
    "TRANSFER_GAS_LIMIT",
    "CONTRACT_CALL_GAS_LIMIT",
    "CONTRACT_CREATION_GAS_LIMIT",
    "FEE_HISTORY_BLOCK_COUNT",
    "FEE_HISTORY_PERCENTILES",
    "RECEIPT_POLL_INTERVAL_SECONDS",
    "GAS_STATION_URL",
    "SIGNATURE_DATABASE_URL",
    "PROVIDER_TIMEOUT_SECONDS",
    "__version__",
]
