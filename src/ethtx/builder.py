"""Transaction assembly and signing.

``TransactionBuilder`` resolves nonce, gas limit, fees and chain id into a
legacy or dynamic-fee (type 2) parameter dict; ``Signer`` signs it with the
sender's key under the chain's signer rules.
"""

from typing import Optional

from eth_account import Account
from eth_account.signers.local import LocalAccount
from eth_typing import ChecksumAddress
from web3 import Web3
from web3.types import TxParams

from .constants import MAX_UINT256
from .diagnostics import ErrorDiagnostics
from .errors import InvalidKeyError, ValidationError
from .fees import FeeEstimator
from .gas import GasLimitEstimator
from .models import FeeModel, SignedTransaction, TransactionRequest
from .rpc import wrap_rpc_error

__all__ = ["TransactionBuilder", "Signer"]


class Signer:
    """Signs transactions with a local private key."""

    def __init__(self, private_key: str):
        # Sanitize private key errors to prevent key leakage in stack traces
        try:
            self.account: LocalAccount = Account.from_key(private_key)
        except Exception:
            raise InvalidKeyError("Invalid private key format (key not shown for security)") from None

    @property
    def address(self) -> ChecksumAddress:
        return self.account.address

    def sign(self, tx: TxParams) -> SignedTransaction:
        """Sign ``tx``. The chain id inside ``tx`` binds the signature to one network.

        Raises:
            ValidationError: If the parameters cannot be signed
        """
        try:
            signed = self.account.sign_transaction(tx)
        except (TypeError, ValueError) as e:
            raise ValidationError(f"Cannot sign transaction: {e}") from e
        return SignedTransaction(
            raw_transaction=bytes(signed.raw_transaction),
            hash=Web3.to_hex(signed.hash),
            tx=dict(tx),
            sender=self.address,
        )


class TransactionBuilder:
    def __init__(
        self,
        w3: Web3,
        fee_estimator: Optional[FeeEstimator] = None,
        gas_estimator: Optional[GasLimitEstimator] = None,
        diagnostics: Optional[ErrorDiagnostics] = None,
    ):
        self.w3 = w3
        self.diagnostics = diagnostics
        self.fee_estimator = fee_estimator or FeeEstimator(w3, diagnostics=diagnostics)
        self.gas_estimator = gas_estimator or GasLimitEstimator(w3, diagnostics=diagnostics)

    def resolve_nonce(self, sender: str, override: int = -1) -> int:
        """Use ``override`` when it is >= 0, otherwise the sender's pending nonce."""
        if override >= 0:
            return override
        try:
            return self.w3.eth.get_transaction_count(sender, "pending")
        except Exception as e:
            raise wrap_rpc_error("eth_getTransactionCount", e, self.diagnostics) from e

    def chain_id(self) -> int:
        try:
            return self.w3.eth.chain_id
        except Exception as e:
            raise wrap_rpc_error("eth_chainId", e, self.diagnostics) from e

    def build(self, request: TransactionRequest, sender: str) -> TxParams:
        """Assemble unsigned transaction parameters for ``request``.

        Args:
            request: What to send and any overrides
            sender: Address whose nonce is used

        Returns:
            Legacy params (``gasPrice``) or type-2 params
            (``maxPriorityFeePerGas``/``maxFeePerGas``), never both

        Raises:
            ValidationError: If the request mixes fee shapes or values are out of range
        """
        self._validate(request)

        nonce = self.resolve_nonce(sender, request.nonce)
        gas = self.gas_estimator.estimate(request.to, request.data, request.gas_limit)

        tx: TxParams = {
            "nonce": nonce,
            "gas": gas,
            "value": request.value,
            "data": request.data,
        }
        if request.to is not None:
            tx["to"] = Web3.to_checksum_address(request.to)

        if request.fee_model == FeeModel.LEGACY:
            tx["gasPrice"] = self.fee_estimator.estimate_gas_price(request.gas_price)
        else:
            fees = self.fee_estimator.estimate_dynamic_fees(
                request.max_priority_fee_per_gas, request.max_fee_per_gas
            )
            tx["type"] = 2
            tx["maxPriorityFeePerGas"] = fees.max_priority_fee_per_gas
            tx["maxFeePerGas"] = fees.max_fee_per_gas

        tx["chainId"] = self.chain_id()
        return tx

    @staticmethod
    def _validate(request: TransactionRequest) -> None:
        if request.value < 0 or request.value > MAX_UINT256:
            raise ValidationError("value must be a uint256")
        if request.gas_limit < 0:
            raise ValidationError("gas_limit must be non-negative (0 = auto)")
        if request.to is not None and not Web3.is_address(request.to):
            raise ValidationError("to must be a valid Ethereum address")
        if request.fee_model == FeeModel.LEGACY:
            if request.max_priority_fee_per_gas or request.max_fee_per_gas:
                raise ValidationError("dynamic fee overrides cannot be used with the legacy fee model")
        elif request.gas_price:
            raise ValidationError("gas_price cannot be used with the dynamic-fee model")
