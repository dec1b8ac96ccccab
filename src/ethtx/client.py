"""Transaction client for Ethereum-style JSON-RPC nodes.

This module provides the TxClient class, which runs the Transact workflow:

- Nonce resolution (pending nonce unless overridden)
- Gas-limit inference by destination type
- Fee estimation from fee history (EIP-1559) or a gas-price oracle (legacy)
- Signing bound to the node's live chain id
- Broadcast with a cross-check of the node-echoed hash
- Receipt polling and status check

Example:
    >>> from ethtx import TxClient, TransactionRequest, TransactOptions, Network
    >>> client = TxClient(network=Network.SEPOLIA)
    >>> result = client.transact(
    ...     TransactionRequest(
    ...         private_key="0x...",
    ...         to="0x...",
    ...         value=10**15,
    ...     ),
    ...     TransactOptions(receipt_timeout=300),
    ... )
    >>> print(result.tx_hash)
"""
from typing import Optional

import rlp
from eth_utils import keccak, to_canonical_address, to_checksum_address
from web3 import Web3
from web3.types import TxParams

from .broadcast import Broadcaster, encode_raw_transaction
from .builder import Signer, TransactionBuilder
from .config import (
    Network,
    NetworkConfig,
    ServiceEndpoints,
    TransactOptions,
    find_network_by_rpc_url,
    get_network_config,
)
from .constants import PROVIDER_TIMEOUT_SECONDS
from .diagnostics import ErrorDiagnostics
from .errors import ValidationError
from .fees import FeeEstimator
from .gas import GasLimitEstimator
from .models import SignedTransaction, TransactionRequest, TransactResult
from .receipts import ReceiptPoller
from .rpc import wrap_rpc_error
from .selectors import SelectorLookup
from .utils.logging import get_logger

__all__ = ["TxClient", "contract_address"]

_logger = get_logger(__name__)

# Fields forwarded to eth_estimateGas
_ESTIMATE_GAS_FIELDS = ("to", "value", "data", "gas", "gasPrice", "maxFeePerGas", "maxPriorityFeePerGas")


def contract_address(sender: str, nonce: int) -> str:
    """Address of the contract created by ``sender`` at ``nonce`` (CREATE opcode rule)."""
    return to_checksum_address(keccak(rlp.encode([to_canonical_address(sender), nonce]))[12:])


class TxClient:
    """Build, sign, broadcast and confirm transactions using Web3.py."""

    def __init__(
        self,
        network: Optional[Network] = None,
        rpc_url: Optional[str] = None,
        web3: Optional[Web3] = None,
        endpoints: Optional[ServiceEndpoints] = None,
        timeout: int = PROVIDER_TIMEOUT_SECONDS,
    ):
        if network is not None:
            self.config: Optional[NetworkConfig] = get_network_config(network, rpc_url)
        elif rpc_url:
            self.config = find_network_by_rpc_url(rpc_url)
        else:
            self.config = None
        self.rpc_url = rpc_url or (self.config.rpc_url if self.config else None)
        if web3 is None and not self.rpc_url:
            raise ValidationError("one of network, rpc_url or web3 is required")

        # Configure HTTPProvider with timeout so a stalled node cannot hang the caller
        self.w3 = web3 or Web3(Web3.HTTPProvider(
            self.rpc_url,
            request_kwargs={"timeout": timeout}
        ))
        self.endpoints = endpoints or ServiceEndpoints()
        self.diagnostics = ErrorDiagnostics(SelectorLookup(
            base_url=self.endpoints.signature_database_url,
            timeout=self.endpoints.timeout,
        ))
        self.fee_estimator = FeeEstimator(self.w3, self.endpoints, self.diagnostics)
        self.gas_estimator = GasLimitEstimator(self.w3, self.diagnostics)
        self.builder = TransactionBuilder(self.w3, self.fee_estimator, self.gas_estimator, self.diagnostics)
        self.broadcaster = Broadcaster(self.w3, self.diagnostics)
        self.poller = ReceiptPoller(self.w3, diagnostics=self.diagnostics)

    # ------------------------------------------------------------------
    # Transact workflow
    # ------------------------------------------------------------------
    def build_and_sign(self, request: TransactionRequest) -> SignedTransaction:
        """Build and sign ``request`` without sending it.

        Raises:
            InvalidKeyError: If the private key cannot be parsed
            RpcError: If a nonce, code, fee or chain id query fails
        """
        signer = Signer(request.private_key)
        tx = self.builder.build(request, signer.address)
        return signer.sign(tx)

    def transact(self, request: TransactionRequest, options: Optional[TransactOptions] = None) -> TransactResult:
        """Run the full pipeline for one transaction.

        Args:
            request: Destination, value, payload and any nonce/gas/fee overrides
            options: Dry run, logging and confirmation switches

        Returns:
            TransactResult with the node's transaction hash (or the local hash
            on a dry run) and, for contract creation, the new contract address

        Raises:
            ValidationError: If the request is malformed
            RpcError: If any RPC call fails
            GasOracleError: If a legacy gas price is needed and the oracle fails
            ReceiptTimeoutError: If the receipt does not show up in time
            TransactionFailedError: If the transaction was mined but reverted
        """
        options = options or TransactOptions()
        signed = self.build_and_sign(request)
        created = contract_address(signed.sender, signed.nonce) if request.is_contract_creation else None

        if options.show_raw_tx:
            _logger.info(f"raw tx = {encode_raw_transaction(signed)}")

        if options.show_estimate_gas:
            gas = self.estimate_gas(signed.sender, signed.tx)
            _logger.info(f"estimate gas = {gas}")

        if options.dry_run:
            # Return the locally computed hash, never broadcast
            return TransactResult(
                tx_hash=signed.hash,
                nonce=signed.nonce,
                dry_run=True,
                contract_address=created,
                signed=signed,
            )

        tx_hash = self.broadcaster.broadcast(signed)
        result = TransactResult(tx_hash=tx_hash, nonce=signed.nonce, contract_address=created, signed=signed)
        if options.skip_confirmation:
            return result

        receipt = self.poller.wait_for_receipt(tx_hash, options.receipt_timeout)
        if not options.terse_output:
            explorer_url = self.explorer_url(tx_hash)
            if explorer_url:
                _logger.info(explorer_url)

        result.receipt = self.poller.check_status(receipt, tx_hash)
        if created:
            _logger.info(f"the new contract deployed at {created}")
        return result

    def estimate_gas(self, sender: str, tx: TxParams) -> int:
        """Simulate ``tx`` with ``eth_estimateGas`` (diagnostic only, never used for sizing)."""
        msg: TxParams = {key: value for key, value in tx.items() if key in _ESTIMATE_GAS_FIELDS}
        msg["from"] = sender
        try:
            return self.w3.eth.estimate_gas(msg)
        except Exception as e:
            raise wrap_rpc_error("eth_estimateGas", e, self.diagnostics) from e

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    def call(self, to: str, data: bytes, block: str = "latest") -> bytes:
        """Invoke a constant contract method with ``eth_call``."""
        if not Web3.is_address(to):
            raise ValidationError("to must be a valid Ethereum address")
        try:
            return bytes(self.w3.eth.call({"to": Web3.to_checksum_address(to), "data": data}, block))
        except Exception as e:
            raise wrap_rpc_error("eth_call", e, self.diagnostics) from e

    def get_chain_id(self) -> int:
        return self.builder.chain_id()

    def explorer_url(self, tx_hash: str) -> Optional[str]:
        """Explorer link for ``tx_hash``; only known when the node is one of ``NETWORKS``."""
        if self.config is None:
            return None
        return self.config.explorer_tx_url + tx_hash
