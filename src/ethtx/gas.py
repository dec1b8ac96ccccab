"""Gas-limit heuristic.

No ``eth_estimateGas`` round trip is made for sizing. The limits are fixed
per destination type, which can under- or over-provision gas for unusual
contracts; callers who know better pass an explicit gas limit.
"""

from typing import Optional

from web3 import Web3

from .constants import (
    CONTRACT_CALL_GAS_LIMIT,
    CONTRACT_CREATION_GAS_LIMIT,
    TRANSFER_GAS_LIMIT,
)
from .diagnostics import ErrorDiagnostics
from .errors import ValidationError
from .rpc import wrap_rpc_error

__all__ = ["GasLimitEstimator"]


class GasLimitEstimator:
    def __init__(
        self,
        w3: Web3,
        diagnostics: Optional[ErrorDiagnostics] = None,
        creation_gas_limit: int = CONTRACT_CREATION_GAS_LIMIT,
        contract_gas_limit: int = CONTRACT_CALL_GAS_LIMIT,
        transfer_gas_limit: int = TRANSFER_GAS_LIMIT,
    ):
        self.w3 = w3
        self.diagnostics = diagnostics
        self.creation_gas_limit = creation_gas_limit
        self.contract_gas_limit = contract_gas_limit
        self.transfer_gas_limit = transfer_gas_limit

    def is_contract(self, address: str) -> bool:
        """Return True if ``address`` holds code at the latest block.

        Raises:
            ValidationError: If ``address`` is not a valid address
            RpcError: If the code query fails
        """
        if not Web3.is_address(address):
            raise ValidationError(f"not a valid Ethereum address: {address!r}")
        checksum_address = Web3.to_checksum_address(address)
        try:
            code = self.w3.eth.get_code(checksum_address, "latest")
        except Exception as e:
            raise wrap_rpc_error("eth_getCode", e, self.diagnostics) from e
        return len(code) > 0

    def estimate(self, to: Optional[str], data: bytes = b"", override: int = 0) -> int:
        """Pick a gas limit.

        Args:
            to: Destination address, None for contract creation
            data: Call data
            override: Explicit gas limit; any value > 0 wins

        Returns:
            Gas limit
        """
        if override > 0:
            return override
        if to is None:
            return self.creation_gas_limit
        if data:
            return self.contract_gas_limit
        if self.is_contract(to):
            return self.contract_gas_limit
        return self.transfer_gas_limit
