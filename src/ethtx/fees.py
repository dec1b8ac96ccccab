"""Fee estimation for legacy and dynamic-fee (EIP-1559) transactions.

Dynamic fees follow the fee-history recipe: ask the node for the last 4
blocks' 5th/50th/95th percentile priority fees, average the 50th percentile
over the three most recent blocks and add it to the latest base fee.

    $ curl -X POST --data '{"id": 1, "jsonrpc": "2.0", "method": "eth_feeHistory",
        "params": ["0x4", "latest", [5, 50, 95]]}' $RPC_URL
    {"result": {"baseFeePerGas": ["0x4ed3ef336", ...], "reward": [["0x6b51f67", "0x3b9aca00", "0x106853ddd8"], ...], ...}}

Legacy gas prices come from a gas-station style oracle when not overridden.
"""

from decimal import Decimal, InvalidOperation
from typing import Optional

import httpx
from pydantic import BaseModel, ValidationError as PydanticValidationError
from web3 import Web3

from .config import ServiceEndpoints
from .constants import (
    FEE_HISTORY_BLOCK_COUNT,
    FEE_HISTORY_PERCENTILES,
    GAS_STATION_SCALE,
    MAX_UINT256,
)
from .diagnostics import ErrorDiagnostics
from .errors import GasOracleError, InvalidUnitError, ValidationError
from .models import DynamicFees, FeeHistorySample
from .rpc import wrap_rpc_error
from .utils.logging import get_logger

__all__ = ["parse_gwei", "GasStationPrice", "FeeEstimator"]

_logger = get_logger(__name__)


def parse_gwei(value: str, field: str = "fee") -> int:
    """Convert a decimal gwei string to wei.

    Exact for whole or fractional gwei down to 1 wei; anything finer is truncated.

    Raises:
        InvalidUnitError: If value is not a finite, non-negative decimal
    """
    try:
        amount = Decimal(str(value).strip())
    except InvalidOperation:
        raise InvalidUnitError(f"{field} must be a decimal gwei amount, got {value!r}") from None
    if not amount.is_finite() or amount < 0:
        raise InvalidUnitError(f"{field} must be a finite non-negative gwei amount, got {value!r}")
    try:
        wei = Web3.to_wei(amount, "gwei")
    except ValueError:
        raise InvalidUnitError(f"{field} exceeds uint256") from None
    if wei > MAX_UINT256:
        raise InvalidUnitError(f"{field} exceeds uint256")
    return wei


class GasStationPrice(BaseModel):
    """Gas-station oracle response. Prices are in the oracle's native units."""

    fast: float
    fastest: Optional[float] = None
    safeLow: Optional[float] = None
    average: Optional[float] = None


class FeeEstimator:
    """Produce fee parameters for a transaction unless the caller supplies them."""

    def __init__(
        self,
        w3: Web3,
        endpoints: Optional[ServiceEndpoints] = None,
        diagnostics: Optional[ErrorDiagnostics] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.w3 = w3
        self.endpoints = endpoints or ServiceEndpoints()
        self.diagnostics = diagnostics
        self._transport = transport

    def fetch_fee_history(self) -> FeeHistorySample:
        try:
            history = self.w3.eth.fee_history(
                FEE_HISTORY_BLOCK_COUNT, "latest", list(FEE_HISTORY_PERCENTILES)
            )
        except Exception as e:
            raise wrap_rpc_error("eth_feeHistory", e, self.diagnostics) from e
        return FeeHistorySample(
            rewards=[[int(x) for x in block] for block in history.get("reward") or []],
            base_fees=[int(x) for x in history.get("baseFeePerGas") or []],
        )

    def latest_base_fee(self) -> int:
        try:
            block = self.w3.eth.get_block("latest")
        except Exception as e:
            raise wrap_rpc_error("eth_getBlockByNumber", e, self.diagnostics) from e
        base_fee = block.get("baseFeePerGas")
        if base_fee is None:
            raise ValidationError("latest block has no base fee; use the legacy fee model on this network")
        return int(base_fee)

    def estimate_dynamic_fees(
        self,
        priority_fee_override: Optional[str] = None,
        max_fee_override: Optional[str] = None,
    ) -> DynamicFees:
        """Return (priority fee, max fee) in wei.

        With both overrides set no RPC call is made. Otherwise the estimate is
        computed and whichever override is present replaces its half.
        """
        if priority_fee_override and max_fee_override:
            return DynamicFees(
                max_priority_fee_per_gas=parse_gwei(priority_fee_override, "max_priority_fee_per_gas"),
                max_fee_per_gas=parse_gwei(max_fee_override, "max_fee_per_gas"),
            )

        sample = self.fetch_fee_history()
        # slow/fast are fetched but not applied yet
        priority_fee = sample.average
        max_fee = self.latest_base_fee() + priority_fee
        _logger.debug(
            "Dynamic fees estimated",
            extra={"slow": sample.slow, "average": sample.average, "fast": sample.fast, "max_fee": max_fee},
        )

        if priority_fee_override:
            priority_fee = parse_gwei(priority_fee_override, "max_priority_fee_per_gas")
        if max_fee_override:
            max_fee = parse_gwei(max_fee_override, "max_fee_per_gas")
        return DynamicFees(max_priority_fee_per_gas=priority_fee, max_fee_per_gas=max_fee)

    def estimate_gas_price(self, override: Optional[str] = None) -> int:
        """Return a legacy gas price in wei, from ``override`` or the oracle's fast tier.

        Raises:
            GasOracleError: If the oracle is the only source and cannot be used
        """
        if override:
            return parse_gwei(override, "gas_price")
        return self.fetch_oracle_gas_price()

    def fetch_oracle_gas_price(self) -> int:
        url = self.endpoints.gas_station_url
        try:
            with httpx.Client(timeout=self.endpoints.timeout, transport=self._transport) as client:
                response = client.get(url)
                response.raise_for_status()
                price = GasStationPrice.model_validate(response.json())
        except httpx.HTTPError as e:
            raise GasOracleError(f"gas price oracle request failed: {e}") from e
        except (ValueError, PydanticValidationError) as e:
            raise GasOracleError(f"gas price oracle returned an unreadable body: {e}") from e

        gas_price = int(price.fast * GAS_STATION_SCALE)
        _logger.debug("Oracle gas price", extra={"fast": price.fast, "gas_price": gas_price})
        return gas_price
