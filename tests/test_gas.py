"""
Tests for the gas-limit heuristic.
"""

import pytest

from ethtx.constants import CONTRACT_CALL_GAS_LIMIT, CONTRACT_CREATION_GAS_LIMIT, TRANSFER_GAS_LIMIT
from ethtx.errors import RpcError, ValidationError
from ethtx.gas import GasLimitEstimator

from .conftest import CONTRACT, RECIPIENT, make_w3


def make_estimator(**kwargs) -> GasLimitEstimator:
    return GasLimitEstimator(make_w3(code={CONTRACT: b"\x60\x80\x60\x40"}, **kwargs))


class TestGasLimitEstimator:
    """Tests for GasLimitEstimator.estimate."""

    def test_contract_creation(self) -> None:
        assert make_estimator().estimate(None, b"\x60\x80") == CONTRACT_CREATION_GAS_LIMIT == 7_000_000

    def test_plain_transfer(self) -> None:
        assert make_estimator().estimate(RECIPIENT) == TRANSFER_GAS_LIMIT

    def test_transfer_to_contract(self) -> None:
        assert make_estimator().estimate(CONTRACT) == CONTRACT_CALL_GAS_LIMIT == 900_000

    def test_payload_to_plain_address(self) -> None:
        assert make_estimator().estimate(RECIPIENT, b"\xa9\x05\x9c\xbb") == CONTRACT_CALL_GAS_LIMIT

    @pytest.mark.parametrize(
        "to, data",
        [(None, b""), (None, b"\x01"), (RECIPIENT, b""), (RECIPIENT, b"\x01"), (CONTRACT, b""), (CONTRACT, b"\x01")],
    )
    def test_override_always_wins(self, to, data) -> None:
        assert make_estimator().estimate(to, data, override=55_555) == 55_555

    def test_override_skips_code_probe(self) -> None:
        estimator = make_estimator()
        estimator.estimate(RECIPIENT, override=30_000)
        assert estimator.w3.eth.called("get_code") == []

    def test_code_probed_at_latest_block(self) -> None:
        estimator = make_estimator()
        estimator.estimate(RECIPIENT)
        (call,) = estimator.w3.eth.called("get_code")
        assert call[1] == RECIPIENT
        assert call[2] == "latest"

    def test_custom_defaults(self) -> None:
        estimator = GasLimitEstimator(make_w3(), creation_gas_limit=3_000_000)
        assert estimator.estimate(None) == 3_000_000

    def test_code_probe_failure(self) -> None:
        estimator = make_estimator()
        estimator.w3.eth.errors["get_code"] = TimeoutError("read timed out")

        with pytest.raises(RpcError) as exc:
            estimator.estimate(RECIPIENT)
        assert exc.value.operation == "eth_getCode"

    @pytest.mark.parametrize("to", ["0x1234", "not-an-address", "0x" + "zz" * 20])
    def test_malformed_address_rejected_before_probe(self, to) -> None:
        estimator = make_estimator()

        with pytest.raises(ValidationError):
            estimator.estimate(to)
        assert estimator.w3.eth.called("get_code") == []
