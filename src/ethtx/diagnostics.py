"""Best-effort decoration of opaque revert data.

When a node rejects a call or transaction it may attach the would-be revert
payload. Its first 4 bytes identify the custom error or function, and a
signature database can often name it. Nothing here changes which error is
eventually raised: diagnostics only log.
"""

from typing import Any, Optional

from eth_abi import decode as abi_decode
from eth_abi.exceptions import DecodingError

from .constants import REVERT_SELECTOR, SELECTOR_HEX_LENGTH
from .errors import SelectorLookupError, ValidationError
from .models import SelectorEntry
from .selectors import SelectorLookup
from .utils.logging import get_logger

__all__ = ["extract_error_data", "decode_revert_reason", "ErrorDiagnostics"]

_logger = get_logger(__name__)


def _data_from_payload(payload: Any) -> Optional[str]:
    if not isinstance(payload, dict):
        return None
    # JSON-RPC response envelope: {"error": {"code": .., "message": .., "data": ..}}
    if isinstance(payload.get("error"), dict):
        payload = payload["error"]
    data = payload.get("data")
    if isinstance(data, dict):
        # Some nodes nest it once more: {"data": {"data": "0x..."}}
        data = data.get("data")
    return data if isinstance(data, str) else None


def extract_error_data(exc: BaseException) -> Optional[str]:
    """Find the structured error data a web3 exception carries, if any.

    Looks at ``exc.data`` (contract logic errors), ``exc.rpc_response``
    (RPC errors) and a dict in ``exc.args[0]`` (older providers).
    """
    data = getattr(exc, "data", None)
    if isinstance(data, str):
        return data
    found = _data_from_payload(getattr(exc, "rpc_response", None))
    if found is not None:
        return found
    if exc.args:
        return _data_from_payload(exc.args[0])
    return None


def decode_revert_reason(raw: str) -> Optional[str]:
    """Decode Solidity revert reason from error data.

    Args:
        raw: Hex-encoded error data string

    Returns:
        Decoded revert reason string, or None if it is not an Error(string) payload
    """
    if not raw.startswith(REVERT_SELECTOR):
        return None
    try:
        payload = bytes.fromhex(raw[SELECTOR_HEX_LENGTH:])
        (reason,) = abi_decode(["string"], payload)
    except (ValueError, DecodingError):
        return None
    return reason


class ErrorDiagnostics:
    """Log candidate signatures for the selector embedded in an RPC error."""

    def __init__(self, lookup: Optional[SelectorLookup] = None) -> None:
        self.lookup = lookup or SelectorLookup()

    def diagnose(self, exc: BaseException) -> Optional[SelectorEntry]:
        """
        Inspect ``exc`` and log what its error data might mean.

        Never raises: lookup failures are logged and dropped.

        Returns:
            The SelectorEntry that was looked up, or None when there was
            nothing to look up or the lookup failed
        """
        data = extract_error_data(exc)
        if data is None:
            return None
        _logger.info("Data field in error", extra={"error_data": data})
        if len(data) < SELECTOR_HEX_LENGTH:
            return None

        reason = decode_revert_reason(data)
        if reason:
            _logger.info("Revert reason decoded", extra={"reason": reason})

        selector = data[:SELECTOR_HEX_LENGTH]
        try:
            entry = self.lookup.lookup(selector)
        except (SelectorLookupError, ValidationError) as e:
            _logger.warning("Selector lookup failed", extra={"selector": selector, "error": str(e)})
            return None
        except Exception as e:
            # Whatever the lookup hits, the caller still gets its own error
            _logger.warning(
                "Selector lookup failed unexpectedly",
                extra={"selector": selector, "error": f"{e.__class__.__name__}: {e}"},
            )
            return None

        for candidate in entry.candidates:
            _logger.info(f"{entry.selector} is signature of {candidate}")
        if not entry.candidates:
            _logger.info("No known signature for selector", extra={"selector": entry.selector})
        return entry
