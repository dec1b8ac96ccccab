from typing import Optional

from .diagnostics import ErrorDiagnostics, decode_revert_reason, extract_error_data
from .errors import RpcError

__all__ = ["wrap_rpc_error"]


def wrap_rpc_error(
    operation: str,
    exc: Exception,
    diagnostics: Optional[ErrorDiagnostics] = None,
) -> RpcError:
    """Turn a provider exception into an ``RpcError`` named after ``operation``.

    When ``diagnostics`` is given the exception is inspected for revert data
    first. The caller raises the result ``from exc``.

    Example:
        >>> try:
        ...     w3.eth.send_raw_transaction(raw)
        ... except Exception as e:
        ...     raise wrap_rpc_error("eth_sendRawTransaction", e, diagnostics) from e
    """
    if diagnostics is not None:
        diagnostics.diagnose(exc)

    reason = None
    if exc.args and isinstance(exc.args[0], dict):
        reason = exc.args[0].get("message") or exc.args[0].get("reason")
    data = extract_error_data(exc)
    if data:
        decoded = decode_revert_reason(data)
        if decoded:
            reason = decoded
    msg = reason or str(exc) or exc.__class__.__name__
    return RpcError(f"{operation} failed: {msg}", operation=operation, data=data)
