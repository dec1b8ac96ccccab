"""
ethtx utilities.
"""

from ethtx.utils.logging import (
    StructuredFormatter,
    configure_logging,
    disable_logging,
    enable_debug,
    get_logger,
    set_level,
)

__all__ = [
    "StructuredFormatter",
    "configure_logging",
    "disable_logging",
    "enable_debug",
    "get_logger",
    "set_level",
]
