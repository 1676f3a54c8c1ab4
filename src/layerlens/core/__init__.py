"""Core module exports."""

from layerlens.core.errors import (
    ConfigError,
    ErrorCode,
    IndexScanError,
    LayerLensError,
)
from layerlens.core.logging import (
    clear_query_id,
    configure_logging,
    get_query_id,
    set_query_id,
)

__all__ = [
    # Errors
    "ConfigError",
    "ErrorCode",
    "IndexScanError",
    "LayerLensError",
    # Logging
    "clear_query_id",
    "configure_logging",
    "get_query_id",
    "set_query_id",
]
