"""Config module exports."""

from layerlens.config.loader import load_config
from layerlens.config.models import (
    IndexConfig,
    LayerLensConfig,
    LoggingConfig,
    LogOutputConfig,
)

__all__ = [
    "load_config",
    "LayerLensConfig",
    "IndexConfig",
    "LoggingConfig",
    "LogOutputConfig",
]
