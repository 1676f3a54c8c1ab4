"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (LAYERLENS__SECTION__KEY)
3. Project YAML (.layerlens/config.yaml)
4. Global YAML (~/.config/layerlens/config.yaml)
5. Built-in defaults (this file)

Environment Variable Format:
    LAYERLENS__<SECTION>__<KEY>=<VALUE>

Examples:
    LAYERLENS__LOGGING__LEVEL=DEBUG
    LAYERLENS__INDEX__DEBOUNCE_SEC=0.5
    LAYERLENS__INDEX__MAX_FILES=5000
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from layerlens.config.constants import (
    DEBOUNCE_SEC_DEFAULT,
    MAX_FILE_BYTES_DEFAULT,
    MAX_FILES_DEFAULT,
)
from layerlens.core.excludes import DEFAULT_EXCLUDE_GLOBS, DEFAULT_INCLUDE_GLOBS

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration.

    Env vars: Not directly configurable via env (use YAML for multi-output).
    """

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        LAYERLENS__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="WARNING",
        description="Root log level. DEBUG logs every skipped file and query stage.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class IndexConfig(BaseModel):
    """Workspace index configuration.

    Env vars:
        LAYERLENS__INDEX__DEBOUNCE_SEC: Quiet period before a scheduled rebuild
        LAYERLENS__INDEX__MAX_FILES: Enumeration ceiling per rebuild
        LAYERLENS__INDEX__MAX_FILE_BYTES: Skip files larger than this
    """

    include_globs: list[str] = Field(
        default_factory=lambda: list(DEFAULT_INCLUDE_GLOBS),
        description="Globs (relative to the project root) selecting stylesheet files.",
    )
    exclude_globs: list[str] = Field(
        default_factory=lambda: list(DEFAULT_EXCLUDE_GLOBS),
        description="Globs for dependency and build directories that are never scanned.",
    )
    debounce_sec: float = Field(
        default=DEBOUNCE_SEC_DEFAULT,
        description="Quiet period after the last save before rebuilding. "
        "Lower values may cause redundant rebuilds during rapid saves.",
    )
    max_files: int = Field(
        default=MAX_FILES_DEFAULT,
        description="Maximum files enumerated per rebuild. Excess files are ignored.",
    )
    max_file_bytes: int = Field(
        default=MAX_FILE_BYTES_DEFAULT,
        description="Skip files larger than this (bytes). Generated bundles are usually huge.",
    )

    @field_validator("debounce_sec")
    @classmethod
    def validate_debounce(cls, v: float) -> float:
        if v < 0:
            raise ValueError(f"debounce_sec must be >= 0, got {v}")
        return v

    @field_validator("max_files", "max_file_bytes")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError(f"Limit must be positive, got {v}")
        return v

    @field_validator("include_globs")
    @classmethod
    def validate_include(cls, v: list[str]) -> list[str]:
        if not v:
            raise ValueError("At least one include glob is required")
        return v


class LayerLensConfig(BaseModel):
    """Root configuration for LayerLens.

    All settings can be configured via:
    1. Environment variables: LAYERLENS__SECTION__KEY
    2. YAML config files (project or global)
    3. Direct kwargs to load_config()
    """

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    index: IndexConfig = Field(default_factory=IndexConfig)
