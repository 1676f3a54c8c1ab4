"""LayerLens error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Index
- 9xxx: Internal
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002

    # Index (3xxx)
    INDEX_ROOT_NOT_FOUND = 3001
    INDEX_ENUMERATION_FAILED = 3002


@dataclass(frozen=True, slots=True)
class LayerLensError(Exception):
    """Base error with structured context for CLI and JSON output."""

    code: ErrorCode
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'CONFIG_PARSE_ERROR')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(LayerLensError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )


class IndexScanError(LayerLensError):
    """Workspace enumeration errors. Caught at the top of a rebuild."""

    @classmethod
    def root_not_found(cls, root: str) -> "IndexScanError":
        return cls(
            code=ErrorCode.INDEX_ROOT_NOT_FOUND,
            message=f"Project root does not exist or is not a directory: {root}",
            details={"root": root},
        )

    @classmethod
    def enumeration_failed(cls, root: str, reason: str) -> "IndexScanError":
        return cls(
            code=ErrorCode.INDEX_ENUMERATION_FAILED,
            message=f"Failed to enumerate files under {root}: {reason}",
            details={"root": root, "reason": reason},
        )
