"""Configuration constants.

This module contains truly constant values that should NOT be user-configurable.
These are lexical rules and output-shape limits that tests and hosts rely on.

For configurable values, see models.py (IndexConfig, LoggingConfig).
"""

# =============================================================================
# Lexical rules
# =============================================================================

LAYER_KEYWORD = "@layer"
"""At-rule keyword that introduces a layer name list. Matched case-insensitively."""

PREVIEW_MAX_CHARS = 240
"""Maximum length of a declaration preview after whitespace collapsing."""

# =============================================================================
# Default scan limits
# =============================================================================
# Defaults for IndexConfig. Users may tune these per project.

DEBOUNCE_SEC_DEFAULT = 0.2
"""Quiet period after the last trigger before a rebuild starts."""

MAX_FILES_DEFAULT = 2000
"""Maximum number of files enumerated per rebuild."""

MAX_FILE_BYTES_DEFAULT = 1_500_000
"""Files larger than this are skipped (usually generated bundles)."""

CONFIG_DIR_NAME = ".layerlens"
"""Per-project configuration directory."""
