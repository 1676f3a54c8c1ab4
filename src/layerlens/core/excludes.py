"""Default include and exclude patterns for the workspace scan.

Include globs select stylesheet sources. Exclude globs prune dependency,
build output and version-control directories before any file inside them
is read.
"""

from __future__ import annotations

DEFAULT_INCLUDE_GLOBS: tuple[str, ...] = ("**/*.{css,scss,sass}",)

# =============================================================================
# Excluded directories
# =============================================================================
# Generated or vendored stylesheets live here. Scanning them slows rebuilds
# and surfaces declarations the author never wrote.

EXCLUDED_DIRS: frozenset[str] = frozenset(
    (
        # VCS internals
        ".git",
        # JavaScript/Node.js ecosystem
        "node_modules",
        ".next",
        # Build outputs
        "dist",
        "build",
        "out",
        # Test coverage reports
        "coverage",
    )
)

DEFAULT_EXCLUDE_GLOBS: tuple[str, ...] = tuple(f"**/{d}/**" for d in sorted(EXCLUDED_DIRS))
