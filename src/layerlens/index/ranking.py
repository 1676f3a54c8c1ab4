"""Candidate ranking - choose the declaration that best explains a layer name."""

from __future__ import annotations

from collections.abc import Iterable

from layerlens.index.models import DeclaredOrder


def _longest(candidates: Iterable[DeclaredOrder]) -> DeclaredOrder | None:
    # Strict ">" keeps the earliest-discovered candidate on ties.
    best: DeclaredOrder | None = None
    for candidate in candidates:
        if best is None or len(candidate) > len(best):
            best = candidate
    return best


def pick_best(layer_name: str, candidates: Iterable[DeclaredOrder]) -> DeclaredOrder | None:
    """Select the most authoritative declaration for ``layer_name``.

    Declarations containing the name win, longest first, earliest discovered
    on ties. When none contains it, the longest declaration overall stands in
    as the project's primary order. Returns None for an empty candidate set.
    """
    pool = tuple(candidates)
    containing = _longest(c for c in pool if layer_name in c.names)
    if containing is not None:
        return containing
    return _longest(pool)
