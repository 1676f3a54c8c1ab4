"""Single-line lexical scanning around the ``@layer`` keyword.

No grammar is involved: a regex finds the keyword, the prelude runs to the
first ``{`` or ``;`` after it (or end of line), and a second regex picks
layer names out of that span. All functions are pure.
"""

from __future__ import annotations

import re

from layerlens.config.constants import LAYER_KEYWORD
from layerlens.index.models import NameToken, Span

KEYWORD_RE = re.compile(re.escape(LAYER_KEYWORD) + r"\b", re.IGNORECASE)

# One identifier segment: optional leading hyphen, then [_a-zA-Z] and word chars
# or hyphens. Segments chain with dots so `utilities.buttons` stays one token.
_SEGMENT = r"-?[_a-zA-Z][\w-]*"
LAYER_NAME_RE = re.compile(rf"{_SEGMENT}(?:\.{_SEGMENT})*", re.ASCII)


def locate_keyword(line_text: str) -> Span | None:
    """Span of the first ``@layer`` keyword on the line, matched as a whole word."""
    m = KEYWORD_RE.search(line_text)
    if m is None:
        return None
    return Span(m.start(), m.end())


def find_prelude_end(line_text: str, from_index: int) -> int:
    """Index of the first ``{`` or ``;`` at or after ``from_index``, else line length."""
    brace = line_text.find("{", from_index)
    semi = line_text.find(";", from_index)
    if brace == -1 and semi == -1:
        return len(line_text)
    if brace == -1:
        return semi
    if semi == -1:
        return brace
    return min(brace, semi)


def is_cursor_in_prelude(line_text: str, cursor_offset: int) -> bool:
    keyword = locate_keyword(line_text)
    if keyword is None:
        return False
    prelude_end = find_prelude_end(line_text, keyword.end)
    return keyword.start <= cursor_offset <= prelude_end


def extract_names(line_text: str, from_index: int, to_index: int) -> list[NameToken]:
    """Layer-name tokens inside ``line_text[from_index:to_index]`` with absolute offsets."""
    prelude = line_text[from_index:to_index]
    return [
        NameToken(name=m.group(0), start=from_index + m.start(), end=from_index + m.end())
        for m in LAYER_NAME_RE.finditer(prelude)
    ]
