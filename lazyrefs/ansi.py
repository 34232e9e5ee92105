"""Display-width measurement and column slicing for terminal cells.

Views hand plain text to the window; styling is added afterwards, so these
helpers only need to understand escape sequences when measuring.
"""

from __future__ import annotations

import re
import unicodedata

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
TAB_STOP = 8


def char_display_width(ch: str, col: int) -> int:
    """Return terminal column width for one character at visual column ``col``.

    Tabs expand to the next 8-column stop, combining marks consume no columns,
    and East Asian wide/fullwidth characters consume two.
    """
    if ch == "\t":
        return TAB_STOP - (col % TAB_STOP)
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def display_width(text: str) -> int:
    """Return display columns used by ``text``, ignoring escape sequences."""
    col = 0
    for ch in ANSI_ESCAPE_RE.sub("", text):
        col += char_display_width(ch, col)
    return col


def slice_columns(text: str, start_col: int, max_cols: int) -> str:
    """Return the part of plain ``text`` visible in a horizontal viewport.

    The viewport starts ``start_col`` display columns in and is ``max_cols``
    wide. Tabs are expanded to spaces; a wide character cut by the left edge
    becomes padding and one cut by the right edge is dropped.
    """
    if max_cols <= 0 or not text:
        return ""
    start_col = max(0, start_col)

    out: list[str] = []
    col = 0
    shown = 0
    for ch in text:
        if shown >= max_cols:
            break
        w = char_display_width(ch, col)
        if col < start_col:
            col += w
            if col > start_col:
                overlap = min(col - start_col, max_cols)
                out.append(" " * overlap)
                shown += overlap
            continue
        if ch == "\t":
            spaces = min(w, max_cols - shown)
            out.append(" " * spaces)
            shown += spaces
            col += w
            continue
        if shown + w > max_cols:
            break
        out.append(ch)
        shown += w
        col += w
    return "".join(out)


def pad_to_width(text: str, width: int) -> str:
    """Right-pad styled ``text`` with spaces up to ``width`` display columns."""
    used = display_width(text)
    if used >= width:
        return text
    return text + " " * (width - used)


__all__ = [
    "ANSI_ESCAPE_RE",
    "TAB_STOP",
    "char_display_width",
    "display_width",
    "slice_columns",
    "pad_to_width",
]
