"""ANSI-aware text measurement and line shaping utilities.

Provides width measurement, clipping, padding, and wrapping that preserve
escape sequences. These keep frame rows aligned when color codes are present.
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


def strip_ansi(text: str) -> str:
    return ANSI_ESCAPE_RE.sub("", text)


def display_width(text: str) -> int:
    col = 0
    for ch in strip_ansi(text):
        col += char_display_width(ch, col)
    return col


def clip_ansi_line(text: str, max_cols: int) -> str:
    """Trim a styled line to at most ``max_cols`` display columns.

    ANSI escape sequences are preserved verbatim and do not count toward width.
    Tabs are expanded into spaces so clipping aligns with rendered terminal cells.
    """
    if max_cols <= 0 or not text:
        return ""

    out: list[str] = []
    col = 0
    i = 0
    n = len(text)
    while i < n and col < max_cols:
        if text[i] == "\x1b":
            match = ANSI_ESCAPE_RE.match(text, i)
            if match:
                out.append(match.group(0))
                i = match.end()
                continue
        ch = text[i]
        w = char_display_width(ch, col)
        if col + w > max_cols:
            break
        out.append(" " * w if ch == "\t" else ch)
        col += w
        i += 1

    return "".join(out)


def fit_ansi_line(text: str, width: int, align: str = "left") -> str:
    """Clip then pad ``text`` to exactly ``width`` columns."""
    clipped = clip_ansi_line(text, width)
    gap = max(0, width - display_width(clipped))
    if align == "center":
        left = gap // 2
        return " " * left + clipped + " " * (gap - left)
    if align == "right":
        return " " * gap + clipped
    return clipped + " " * gap


def wrap_ansi_line(text: str, width: int) -> list[str]:
    """Hard-wrap a styled line into chunks that fit ``width`` display columns.

    Escape sequences remain attached to their surrounding chunk, and tab
    expansion respects terminal tab-stop alignment for each wrapped segment.
    """
    if width <= 0 or not text:
        return [""]

    wrapped: list[str] = []
    chunk: list[str] = []
    col = 0
    i = 0
    n = len(text)
    while i < n:
        if text[i] == "\x1b":
            match = ANSI_ESCAPE_RE.match(text, i)
            if match:
                chunk.append(match.group(0))
                i = match.end()
                continue

        ch = text[i]
        w = char_display_width(ch, col)
        if col + w > width and chunk:
            wrapped.append("".join(chunk))
            chunk = []
            col = 0
            w = char_display_width(ch, col)
        chunk.append(" " * w if ch == "\t" else ch)
        col += w
        i += 1

    wrapped.append("".join(chunk))
    return wrapped


def word_wrap(text: str, width: int) -> list[str]:
    """Wrap plain text on word boundaries, hard-breaking overlong words."""
    if width <= 0:
        return [""]
    lines: list[str] = []
    line = ""
    for word in text.split():
        while display_width(word) > width:
            if line:
                lines.append(line)
                line = ""
            head = clip_ansi_line(word, width) or word[0]
            lines.append(head)
            word = word[len(head):]
        if not line:
            line = word
        elif display_width(line) + 1 + display_width(word) > width:
            lines.append(line)
            line = word
        else:
            line = f"{line} {word}"
    if line or not lines:
        lines.append(line)
    return lines


def wrap_preview_text(text: str, width: int) -> list[str]:
    """Split preview output into screen rows no wider than ``width``."""
    rows: list[str] = []
    for line in text.splitlines() or [""]:
        rows.extend(wrap_ansi_line(line.rstrip("\r"), width))
    return rows


__all__ = [
    "ANSI_ESCAPE_RE",
    "char_display_width",
    "clip_ansi_line",
    "display_width",
    "fit_ansi_line",
    "strip_ansi",
    "word_wrap",
    "wrap_ansi_line",
    "wrap_preview_text",
]
