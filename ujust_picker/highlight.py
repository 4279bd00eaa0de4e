"""Syntax highlighting for recipe previews.

Runner dry-run output is shell commands, so previews use Pygments' Bash lexer.
Control bytes are neutralized first to avoid unsafe terminal side effects.
"""

from __future__ import annotations

import re

from pygments import highlight as pygments_highlight
from pygments.formatters import TerminalFormatter
from pygments.lexers import BashLexer

_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")

_FORMATTER = TerminalFormatter()
_LEXER = BashLexer()


def sanitize_terminal_text(source: str) -> str:
    """Escape terminal control bytes to avoid side effects (bell, cursor moves, etc.)."""
    if _CONTROL_RE.search(source) is None:
        return source

    out: list[str] = []
    for ch in source:
        code = ord(ch)
        if ch in {"\n", "\r", "\t"}:
            out.append(ch)
            continue
        # C0 controls + DEL + C1 controls.
        if code < 32 or code == 127 or 0x80 <= code <= 0x9F:
            out.append(f"\\x{code:02x}")
            continue
        out.append(ch)
    return "".join(out)


def highlight_shell(source: str, *, no_color: bool = False) -> str:
    """Return sanitized ``source`` with ANSI shell highlighting applied."""
    source = sanitize_terminal_text(source)
    if no_color or not source.strip():
        return source
    try:
        rendered = pygments_highlight(source, _LEXER, _FORMATTER)
    except Exception:
        return source
    # Pygments always terminates output with a newline.
    if not source.endswith("\n") and rendered.endswith("\n"):
        rendered = rendered[:-1]
    return rendered


__all__ = ["highlight_shell", "sanitize_terminal_text"]
