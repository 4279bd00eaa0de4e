"""Recipe source previews fetched from the external runner.

The fetch is synchronous: the interactive loop blocks until the runner exits.
Raw output is cached per recipe so a resize only re-wraps the text.
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass

from .ansi import wrap_preview_text
from .highlight import highlight_shell
from .runner import RecipeRunner

logger = logging.getLogger(__name__)

NO_SELECTION_TEXT = "No recipe selected."


def describe_fetch_error(exc: Exception) -> str:
    """Render a failed fetch as preview text; never returns an empty string."""
    if isinstance(exc, subprocess.CalledProcessError):
        message = f"exit status {exc.returncode}"
        output = exc.output or ""
        if isinstance(output, bytes):
            output = output.decode("utf-8", errors="replace")
        output = output.strip()
        return f"{message}\n\n{output}" if output else message
    return str(exc) or exc.__class__.__name__


@dataclass
class _CachedSource:
    name: str
    raw: str
    width: int
    lines: list[str]


class PreviewFetcher:
    """Resolve preview lines for a recipe, reusing the last runner result."""

    def __init__(self, runner: RecipeRunner, *, no_color: bool = False) -> None:
        self.runner = runner
        self.no_color = no_color
        self.fetch_count = 0
        self._cached: _CachedSource | None = None

    def _run(self, name: str) -> str:
        self.fetch_count += 1
        try:
            output = self.runner.show_source(name)
        except (subprocess.CalledProcessError, OSError) as exc:
            logger.info("preview of %s failed: %s", name, exc)
            return describe_fetch_error(exc)
        return highlight_shell(output, no_color=self.no_color)

    def fetch(self, name: str | None, width: int) -> list[str]:
        """Return wrapped preview lines for ``name`` at ``width`` columns.

        The runner is only invoked when ``name`` differs from the cached
        recipe. A width change re-wraps the cached output.
        """
        if name is None:
            return [NO_SELECTION_TEXT]
        width = max(1, width)
        cached = self._cached
        if cached is not None and cached.name == name:
            if cached.width != width:
                cached.width = width
                cached.lines = wrap_preview_text(cached.raw, width)
            return cached.lines

        raw = self._run(name)
        lines = wrap_preview_text(raw, width)
        self._cached = _CachedSource(name=name, raw=raw, width=width, lines=lines)
        return lines

    def invalidate(self) -> None:
        self._cached = None


__all__ = ["NO_SELECTION_TEXT", "PreviewFetcher", "describe_fetch_error"]
