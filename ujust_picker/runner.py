"""External recipe runner invocation.

Wraps the two runner operations: a dry-run that prints a recipe's commands,
and the real execution that inherits the terminal once the TUI is gone.
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass

logger = logging.getLogger(__name__)

DEFAULT_RUNNER = "ujust"


@dataclass(frozen=True)
class RecipeRunner:
    command: str = DEFAULT_RUNNER

    def show_source(self, name: str) -> str:
        """Return the runner's dry-run output for ``name``.

        Raises ``subprocess.CalledProcessError`` on non-zero exit and
        ``OSError`` when the runner cannot be started.
        """
        proc = subprocess.run(
            [self.command, "-n", name],
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            stdin=subprocess.DEVNULL,
            text=True,
            check=True,
        )
        return proc.stdout

    def execute(self, name: str) -> int:
        """Run ``name`` with inherited stdio and return the runner exit status."""
        try:
            proc = subprocess.run([self.command, name], check=False)
        except OSError as exc:
            logger.error("failed to start %s %s: %s", self.command, name, exc)
            return 127
        logger.info("%s %s exited with status %d", self.command, name, proc.returncode)
        return proc.returncode


__all__ = ["DEFAULT_RUNNER", "RecipeRunner"]
