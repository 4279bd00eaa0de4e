"""Main interactive event loop for the picker.

Polls terminal size, renders when state is dirty, and feeds decoded input
events to the navigation state machine one at a time. Feature logic lives in
:mod:`ujust_picker.navigation`; this module only wires I/O to it.
"""

from __future__ import annotations

import os
import shutil
import sys
from collections.abc import Callable

from .catalog import Catalog
from .config import PickerConfig
from .events import ResizeEvent, event_from_key
from .input import read_key
from .navigation import NavigationStateMachine
from .preview import PreviewFetcher
from .render import render_frame
from .runner import RecipeRunner
from .terminal import TerminalController
from .ui_theme import UITheme, resolve_theme

READ_TIMEOUT_MS = 120


def run_main_loop(
    machine: NavigationStateMachine,
    terminal: TerminalController,
    stdin_fd: int,
    theme: UITheme,
    *,
    get_terminal_size: Callable[[tuple[int, int]], os.terminal_size] = shutil.get_terminal_size,
    read: Callable[..., str] = read_key,
) -> str | None:
    """Run until the user confirms or quits; returns the chosen recipe name."""
    state = machine.state
    skip_next_lf = False
    with terminal.raw_mode():
        while True:
            term = get_terminal_size((80, 24))
            if (term.columns, term.lines) != (state.terminal_width, state.terminal_height):
                machine.apply(ResizeEvent(width=term.columns, height=term.lines))

            if state.dirty:
                render_frame(machine.snapshot(), theme, terminal.stdout_fd)
                state.dirty = False

            try:
                key = read(stdin_fd, timeout_ms=READ_TIMEOUT_MS)
            except KeyboardInterrupt:
                continue
            if key == "":
                continue
            # Some terminals send CR LF for Enter.
            if skip_next_lf and key == "ENTER_LF":
                skip_next_lf = False
                continue
            skip_next_lf = key == "ENTER_CR"

            event = event_from_key(key)
            if event is None:
                continue
            if machine.apply(event):
                break
    return state.chosen


def run_picker(
    catalog: Catalog,
    runner: RecipeRunner,
    config: PickerConfig,
    *,
    stdin_fd: int | None = None,
    stdout_fd: int | None = None,
) -> str | None:
    """Set up the terminal and run the picker loop.

    Raises ``termios.error`` or ``OSError`` when the terminal cannot be
    initialised; nothing has been drawn at that point.
    """
    if stdin_fd is None:
        stdin_fd = sys.stdin.fileno()
    if stdout_fd is None:
        stdout_fd = sys.stdout.fileno()
    terminal = TerminalController(stdin_fd, stdout_fd)
    fetcher = PreviewFetcher(runner, no_color=config.no_color)
    machine = NavigationStateMachine(catalog, fetcher)
    theme = resolve_theme(config.theme, no_color=config.no_color)
    chosen = run_main_loop(machine, terminal, stdin_fd, theme)
    if chosen is not None:
        # The runner takes over the normal screen next.
        terminal.clear_screen()
    return chosen


__all__ = ["READ_TIMEOUT_MS", "run_main_loop", "run_picker"]
