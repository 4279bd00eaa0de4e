from __future__ import annotations

import os
import termios
import unittest
from contextlib import contextmanager
from unittest import mock

from ujust_picker.catalog import Catalog, Category, Recipe
from ujust_picker.config import PickerConfig
from ujust_picker.events import KeyEvent, ResizeEvent
from ujust_picker.loop import READ_TIMEOUT_MS, run_main_loop, run_picker
from ujust_picker.navigation import NavigationStateMachine
from ujust_picker.preview import PreviewFetcher
from ujust_picker.ui_theme import PLAIN_THEME


class _FakeTerminal:
    def __init__(self) -> None:
        self.stdout_fd = 1
        self.entered = 0
        self.exited = 0

    @contextmanager
    def raw_mode(self):
        self.entered += 1
        try:
            yield
        finally:
            self.exited += 1


class _Runner:
    def show_source(self, name: str) -> str:
        return f"echo {name}\n"


def _machine() -> NavigationStateMachine:
    apps = Category("Apps", (Recipe("install"), Recipe("remove")))
    catalog = Catalog(categories=(apps,), all_recipes=apps.recipes)
    return NavigationStateMachine(catalog, PreviewFetcher(_Runner(), no_color=True))


def _scripted(keys):
    pending = list(keys)
    timeouts: list[int | None] = []

    def read(_fd: int, timeout_ms: int | None = None) -> str:
        timeouts.append(timeout_ms)
        if not pending:
            raise AssertionError("loop read past scripted input")
        key = pending.pop(0)
        if isinstance(key, BaseException):
            raise key
        return key

    read.timeouts = timeouts
    return read


def _sizes(*sizes):
    pending = list(sizes)

    def get_terminal_size(_fallback):
        size = pending.pop(0) if len(pending) > 1 else pending[0]
        return os.terminal_size(size)

    return get_terminal_size


class RuntimeLoopTests(unittest.TestCase):
    def _run(self, machine, keys, sizes=((100, 40),)):
        terminal = _FakeTerminal()
        read = _scripted(keys)
        with mock.patch("ujust_picker.loop.render_frame") as render_mock:
            chosen = run_main_loop(
                machine,
                terminal,
                0,
                PLAIN_THEME,
                get_terminal_size=_sizes(*sizes),
                read=read,
            )
        return chosen, terminal, render_mock, read

    def test_confirm_returns_selected_recipe_and_restores_terminal(self) -> None:
        chosen, terminal, render_mock, read = self._run(_machine(), ["", "DOWN", "ENTER_CR"])

        self.assertEqual(chosen, "remove")
        self.assertEqual((terminal.entered, terminal.exited), (1, 1))
        self.assertTrue(render_mock.called)
        self.assertEqual(set(read.timeouts), {READ_TIMEOUT_MS})

    def test_quit_returns_none(self) -> None:
        chosen, _terminal, _render_mock, _read = self._run(_machine(), ["q"])

        self.assertIsNone(chosen)

    def test_keyboard_interrupt_is_ignored(self) -> None:
        chosen, _terminal, _render_mock, _read = self._run(_machine(), [KeyboardInterrupt(), "ENTER_LF"])

        self.assertEqual(chosen, "install")

    def test_lf_after_cr_is_dropped(self) -> None:
        machine = _machine()
        with mock.patch.object(machine, "apply", wraps=machine.apply) as apply_mock:
            self._run(machine, ["s", "z", "ENTER_CR", "ENTER_LF", "CTRL_C"])

        enters = [call for call in apply_mock.call_args_list if call.args[0] == KeyEvent("ENTER")]
        self.assertEqual(len(enters), 1)

    def test_size_change_is_applied_and_redrawn(self) -> None:
        machine = _machine()
        chosen, _terminal, render_mock, _read = self._run(
            machine,
            ["", "", "q"],
            sizes=((100, 40), (100, 40), (170, 30)),
        )

        self.assertIsNone(chosen)
        self.assertEqual((machine.state.terminal_width, machine.state.terminal_height), (170, 30))
        self.assertTrue(machine.state.dual_view)
        self.assertEqual(render_mock.call_count, 2)
        last_view = render_mock.call_args.args[0]
        self.assertEqual(last_view.geometry.terminal_width, 170)

    def test_unchanged_state_is_not_redrawn(self) -> None:
        _chosen, _terminal, render_mock, _read = self._run(_machine(), ["", "", "", "q"])

        self.assertEqual(render_mock.call_count, 1)

    def test_first_iteration_applies_terminal_size(self) -> None:
        machine = _machine()
        with mock.patch.object(machine, "apply", wraps=machine.apply) as apply_mock:
            self._run(machine, ["q"])

        self.assertEqual(apply_mock.call_args_list[0].args[0], ResizeEvent(100, 40))


class RunPickerTests(unittest.TestCase):
    def test_terminal_setup_failure_propagates_before_loop(self) -> None:
        catalog = Catalog(categories=(), all_recipes=())
        with mock.patch(
            "ujust_picker.loop.TerminalController", side_effect=termios.error(25, "not a tty")
        ), mock.patch("ujust_picker.loop.run_main_loop") as loop_mock:
            with self.assertRaises(termios.error):
                run_picker(catalog, _Runner(), PickerConfig(), stdin_fd=0, stdout_fd=1)

        loop_mock.assert_not_called()

    def test_run_picker_wires_theme_and_fetcher_from_config(self) -> None:
        catalog = Catalog(categories=(), all_recipes=())
        with mock.patch("ujust_picker.loop.TerminalController") as terminal_cls, mock.patch(
            "ujust_picker.loop.run_main_loop", return_value="x"
        ) as loop_mock:
            chosen = run_picker(catalog, _Runner(), PickerConfig(no_color=True), stdin_fd=5, stdout_fd=6)

        self.assertEqual(chosen, "x")
        terminal_cls.assert_called_once_with(5, 6)
        machine, terminal, stdin_fd, theme = loop_mock.call_args.args
        self.assertIs(terminal, terminal_cls.return_value)
        self.assertEqual(stdin_fd, 5)
        self.assertIs(theme, PLAIN_THEME)
        self.assertTrue(machine.fetcher.no_color)
        terminal_cls.return_value.clear_screen.assert_called_once_with()

    def test_quitting_leaves_screen_untouched(self) -> None:
        catalog = Catalog(categories=(), all_recipes=())
        with mock.patch("ujust_picker.loop.TerminalController") as terminal_cls, mock.patch(
            "ujust_picker.loop.run_main_loop", return_value=None
        ):
            chosen = run_picker(catalog, _Runner(), PickerConfig(), stdin_fd=5, stdout_fd=6)

        self.assertIsNone(chosen)
        terminal_cls.return_value.clear_screen.assert_not_called()


if __name__ == "__main__":
    unittest.main()
