from __future__ import annotations

import unittest
from unittest import mock

from ujust_picker.ansi import strip_ansi
from ujust_picker.highlight import highlight_shell, sanitize_terminal_text


class HighlightTests(unittest.TestCase):
    def test_control_bytes_are_escaped(self) -> None:
        self.assertEqual(sanitize_terminal_text("a\x07b\n\tc"), "a\\x07b\n\tc")

    def test_no_color_returns_sanitized_source(self) -> None:
        self.assertEqual(highlight_shell("echo hi\x1b[2J", no_color=True), "echo hi\\x1b[2J")

    def test_highlighting_preserves_text_and_trailing_newline_state(self) -> None:
        rendered = highlight_shell('echo "hi" | grep h')

        self.assertEqual(strip_ansi(rendered), 'echo "hi" | grep h')
        self.assertTrue(strip_ansi(highlight_shell("ls\n")).endswith("\n"))

    def test_formatter_failure_falls_back_to_plain_text(self) -> None:
        with mock.patch("ujust_picker.highlight.pygments_highlight", side_effect=RuntimeError("boom")):
            self.assertEqual(highlight_shell("echo hi"), "echo hi")


if __name__ == "__main__":
    unittest.main()
