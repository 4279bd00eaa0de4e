"""Frame rendering tests.

Frames are rendered with the plain theme so rows can be compared as text.
Pointer hit testing is checked against the rows the renderer actually drew.
"""

from __future__ import annotations

import unittest
from unittest import mock

from ujust_picker.ansi import display_width, strip_ansi
from ujust_picker.catalog import Catalog, Category, Recipe
from ujust_picker.events import KeyEvent, ResizeEvent
from ujust_picker.layout import (
    LIST_TOP,
    NAV_ROW,
    PANE_WIDTH,
    TITLE_ROW,
    HitKind,
    hit_test,
    tab_zone_at,
)
from ujust_picker.navigation import NavigationStateMachine
from ujust_picker.preview import PreviewFetcher
from ujust_picker.render import SIZE_WARNING, build_frame_lines, render_frame
from ujust_picker.ui_theme import DEFAULT_THEME, PLAIN_THEME


class _Runner:
    def show_source(self, name: str) -> str:
        return f"#!/bin/bash\necho {name}\n"


def _machine(width: int = 100, height: int = 40) -> NavigationStateMachine:
    apps = Category("Apps", (Recipe("install", "Install the default app set"), Recipe("remove"), Recipe("update")))
    build = Category("Build", tuple(Recipe(f"build-{idx:02d}") for idx in range(40)))
    system = Category("System", (Recipe("reboot"),))
    catalog = Catalog(
        categories=(apps, build, system),
        all_recipes=tuple(sorted(apps.recipes + build.recipes + system.recipes, key=lambda r: r.name)),
    )
    return NavigationStateMachine(catalog, PreviewFetcher(_Runner(), no_color=True), width=width, height=height)


def _frame(machine: NavigationStateMachine, theme=PLAIN_THEME) -> list[str]:
    return build_frame_lines(machine.snapshot(), theme)


class ListPaneRenderTests(unittest.TestCase):
    def test_frame_fills_terminal_height_and_pane_width(self) -> None:
        rows = _frame(_machine(height=40))

        self.assertEqual(len(rows), 40)
        self.assertTrue(all(display_width(row) == PANE_WIDTH for row in rows))

    def test_selected_recipe_marker_and_footer(self) -> None:
        machine = _machine()
        rows = _frame(machine)
        footer_top = machine.geometry.footer_top

        self.assertTrue(rows[LIST_TOP].startswith("│▶ install"))
        self.assertTrue(rows[LIST_TOP + 1].startswith("│  remove"))
        self.assertIn("Selected: install", rows[footer_top + 1])
        self.assertIn("Install the default app set", rows[footer_top + 3])

    def test_tab_row_shows_active_and_next_category_in_click_zones(self) -> None:
        row = _frame(_machine())[NAV_ROW]

        self.assertIn("Apps", row)
        self.assertEqual(tab_zone_at(row.index("Build")), HitKind.RIGHT_TAB)

    def test_search_row_shows_placeholder_with_cursor(self) -> None:
        machine = _machine()
        machine.apply(KeyEvent("s"))

        rows = _frame(machine)

        self.assertTrue(rows[NAV_ROW].startswith("│ > █type to search recipes"))
        self.assertIn("Esc: Unfocus Search", rows[6])

    def test_empty_search_results_message(self) -> None:
        machine = _machine()
        for key in ["s", "z", "z", "z"]:
            machine.apply(KeyEvent(key))

        rows = _frame(machine)

        self.assertIn("No matching recipes", rows[LIST_TOP])
        self.assertTrue(rows[NAV_ROW].startswith("│ > zzz█"))

    def test_scrolled_list_marks_selection_where_pointer_hits(self) -> None:
        machine = _machine(height=24)
        machine.apply(KeyEvent("RIGHT"))
        for _ in range(14):
            machine.apply(KeyEvent("DOWN"))
        state = machine.state
        rows = _frame(machine)

        marked = [index for index, row in enumerate(rows) if row.startswith("│▶ ")]
        self.assertEqual(len(marked), 1)
        self.assertIn("build-14", rows[marked[0]])

        target = hit_test(
            machine.geometry,
            5,
            marked[0],
            search_active=state.search_active,
            scroll_offset=state.scroll_offset,
            item_count=len(machine.current_list()),
        )
        self.assertEqual(target.kind, HitKind.LIST_ROW)
        self.assertEqual(target.index, state.selected)

    def test_colored_rows_keep_their_width(self) -> None:
        rows = _frame(_machine(), theme=DEFAULT_THEME)

        self.assertNotEqual(rows[LIST_TOP], strip_ansi(rows[LIST_TOP]))
        self.assertTrue(all(display_width(row) == PANE_WIDTH for row in rows))


class PreviewRenderTests(unittest.TestCase):
    def test_narrow_preview_replaces_list_and_shows_back_button(self) -> None:
        machine = _machine(width=100)
        machine.apply(KeyEvent("c"))

        rows = _frame(machine)

        self.assertTrue(rows[TITLE_ROW].startswith("│← install"))
        self.assertIn("echo install", "\n".join(rows))
        self.assertEqual(len(rows), 40)

    def test_dual_view_draws_list_and_preview_side_by_side(self) -> None:
        machine = _machine(width=2 * PANE_WIDTH)
        machine.apply(KeyEvent("c"))

        rows = _frame(machine)

        self.assertTrue(rows[LIST_TOP].startswith("│▶ install"))
        self.assertTrue(rows[TITLE_ROW][PANE_WIDTH:].startswith("│install"))
        self.assertTrue(all(display_width(row) == 2 * PANE_WIDTH for row in rows))


class SizeWarningRenderTests(unittest.TestCase):
    def test_too_small_terminal_renders_only_warning(self) -> None:
        machine = _machine(height=40)
        machine.apply(ResizeEvent(100, 10))

        rows = _frame(machine)
        text = "\n".join(rows)

        self.assertEqual(len(rows), 10)
        for line in SIZE_WARNING:
            self.assertIn(line, text)
        self.assertNotIn("install", text)

    def test_render_frame_writes_one_buffered_frame(self) -> None:
        machine = _machine(height=30)

        with mock.patch("ujust_picker.render.os.write") as write_mock:
            render_frame(machine.snapshot(), PLAIN_THEME, fd=9)

        fd, payload = write_mock.call_args.args
        self.assertEqual(fd, 9)
        self.assertTrue(payload.startswith(b"\x1b[H\x1b[J"))
        self.assertEqual(payload.count(b"\r\n"), 29)


if __name__ == "__main__":
    unittest.main()
