"""Frame rendering for the picker.

Turns a :class:`~ujust_picker.state.FrameView` into ANSI rows. Row and column
placement comes from :mod:`ujust_picker.layout` so pointer hit testing matches
what is drawn. Rendering never mutates navigation state.
"""

from __future__ import annotations

import os
import sys

from .ansi import clip_ansi_line, display_width, fit_ansi_line, word_wrap
from .layout import BACK_BUTTON, DESCRIPTION_ROWS, TAB_ARROW_WIDTH, TAB_MIDDLE_WIDTH, TAB_SIDE_WIDTH, Geometry
from .state import FrameView
from .ui_theme import UITheme

TITLE = "Available ujust recipes"
SIZE_WARNING = ("Your terminal size is too small.", "Please resize the terminal window.")
QUERY_PLACEHOLDER = "type to search recipes"

BROWSE_CONTROLS = (
    "← → Change Category | ↑ ↓ Navigate Recipes",
    "s: Toggle Search | c: Toggle Code | Enter: Select | Esc: Exit",
)
SEARCH_CONTROLS = (
    "↑ ↓ Navigate Recipes",
    "s: Toggle Search | c: Toggle Code | Enter: Select | Esc: Unfocus Search",
)


def _styled(text: str, style: str, theme: UITheme) -> str:
    if not style or not text:
        return text
    return f"{style}{text}{theme.reset}"


def _border_row(left: str, right: str, inner: int, theme: UITheme) -> str:
    return _styled(left + "─" * inner + right, theme.border, theme)


def _box_row(content: str, inner: int, theme: UITheme, align: str = "left") -> str:
    edge = _styled("│", theme.border, theme)
    return f"{edge}{fit_ansi_line(content, inner, align)}{theme.reset}{edge}"


def _tab_cell(text: str, style: str, width: int, theme: UITheme) -> str:
    return fit_ansi_line(_styled(clip_ansi_line(text, width), style, theme), width, "center")


def _tab_row(view: FrameView, theme: UITheme) -> str:
    names = view.category_names
    if not names:
        return fit_ansi_line("No recipes found", TAB_MIDDLE_WIDTH + 2 * (TAB_ARROW_WIDTH + TAB_SIDE_WIDTH), "center")
    active = view.active_category
    left = names[active - 1] if active > 0 else ""
    right = names[active + 1] if active < len(names) - 1 else ""
    left_side = _tab_cell("← ", "", TAB_ARROW_WIDTH, theme) + _tab_cell(left, theme.tab_inactive, TAB_SIDE_WIDTH, theme)
    middle = _tab_cell(names[active], theme.tab_active, TAB_MIDDLE_WIDTH, theme)
    right_side = _tab_cell(right, theme.tab_inactive, TAB_SIDE_WIDTH, theme) + _tab_cell(" →", "", TAB_ARROW_WIDTH, theme)
    return left_side + middle + right_side


def _query_row(view: FrameView, theme: UITheme) -> str:
    cursor = "█" if view.query_focused else ""
    if not view.search_query:
        hint = _styled(QUERY_PLACEHOLDER, theme.query_placeholder, theme)
        return f" > {cursor}{hint}"
    return f" > {_styled(view.search_query, theme.query, theme)}{cursor}"


def _list_rows(view: FrameView, theme: UITheme) -> list[str]:
    rows: list[str] = []
    height = view.geometry.list_height
    if not view.entries:
        message = "No matching recipes" if view.search_active else "No recipes in this category"
        rows.append(_styled(f"  {message}", theme.recipe_inactive, theme))
    for offset, recipe in enumerate(view.visible_entries):
        index = view.scroll_offset + offset
        if index == view.selected:
            rows.append(_styled(f"▶ {recipe.name}", theme.recipe_selected, theme))
        else:
            rows.append(_styled(f"  {recipe.name}", theme.recipe_inactive, theme))
    rows.extend([""] * (height - len(rows)))
    return rows[:height]


def _footer_rows(view: FrameView, inner: int, theme: UITheme) -> list[str]:
    recipe = view.selected_recipe
    name = recipe.name if recipe is not None else ""
    description = recipe.description if recipe is not None else ""
    rows = [
        _border_row("├", "┤", inner, theme),
        _box_row(" Selected: " + _styled(name, theme.recipe_selected, theme), inner, theme),
        _box_row("", inner, theme),
    ]
    wrapped = word_wrap(description, inner - 2) if description else []
    for index in range(DESCRIPTION_ROWS):
        text = wrapped[index] if index < len(wrapped) else ""
        rows.append(_box_row(" " + _styled(text, theme.description, theme), inner, theme))
    rows.append(_border_row("└", "┘", inner, theme))
    return rows


def list_pane_lines(view: FrameView, theme: UITheme) -> list[str]:
    """Render the header, recipe list, and footer of the list pane."""
    inner = view.geometry.inner_width
    controls = SEARCH_CONTROLS if view.search_active else BROWSE_CONTROLS
    nav = _query_row(view, theme) if view.search_active else _tab_row(view, theme)
    rows = [
        _border_row("┌", "┐", inner, theme),
        _box_row(" " + _styled(TITLE, theme.title, theme), inner, theme),
        _border_row("├", "┤", inner, theme),
        _box_row(nav, inner, theme),
        _border_row("├", "┤", inner, theme),
        _box_row(_styled(controls[0], theme.controls, theme), inner, theme, "center"),
        _box_row(_styled(controls[1], theme.controls, theme), inner, theme, "center"),
        _border_row("├", "┤", inner, theme),
    ]
    rows.extend(_box_row(row, inner, theme) for row in _list_rows(view, theme))
    rows.extend(_footer_rows(view, inner, theme))
    return rows


def preview_pane_lines(view: FrameView, theme: UITheme) -> list[str]:
    """Render the recipe preview pane with its title and back button."""
    geometry = view.geometry
    inner = geometry.inner_width
    recipe = view.selected_recipe
    back = "" if geometry.dual_view else BACK_BUTTON
    title = back + _styled(recipe.name if recipe is not None else "", theme.title, theme)
    rows = [
        _border_row("┌", "┐", inner, theme),
        _box_row(title, inner, theme),
        _border_row("├", "┤", inner, theme),
    ]
    visible = view.preview_lines[view.preview_offset : view.preview_offset + geometry.preview_height]
    for index in range(geometry.preview_height):
        rows.append(_box_row(visible[index] if index < len(visible) else "", inner, theme))
    rows.append(_border_row("└", "┘", inner, theme))
    return rows


def size_warning_lines(geometry: Geometry, theme: UITheme) -> list[str]:
    width = max(2, min(geometry.terminal_width, geometry.pane_width))
    height = max(len(SIZE_WARNING) + 2, geometry.terminal_height)
    inner = width - 2
    body_rows = height - 2
    top_pad = max(0, (body_rows - len(SIZE_WARNING)) // 2)
    rows = [_border_row("┌", "┐", inner, theme)]
    for index in range(body_rows):
        message_index = index - top_pad
        text = SIZE_WARNING[message_index] if 0 <= message_index < len(SIZE_WARNING) else ""
        rows.append(_box_row(_styled(text, theme.warning, theme), inner, theme, "center"))
    rows.append(_border_row("└", "┘", inner, theme))
    return rows


def build_frame_lines(view: FrameView, theme: UITheme) -> list[str]:
    """Compose the full frame as a list of terminal rows."""
    geometry = view.geometry
    if geometry.too_small:
        return size_warning_lines(geometry, theme)

    left = list_pane_lines(view, theme) if geometry.list_visible else []
    right = preview_pane_lines(view, theme) if geometry.preview_visible else []
    if not left:
        return right
    if not right:
        return left

    pad = " " * geometry.pane_width
    rows: list[str] = []
    for index in range(max(len(left), len(right))):
        list_row = left[index] if index < len(left) else pad
        preview_row = right[index] if index < len(right) else ""
        if display_width(list_row) < geometry.pane_width:
            list_row = fit_ansi_line(list_row, geometry.pane_width)
        rows.append(list_row + preview_row)
    return rows


def render_frame(view: FrameView, theme: UITheme, fd: int | None = None) -> None:
    """Write one composed frame to the terminal."""
    rows = build_frame_lines(view, theme)
    height = view.geometry.terminal_height
    if height > 0:
        rows = rows[:height]
    out = ["\033[H\033[J"]
    for index, row in enumerate(rows):
        out.append(row)
        if "\033" in row:
            out.append("\033[0m")
        if index < len(rows) - 1:
            out.append("\r\n")
    target = sys.stdout.fileno() if fd is None else fd
    os.write(target, "".join(out).encode("utf-8", errors="replace"))


__all__ = [
    "build_frame_lines",
    "list_pane_lines",
    "preview_pane_lines",
    "render_frame",
    "size_warning_lines",
]
