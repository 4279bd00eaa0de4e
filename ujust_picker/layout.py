"""Screen geometry shared by the renderer and pointer hit testing.

Every row and column the renderer draws is derived from :class:`Geometry`, and
:func:`hit_test` maps pointer cells back through the same numbers, so the two
cannot drift apart.

List pane (``PANE_WIDTH`` columns, rows counted from the top)::

    0  top border
    1  title
    2  divider
    3  category tabs, or the search query
    4  divider
    5  controls (two rows)
    7  divider
    8  recipe rows ... (list_height rows)
       divider, selected name, blank, description (3 rows), bottom border

Preview pane: top border, title with optional back button, divider, text
rows, bottom border.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

PANE_WIDTH = 80
MIN_LAYOUT_WIDTH = PANE_WIDTH
MIN_LIST_ROWS = 3

TITLE_ROW = 1
NAV_ROW = 3
CONTROL_ROWS = (5, 6)
LIST_TOP = 8
DESCRIPTION_ROWS = 3
FOOTER_ROWS = 4 + DESCRIPTION_ROWS

PREVIEW_TEXT_TOP = 3
PREVIEW_CHROME_ROWS = 4

TAB_ARROW_WIDTH = 4
TAB_SIDE_WIDTH = 21
TAB_MIDDLE_WIDTH = PANE_WIDTH - 2 - 2 * (TAB_ARROW_WIDTH + TAB_SIDE_WIDTH)
BACK_BUTTON = "← "


class HitKind(Enum):
    NONE = "none"
    LEFT_TAB = "left_tab"
    RIGHT_TAB = "right_tab"
    QUERY = "query"
    LIST_ROW = "list_row"
    LIST_AREA = "list_area"
    BACK = "back"
    PREVIEW = "preview"


@dataclass(frozen=True)
class HitTarget:
    kind: HitKind
    index: int = -1


NO_HIT = HitTarget(HitKind.NONE)


@dataclass(frozen=True)
class Geometry:
    terminal_width: int
    terminal_height: int
    pane_width: int
    list_height: int
    too_small: bool
    dual_view: bool
    list_visible: bool
    preview_visible: bool
    preview_left: int
    preview_height: int

    @property
    def inner_width(self) -> int:
        return max(1, self.pane_width - 2)

    @property
    def footer_top(self) -> int:
        return LIST_TOP + self.list_height

    @property
    def preview_text_width(self) -> int:
        return self.inner_width


def compute_geometry(width: int, height: int, show_preview: bool) -> Geometry:
    """Derive pane placement for a ``width`` x ``height`` terminal."""
    width = max(0, width)
    height = max(0, height)
    list_height = height - LIST_TOP - FOOTER_ROWS
    too_small = list_height <= MIN_LIST_ROWS or width < MIN_LAYOUT_WIDTH
    dual_view = width >= 2 * MIN_LAYOUT_WIDTH
    preview_visible = show_preview
    list_visible = not show_preview or dual_view
    return Geometry(
        terminal_width=width,
        terminal_height=height,
        pane_width=min(max(width, 1), PANE_WIDTH),
        list_height=max(1, list_height),
        too_small=too_small,
        dual_view=dual_view,
        list_visible=list_visible,
        preview_visible=preview_visible,
        preview_left=PANE_WIDTH if (preview_visible and dual_view) else 0,
        preview_height=max(1, height - PREVIEW_CHROME_ROWS),
    )


def tab_zone_at(col: int) -> HitKind:
    """Classify a column on the tab row of the list pane."""
    left_end = 1 + TAB_ARROW_WIDTH + TAB_SIDE_WIDTH
    right_start = left_end + TAB_MIDDLE_WIDTH
    if 1 <= col < left_end:
        return HitKind.LEFT_TAB
    if right_start <= col < PANE_WIDTH - 1:
        return HitKind.RIGHT_TAB
    return HitKind.NONE


def hit_test(
    geometry: Geometry,
    col: int,
    row: int,
    *,
    search_active: bool,
    scroll_offset: int,
    item_count: int,
) -> HitTarget:
    """Map a zero-based pointer cell to the element drawn there."""
    if geometry.too_small:
        return NO_HIT

    if geometry.preview_visible:
        left = geometry.preview_left
        if left <= col < left + geometry.pane_width:
            if row == TITLE_ROW and not geometry.dual_view and left + 1 <= col < left + 1 + len(BACK_BUTTON):
                return HitTarget(HitKind.BACK)
            if PREVIEW_TEXT_TOP <= row < PREVIEW_TEXT_TOP + geometry.preview_height:
                return HitTarget(HitKind.PREVIEW)
            return NO_HIT

    if not geometry.list_visible or not (0 <= col < geometry.pane_width):
        return NO_HIT

    if row == NAV_ROW:
        if search_active:
            return HitTarget(HitKind.QUERY)
        kind = tab_zone_at(col)
        return HitTarget(kind) if kind is not HitKind.NONE else NO_HIT

    if LIST_TOP <= row < geometry.footer_top:
        index = scroll_offset + (row - LIST_TOP)
        if 0 <= index < item_count:
            return HitTarget(HitKind.LIST_ROW, index)
        return HitTarget(HitKind.LIST_AREA)
    return NO_HIT


__all__ = [
    "BACK_BUTTON",
    "Geometry",
    "HitKind",
    "HitTarget",
    "LIST_TOP",
    "MIN_LAYOUT_WIDTH",
    "NAV_ROW",
    "NO_HIT",
    "PANE_WIDTH",
    "PREVIEW_TEXT_TOP",
    "compute_geometry",
    "hit_test",
    "tab_zone_at",
]
