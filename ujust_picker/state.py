"""Mutable navigation state and the read-only frame snapshot built from it."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .catalog import Recipe
from .layout import Geometry


class Mode(Enum):
    BROWSING = "browsing"
    SEARCHING = "searching"
    PREVIEWING_CODE = "previewing_code"


@dataclass
class NavigationState:
    active_category: int = 0
    selected: int = 0
    search_active: bool = False
    query_focused: bool = False
    search_query: str = ""
    show_preview: bool = False
    scroll_offset: int = 0
    viewport_height: int = 1
    viewport_width: int = 1
    terminal_width: int = 0
    terminal_height: int = 0
    dual_view: bool = False
    too_small: bool = True
    preview_lines: list[str] = field(default_factory=list)
    preview_offset: int = 0
    chosen: str | None = None
    dirty: bool = True

    @property
    def mode(self) -> Mode:
        if self.show_preview:
            return Mode.PREVIEWING_CODE
        if self.search_active:
            return Mode.SEARCHING
        return Mode.BROWSING


@dataclass(frozen=True)
class FrameView:
    """Everything the renderer may look at for one frame."""

    geometry: Geometry
    mode: Mode
    category_names: tuple[str, ...]
    active_category: int
    entries: tuple[Recipe, ...]
    selected: int
    scroll_offset: int
    viewport_height: int
    search_active: bool
    search_query: str
    query_focused: bool
    preview_lines: tuple[str, ...]
    preview_offset: int

    @property
    def selected_recipe(self) -> Recipe | None:
        if 0 <= self.selected < len(self.entries):
            return self.entries[self.selected]
        return None

    @property
    def visible_entries(self) -> tuple[Recipe, ...]:
        return self.entries[self.scroll_offset : self.scroll_offset + self.viewport_height]


__all__ = ["FrameView", "Mode", "NavigationState"]
