"""Event-driven navigation core for the recipe picker.

:class:`NavigationStateMachine` owns the :class:`NavigationState` and applies
one event at a time. After every event it re-clamps indices, corrects the
scroll window, and refreshes the preview when it is visible, so the state is
consistent before the next frame is rendered.
"""

from __future__ import annotations

from collections.abc import Sequence

from .catalog import Catalog, Recipe
from .events import Event, KeyEvent, MouseAction, MouseEvent, ResizeEvent
from .fuzzy import filter_recipes
from .layout import Geometry, HitKind, compute_geometry, hit_test
from .preview import PreviewFetcher
from .state import FrameView, NavigationState
from .viewport import correct_scroll_offset, settle_scroll_offset

QUIT_KEYS = {"ESC", "q", "CTRL_C"}
UP_KEYS = {"UP", "k"}
DOWN_KEYS = {"DOWN", "j"}
PAGE_KEYS = {"PAGE_UP": -1, "PAGE_DOWN": 1}


class NavigationStateMachine:
    def __init__(
        self,
        catalog: Catalog,
        fetcher: PreviewFetcher,
        *,
        width: int = 0,
        height: int = 0,
        state: NavigationState | None = None,
    ) -> None:
        self.catalog = catalog
        self.fetcher = fetcher
        self.state = state if state is not None else NavigationState()
        self._search_results: list[Recipe] = list(catalog.all_recipes)
        self._preview_name: str | None = None
        self.state.terminal_width = width
        self.state.terminal_height = height
        self._finish(reshaped=True)

    # Derived views

    @property
    def geometry(self) -> Geometry:
        return compute_geometry(
            self.state.terminal_width,
            self.state.terminal_height,
            self.state.show_preview,
        )

    def current_list(self) -> Sequence[Recipe]:
        if self.state.search_active:
            return self._search_results
        return self.catalog.recipes_for(self.state.active_category)

    def selected_recipe(self) -> Recipe | None:
        items = self.current_list()
        if 0 <= self.state.selected < len(items):
            return items[self.state.selected]
        return None

    def snapshot(self) -> FrameView:
        state = self.state
        return FrameView(
            geometry=self.geometry,
            mode=state.mode,
            category_names=tuple(self.catalog.category_names()),
            active_category=state.active_category,
            entries=tuple(self.current_list()),
            selected=state.selected,
            scroll_offset=state.scroll_offset,
            viewport_height=state.viewport_height,
            search_active=state.search_active,
            search_query=state.search_query,
            query_focused=state.query_focused,
            preview_lines=tuple(state.preview_lines),
            preview_offset=state.preview_offset,
        )

    # Transition entry point

    def apply(self, event: Event) -> bool:
        """Apply one event; returns True when the interactive loop must stop."""
        if isinstance(event, ResizeEvent):
            self.state.terminal_width = event.width
            self.state.terminal_height = event.height
            self._finish(reshaped=True)
            return False
        if isinstance(event, MouseEvent):
            return self._apply_mouse(event)
        if isinstance(event, KeyEvent):
            return self._apply_key(event.key)
        return False

    # Keyboard

    def _apply_key(self, key: str) -> bool:
        state = self.state
        if state.search_active and state.query_focused:
            return self._apply_query_key(key)

        if key in QUIT_KEYS:
            return True
        if key == "ENTER":
            return self.confirm()
        if key in UP_KEYS:
            self.move_selection(-1)
        elif key in DOWN_KEYS:
            self.move_selection(1)
        elif key in PAGE_KEYS:
            self.move_page(PAGE_KEYS[key])
        elif key == "HOME":
            self.jump_selection(0)
        elif key == "END":
            self.jump_selection(len(self.current_list()) - 1)
        elif key == "LEFT":
            self.change_tab(-1)
        elif key == "RIGHT":
            self.change_tab(1)
        elif key == "c":
            self.toggle_preview()
        elif key == "s":
            self.toggle_search()
        return False

    def _apply_query_key(self, key: str) -> bool:
        state = self.state
        if key == "ESC":
            state.query_focused = False
            state.dirty = True
            return False
        if key == "CTRL_C":
            return True
        if key == "ENTER":
            return self.confirm()
        if key == "UP":
            self.move_selection(-1)
        elif key == "DOWN":
            self.move_selection(1)
        elif key in PAGE_KEYS:
            self.move_page(PAGE_KEYS[key])
        elif key == "BACKSPACE":
            self.set_query(state.search_query[:-1])
        elif key == "CTRL_U":
            self.set_query("")
        elif len(key) == 1 and key.isprintable() and key != "\ufffd":
            self.set_query(state.search_query + key)
        return False

    # Pointer

    def _apply_mouse(self, event: MouseEvent) -> bool:
        state = self.state
        target = hit_test(
            self.geometry,
            event.col,
            event.row,
            search_active=state.search_active,
            scroll_offset=state.scroll_offset,
            item_count=len(self.current_list()),
        )

        if event.action in {MouseAction.WHEEL_UP, MouseAction.WHEEL_DOWN}:
            direction = -1 if event.action is MouseAction.WHEEL_UP else 1
            if target.kind in {HitKind.LIST_ROW, HitKind.LIST_AREA}:
                self.move_selection(direction)
            elif target.kind is HitKind.PREVIEW:
                self.scroll_preview(direction)
            return False

        if event.action is not MouseAction.LEFT_UP:
            return False

        if state.search_active:
            focused = target.kind is HitKind.QUERY
            if focused != state.query_focused:
                state.query_focused = focused
                state.dirty = True

        if target.kind is HitKind.LEFT_TAB:
            self.change_tab(-1)
        elif target.kind is HitKind.RIGHT_TAB:
            self.change_tab(1)
        elif target.kind is HitKind.BACK:
            self.toggle_preview()
        elif target.kind is HitKind.LIST_ROW:
            if target.index == state.selected:
                return self.confirm()
            state.selected = target.index
            self._finish()
        return False

    # Operations

    def move_selection(self, direction: int) -> None:
        items = self.current_list()
        previous = self.state.selected
        self.state.selected = max(0, min(len(items) - 1, previous + direction))
        self._finish()

    def move_page(self, direction: int) -> None:
        self.jump_selection(self.state.selected + direction * self.state.viewport_height)

    def jump_selection(self, index: int) -> None:
        items = self.current_list()
        self.state.selected = max(0, min(len(items) - 1, index))
        self._finish(reshaped=True)

    def change_tab(self, direction: int) -> None:
        state = self.state
        if state.search_active:
            return
        previous = state.active_category
        last = max(0, len(self.catalog.categories) - 1)
        state.active_category = max(0, min(last, previous + direction))
        if state.active_category == previous:
            return
        state.selected = 0
        state.scroll_offset = 0
        self._finish(reshaped=True)

    def toggle_search(self) -> None:
        state = self.state
        state.search_active = not state.search_active
        state.query_focused = state.search_active
        state.selected = 0
        state.scroll_offset = 0
        if state.search_active:
            self._search_results = filter_recipes(state.search_query, self.catalog.all_recipes)
        self._finish(reshaped=True)

    def set_query(self, query: str) -> None:
        state = self.state
        if query == state.search_query:
            return
        state.search_query = query
        self._search_results = filter_recipes(query, self.catalog.all_recipes)
        state.selected = 0
        self._finish(reshaped=True)

    def toggle_preview(self) -> None:
        state = self.state
        state.show_preview = not state.show_preview
        if not state.show_preview:
            self.fetcher.invalidate()
            self._preview_name = None
            state.preview_lines = []
            state.preview_offset = 0
        self._finish(reshaped=True)

    def scroll_preview(self, direction: int) -> None:
        state = self.state
        limit = max(0, len(state.preview_lines) - self.geometry.preview_height)
        state.preview_offset = max(0, min(limit, state.preview_offset + direction))
        state.dirty = True

    def confirm(self) -> bool:
        recipe = self.selected_recipe()
        if recipe is None:
            return False
        self.state.chosen = recipe.name
        return True

    # Invariant maintenance

    def _finish(self, *, reshaped: bool = False) -> None:
        state = self.state
        geometry = self.geometry
        # The list window keeps its last drawable size while the terminal is too small.
        if not geometry.too_small:
            state.viewport_height = geometry.list_height
            state.viewport_width = geometry.inner_width
        state.dual_view = geometry.dual_view
        state.too_small = geometry.too_small

        last_category = max(0, len(self.catalog.categories) - 1)
        state.active_category = max(0, min(last_category, state.active_category))

        count = len(self.current_list())
        state.selected = max(0, min(count - 1, state.selected)) if count else 0
        scroll = settle_scroll_offset if reshaped else correct_scroll_offset
        state.scroll_offset = scroll(state.selected, state.scroll_offset, state.viewport_height, count)

        if state.show_preview:
            self._refresh_preview(geometry)
        state.dirty = True

    def _refresh_preview(self, geometry: Geometry) -> None:
        state = self.state
        recipe = self.selected_recipe()
        name = recipe.name if recipe is not None else None
        state.preview_lines = list(self.fetcher.fetch(name, geometry.preview_text_width))
        if name != self._preview_name:
            self._preview_name = name
            state.preview_offset = 0
        limit = max(0, len(state.preview_lines) - geometry.preview_height)
        state.preview_offset = max(0, min(limit, state.preview_offset))


__all__ = ["NavigationStateMachine"]
