"""Scroll-window bookkeeping for the recipe list."""

from __future__ import annotations


def max_scroll_offset(count: int, height: int) -> int:
    return max(0, count - max(1, height))


def clamp_scroll_offset(offset: int, count: int, height: int) -> int:
    return max(0, min(offset, max_scroll_offset(count, height)))


def correct_scroll_offset(selected: int, offset: int, height: int, count: int) -> int:
    """Move ``offset`` at most one row toward ``selected``.

    Selection moves one row per event, so a single step keeps it visible
    without jumping the window. Returns ``offset`` unchanged when the
    selected row is already inside ``[offset, offset + height - 1]``.
    """
    height = max(1, height)
    offset = clamp_scroll_offset(offset, count, height)
    if count <= height:
        return 0
    if selected < offset:
        offset -= 1
    elif selected > offset + height - 1:
        offset += 1
    return clamp_scroll_offset(offset, count, height)


def settle_scroll_offset(selected: int, offset: int, height: int, count: int) -> int:
    """Repeat :func:`correct_scroll_offset` until the selection is visible.

    Used after the list or window changed shape, where the selection can be
    several rows outside the window.
    """
    while True:
        corrected = correct_scroll_offset(selected, offset, height, count)
        if corrected == offset:
            return corrected
        offset = corrected


__all__ = [
    "clamp_scroll_offset",
    "correct_scroll_offset",
    "max_scroll_offset",
    "settle_scroll_offset",
]
