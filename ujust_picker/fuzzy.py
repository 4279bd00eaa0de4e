"""Incremental fuzzy search over recipe names."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import replace

from .catalog import Recipe

SUBSTRING_BONUS = 1_000


def is_subsequence(query_folded: str, candidate_folded: str) -> bool:
    prev_idx = -1
    for needle in query_folded:
        prev_idx = candidate_folded.find(needle, prev_idx + 1)
        if prev_idx < 0:
            return False
    return True


def fuzzy_rank(query: str, candidate: str) -> int | None:
    """Rank ``candidate`` against ``query``; lower is better, ``None`` is no match.

    A subsequence match costs one point per character that had to be inserted
    to turn the query into the candidate. Contiguous substring matches get a
    flat bonus so they always outrank scattered ones.
    """
    query_folded = query.casefold()
    candidate_folded = candidate.casefold()
    if not is_subsequence(query_folded, candidate_folded):
        return None
    rank = len(candidate_folded) - len(query_folded)
    if query_folded in candidate_folded:
        rank -= SUBSTRING_BONUS
    return rank


def filter_recipes(query: str, recipes: Sequence[Recipe]) -> list[Recipe]:
    """Return recipes matching ``query`` ordered best-first.

    An empty query returns ``recipes`` untouched, in input order and without
    ranks. Equal ranks keep input order since ``sorted`` is stable.
    """
    if not query:
        return list(recipes)

    matches: list[Recipe] = []
    for recipe in recipes:
        rank = fuzzy_rank(query, recipe.name)
        if rank is None:
            continue
        matches.append(replace(recipe, rank=rank))
    return sorted(matches, key=lambda recipe: recipe.rank)


__all__ = ["filter_recipes", "fuzzy_rank", "is_subsequence"]
