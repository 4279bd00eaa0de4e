"""Recipe catalog discovery and parsing.

Scans a directory of just files and extracts public recipe declarations.
Loading is best-effort: unreadable files and odd lines are skipped quietly.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)

RECIPE_RE = re.compile(r"^\s*([A-Za-z0-9_-]+)\s*:.*")
COMMENT_RE = re.compile(r"^\s*#\s*(.*)")
ORDER_PREFIX_RE = re.compile(r"^[0-9]+-")

DEFAULT_EXTENSION = ".just"
DEFAULT_EXCLUDE = "picker"


@dataclass(frozen=True)
class Recipe:
    name: str
    description: str = ""
    rank: int = 0


@dataclass(frozen=True)
class Category:
    name: str
    recipes: tuple[Recipe, ...] = ()


@dataclass(frozen=True)
class Catalog:
    """Loaded categories plus a flat, name-sorted view of every recipe."""

    categories: tuple[Category, ...] = ()
    all_recipes: tuple[Recipe, ...] = field(default=())

    def category_names(self) -> list[str]:
        return [category.name for category in self.categories]

    def recipes_for(self, index: int) -> tuple[Recipe, ...]:
        """Return recipes of category ``index``, or nothing when out of range."""
        if 0 <= index < len(self.categories):
            return self.categories[index].recipes
        return ()


def category_display_name(filename: str, extension: str = DEFAULT_EXTENSION) -> str:
    """Turn ``10-system-update.just`` into ``System Update``."""
    name = filename
    if extension and name.endswith(extension):
        name = name[: -len(extension)]
    name = ORDER_PREFIX_RE.sub("", name)
    return " ".join(part.title() for part in name.split("-"))


def _is_public_declaration(name: str, line: str) -> bool:
    if name.startswith("_"):
        return False
    if "alias" in line or "[private]" in line:
        return False
    return True


def parse_recipes(lines: list[str]) -> list[Recipe]:
    """Extract public recipes from just-file lines.

    A ``#`` comment becomes the description of the next accepted declaration.
    Rejected declarations leave the pending description in place.
    """
    recipes: list[Recipe] = []
    pending_description = ""
    for line in lines:
        comment = COMMENT_RE.match(line)
        if comment:
            pending_description = comment.group(1)
            continue
        declaration = RECIPE_RE.match(line)
        if declaration is None:
            continue
        name = declaration.group(1)
        if not _is_public_declaration(name, line):
            continue
        recipes.append(Recipe(name=name, description=pending_description))
        pending_description = ""
    return recipes


def _read_lines(path: Path) -> list[str] | None:
    try:
        return path.read_text(encoding="utf-8", errors="replace").splitlines()
    except OSError as exc:
        logger.debug("skipping unreadable recipe file %s: %s", path, exc)
        return None


def discover_recipe_files(
    recipe_dir: Path,
    extension: str = DEFAULT_EXTENSION,
    exclude: str = DEFAULT_EXCLUDE,
) -> list[Path]:
    try:
        candidates = sorted(recipe_dir.glob(f"*{extension}"))
    except OSError as exc:
        logger.debug("cannot scan recipe directory %s: %s", recipe_dir, exc)
        return []
    files: list[Path] = []
    for path in candidates:
        if exclude and exclude in path.name:
            continue
        if path.is_file():
            files.append(path)
    return files


def load_catalog(
    recipe_dir: Path,
    extension: str = DEFAULT_EXTENSION,
    exclude: str = DEFAULT_EXCLUDE,
) -> Catalog:
    """Build the catalog from every recipe file in ``recipe_dir``.

    Missing directories yield an empty catalog. Files without any public
    recipe do not produce a category.
    """
    by_category: dict[str, list[Recipe]] = {}
    for path in discover_recipe_files(recipe_dir, extension, exclude):
        lines = _read_lines(path)
        if lines is None:
            continue
        recipes = parse_recipes(lines)
        if not recipes:
            continue
        by_category.setdefault(category_display_name(path.name, extension), []).extend(recipes)

    categories = tuple(
        Category(name=name, recipes=tuple(by_category[name])) for name in sorted(by_category)
    )
    all_recipes = sorted(
        (recipe for category in categories for recipe in category.recipes),
        key=lambda recipe: recipe.name,
    )
    logger.debug(
        "loaded %d recipes in %d categories from %s",
        len(all_recipes),
        len(categories),
        recipe_dir,
    )
    return Catalog(categories=categories, all_recipes=tuple(all_recipes))


__all__ = [
    "Catalog",
    "Category",
    "Recipe",
    "category_display_name",
    "discover_recipe_files",
    "load_catalog",
    "parse_recipes",
]
