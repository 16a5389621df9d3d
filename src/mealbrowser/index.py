"""Merge/search index over the loaded catalog.

``CategoryIndex`` is the authoritative snapshot: category names and, aligned
by position, the name-sorted meal list of each category. ``MealIndex`` owns the
current snapshot plus the active view state (browsing or searching) and
answers the sectioned-list queries of the screen.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import structlog

from mealbrowser.catalog import sort_meals

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from mealbrowser.catalog import CategoryMeals
    from mealbrowser.models.meals import MealSummary

log = structlog.get_logger()


@dataclass(frozen=True)
class CategoryIndex:
    """Authoritative (categories, meal lists) snapshot. Immutable."""

    categories: tuple[str, ...] = ()
    meal_lists: tuple[tuple[MealSummary, ...], ...] = ()

    def __post_init__(self) -> None:
        if len(self.categories) != len(self.meal_lists):
            raise ValueError(
                f"{len(self.categories)} categories but {len(self.meal_lists)} meal lists"
            )

    @classmethod
    def build(
        cls,
        categories: Iterable[str],
        meal_lists: Iterable[Sequence[MealSummary]],
    ) -> CategoryIndex:
        """Pair categories with meal lists, sorting both.

        Sorting categories carries each meal list along with its category, so
        alignment survives whatever order the inputs arrived in.
        """
        categories = tuple(categories)
        meal_lists = tuple(meal_lists)
        if len(categories) != len(meal_lists):
            raise ValueError(f"{len(categories)} categories but {len(meal_lists)} meal lists")
        pairs = sorted(zip(categories, meal_lists, strict=True), key=lambda pair: pair[0])
        return cls(
            categories=tuple(category for category, _ in pairs),
            meal_lists=tuple(sort_meals(meals) for _, meals in pairs),
        )

    def __len__(self) -> int:
        return len(self.categories)


@dataclass(frozen=True)
class SearchView:
    """Categories whose name starts with ``query``, with their meal lists."""

    query: str
    categories: tuple[str, ...] = ()
    meal_lists: tuple[tuple[MealSummary, ...], ...] = ()


@dataclass(frozen=True)
class Browsing:
    pass


@dataclass(frozen=True)
class Searching:
    view: SearchView


ViewState = Browsing | Searching


def merge(categories: Sequence[str], results: Sequence[CategoryMeals]) -> CategoryIndex:
    """Join categories with their meal fetch results.

    A category with no result, or whose fetch failed, gets an empty meal list
    rather than losing its slot.
    """
    by_category = {result.category: result for result in results}
    meal_lists: list[tuple[MealSummary, ...]] = []
    for category in categories:
        result = by_category.get(category)
        if result is None or not result.ok:
            meal_lists.append(())
        else:
            meal_lists.append(result.meals)
    return CategoryIndex.build(categories, meal_lists)


def filter_by_prefix(snapshot: CategoryIndex, query: str) -> SearchView:
    """Case-sensitive prefix match on category names; empty query matches all."""
    matches = [
        (category, meals)
        for category, meals in zip(snapshot.categories, snapshot.meal_lists, strict=True)
        if category[: len(query)] == query
    ]
    return SearchView(
        query=query,
        categories=tuple(category for category, _ in matches),
        meal_lists=tuple(meals for _, meals in matches),
    )


@dataclass
class MealIndex:
    """Current snapshot plus the browsing/searching state the screen reads."""

    snapshot: CategoryIndex = field(default_factory=CategoryIndex)
    state: ViewState = field(default_factory=Browsing)

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def load(
        self,
        categories: Iterable[str],
        meal_lists: Iterable[Sequence[MealSummary]],
    ) -> None:
        """Install a new snapshot with a single reference swap."""
        self.install(CategoryIndex.build(categories, meal_lists))

    def install(self, snapshot: CategoryIndex) -> None:
        self.snapshot = snapshot
        if isinstance(self.state, Searching):
            self.state = Searching(filter_by_prefix(snapshot, self.state.view.query))
        log.debug("index_loaded", categories=len(snapshot))

    def apply_query(self, query: str) -> SearchView:
        view = filter_by_prefix(self.snapshot, query)
        self.state = Searching(view)
        return view

    def clear_query(self) -> None:
        self.state = Browsing()

    # ------------------------------------------------------------------
    # Active view
    # ------------------------------------------------------------------

    @property
    def is_searching(self) -> bool:
        return isinstance(self.state, Searching)

    @property
    def query(self) -> str:
        if isinstance(self.state, Searching):
            return self.state.view.query
        return ""

    def _active(self) -> CategoryIndex | SearchView:
        if isinstance(self.state, Searching):
            return self.state.view
        return self.snapshot

    @property
    def categories(self) -> tuple[str, ...]:
        return self._active().categories

    @property
    def meal_lists(self) -> tuple[tuple[MealSummary, ...], ...]:
        return self._active().meal_lists

    def section_count(self) -> int:
        return len(self._active().categories)

    def section_title(self, section: int) -> str:
        return self._active().categories[section]

    def row_count(self, section: int) -> int:
        return len(self._active().meal_lists[section])

    def row_title(self, section: int, row: int) -> str:
        return self._active().meal_lists[section][row].name

    def meal_at(self, section: int, row: int) -> MealSummary:
        return self._active().meal_lists[section][row]

    def resolve_meal_id(self, section: int, row: int) -> str:
        return self.meal_at(section, row).id
