"""TheMealDB catalog: category and per-category meal fetching.

``fetch_categories`` is all-or-nothing: any failure raises ``FetchError``.
``fetch_meals`` never raises for a single category; the failure is recorded in
that category's ``CategoryMeals.error`` and the slot keeps an empty meal list,
so the output stays position-aligned with the input.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import httpx
import structlog

from mealbrowser.config import DEFAULT_BASE_URL
from mealbrowser.errors import FetchError
from mealbrowser.models.meals import CategoriesResponse, MealsResponse, MealSummary

if TYPE_CHECKING:
    from collections.abc import Sequence

    from mealbrowser.fetcher import Fetcher

log = structlog.get_logger()


def categories_url(base_url: str = DEFAULT_BASE_URL) -> str:
    return f"{base_url.rstrip('/')}/categories.php"


def filter_url(category: str, base_url: str = DEFAULT_BASE_URL) -> str:
    return str(httpx.URL(f"{base_url.rstrip('/')}/filter.php", params={"c": category}))


def lookup_url(meal_id: str, base_url: str = DEFAULT_BASE_URL) -> str:
    """URL of the full meal record, handed off to the detail view."""
    return str(httpx.URL(f"{base_url.rstrip('/')}/lookup.php", params={"i": meal_id}))


def sort_meals(meals: Sequence[MealSummary]) -> tuple[MealSummary, ...]:
    return tuple(sorted(meals, key=lambda meal: meal.name))


@dataclass(frozen=True)
class CategoryMeals:
    """Meal fetch outcome for one category."""

    category: str
    meals: tuple[MealSummary, ...] = ()
    error: FetchError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class MealCatalog:
    def __init__(self, fetcher: Fetcher, base_url: str = DEFAULT_BASE_URL) -> None:
        self._fetcher = fetcher
        self.base_url = base_url.rstrip("/")

    async def fetch_categories(self) -> tuple[str, ...]:
        """Return category names sorted ascending, deduplicated."""
        response = await self._fetcher.fetch_model(
            categories_url(self.base_url), CategoriesResponse
        )
        names = tuple(sorted({record.name for record in response.categories}))
        log.info("categories_fetched", count=len(names))
        return names

    async def fetch_category_meals(self, category: str) -> CategoryMeals:
        url = filter_url(category, self.base_url)
        try:
            response = await self._fetcher.fetch_model(url, MealsResponse)
        except FetchError as exc:
            log.warning("meal_fetch_failed", category=category, code=exc.code.value)
            return CategoryMeals(category=category, error=exc)
        return CategoryMeals(category=category, meals=sort_meals(response.meals))

    async def fetch_meals(self, categories: Sequence[str]) -> list[CategoryMeals]:
        """Fetch meals for every category, sequentially and in input order."""
        results = [await self.fetch_category_meals(category) for category in categories]
        failed = sum(1 for result in results if not result.ok)
        log.info("meals_fetched", categories=len(results), failed=failed)
        return results
