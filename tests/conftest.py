"""Shared fixtures: TheMealDB payloads and in-memory fakes."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import pytest

from mealbrowser.catalog import CategoryMeals, sort_meals
from mealbrowser.config import Settings
from mealbrowser.errors import ErrorCode, FetchError
from mealbrowser.models.meals import MealSummary

if TYPE_CHECKING:
    from collections.abc import Sequence

BASE_URL = "https://meals.test/api/json/v1/1"


def meal(meal_id: str, name: str) -> MealSummary:
    return MealSummary(id=meal_id, name=name)


class FakeCatalog:
    """In-memory catalog that records what the meal stage observed."""

    def __init__(
        self,
        categories: Sequence[str] = (),
        meals: dict[str, list[MealSummary]] | None = None,
        *,
        category_error: Exception | None = None,
        category_delay: float = 0.0,
        failing: Sequence[str] = (),
    ) -> None:
        self.categories = tuple(categories)
        self.meals = meals or {}
        self.category_error = category_error
        self.category_delay = category_delay
        self.failing = set(failing)
        self.category_calls = 0
        self.observed: list[tuple[str, ...]] = []

    async def fetch_categories(self) -> tuple[str, ...]:
        self.category_calls += 1
        if self.category_delay:
            await asyncio.sleep(self.category_delay)
        if self.category_error is not None:
            raise self.category_error
        return tuple(sorted(self.categories))

    async def fetch_meals(self, categories: Sequence[str]) -> list[CategoryMeals]:
        self.observed.append(tuple(categories))
        results = []
        for category in categories:
            if category in self.failing:
                error = FetchError(ErrorCode.NETWORK_ERROR, "boom", url=f"{BASE_URL}/filter.php")
                results.append(CategoryMeals(category=category, error=error))
            else:
                results.append(
                    CategoryMeals(category=category, meals=sort_meals(self.meals.get(category, [])))
                )
        return results


@pytest.fixture()
def settings() -> Settings:
    return Settings(api={"base_url": BASE_URL})


@pytest.fixture()
def categories_payload() -> dict:
    return {
        "categories": [
            {
                "idCategory": "3",
                "strCategory": "Dessert",
                "strCategoryThumb": "https://meals.test/images/category/dessert.png",
                "strCategoryDescription": "Sweet things.",
            },
            {
                "idCategory": "1",
                "strCategory": "Beef",
                "strCategoryThumb": "https://meals.test/images/category/beef.png",
                "strCategoryDescription": "Beef is the culinary name for meat from cattle.",
            },
        ]
    }


@pytest.fixture()
def beef_payload() -> dict:
    return {
        "meals": [
            {"strMeal": "Zebra Stew", "strMealThumb": "https://meals.test/z.jpg", "idMeal": "2"},
            {"strMeal": "Apple Beef", "strMealThumb": "https://meals.test/a.jpg", "idMeal": "1"},
        ]
    }


@pytest.fixture()
def dessert_payload() -> dict:
    return {
        "meals": [
            {"strMeal": "Treacle Tart", "strMealThumb": "https://meals.test/t.jpg", "idMeal": "20"},
            {"strMeal": "Apple Frangipan Tart", "strMealThumb": "https://meals.test/f.jpg", "idMeal": "10"},
        ]
    }


@pytest.fixture()
def fake_catalog() -> FakeCatalog:
    return FakeCatalog(
        ["Dessert", "Beef", "Breakfast"],
        {
            "Beef": [meal("2", "Zebra Stew"), meal("1", "Apple Beef")],
            "Breakfast": [meal("5", "Full English")],
            "Dessert": [meal("20", "Treacle Tart"), meal("10", "Apple Frangipan Tart")],
        },
    )


@pytest.fixture()
def make_catalog() -> type[FakeCatalog]:
    return FakeCatalog
