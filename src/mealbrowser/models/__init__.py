from __future__ import annotations

from mealbrowser.models.meals import (
    CategoriesResponse,
    CategoryRecord,
    MealSummary,
    MealsResponse,
)

__all__ = [
    # categories.php
    "CategoryRecord",
    "CategoriesResponse",
    # filter.php
    "MealSummary",
    "MealsResponse",
]
