from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class CategoryRecord(BaseModel):
    """Single entry of categories.php. Only the name is used."""

    name: str = Field(alias="strCategory")


class CategoriesResponse(BaseModel):
    categories: list[CategoryRecord]


class MealSummary(BaseModel):
    """Minimal per-meal record (id + display name) used for list rendering."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(alias="idMeal")  # Opaque TheMealDB identifier
    name: str = Field(alias="strMeal")


class MealsResponse(BaseModel):
    # filter.php answers {"meals": null} for an unknown category, which fails here
    meals: list[MealSummary]
