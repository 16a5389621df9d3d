"""Wiring for one screen load: settings, HTTP client, catalog, and index."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from mealbrowser.catalog import MealCatalog, lookup_url
from mealbrowser.fetcher import Fetcher, build_http_client
from mealbrowser.index import MealIndex

if TYPE_CHECKING:
    import httpx

    from mealbrowser.config import Settings
    from mealbrowser.pipeline import CatalogProtocol


@dataclass
class AppState:
    settings: Settings
    catalog: CatalogProtocol
    index: MealIndex = field(default_factory=MealIndex)
    http_client: httpx.AsyncClient | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> AppState:
        client = build_http_client(settings.api)
        catalog = MealCatalog(Fetcher(client), base_url=settings.api.base_url)
        return cls(settings=settings, catalog=catalog, http_client=client)

    def lookup_url(self, meal_id: str) -> str:
        return lookup_url(meal_id, self.settings.api.base_url)

    async def aclose(self) -> None:
        if self.http_client is not None:
            await self.http_client.aclose()
