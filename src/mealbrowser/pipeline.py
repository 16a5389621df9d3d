"""One-shot load pipeline: categories -> meals -> merged index -> ready.

The stages run strictly in sequence inside a single coroutine. The meal fetch
starts only after the category fetch has finished, and the snapshot is
installed (and the ready signal fired) only after the meal fetch has finished.
The loading signal brackets the whole run, including failure and cancellation.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING, Protocol

import structlog

from mealbrowser.errors import FetchError
from mealbrowser.index import merge

if TYPE_CHECKING:
    from collections.abc import Sequence

    from mealbrowser.catalog import CategoryMeals
    from mealbrowser.index import CategoryIndex, MealIndex

log = structlog.get_logger()


class CatalogProtocol(Protocol):
    async def fetch_categories(self) -> tuple[str, ...]: ...

    async def fetch_meals(self, categories: Sequence[str]) -> list[CategoryMeals]: ...


class LoadStatus(StrEnum):
    PENDING = "pending"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"
    CANCELLED = "cancelled"


@dataclass
class LoadResult:
    status: LoadStatus
    error: FetchError | None = None
    failed_categories: list[str] = field(default_factory=list)


def _noop(*_args: object) -> None:
    return None


class LoadPipeline:
    """Runs the fetch chain once and feeds the result into a ``MealIndex``.

    Callbacks (all optional):
      on_loading(bool)         -- True before the first request, False after the last
      on_error(FetchError)     -- category fetch failed; fired at most once
      on_ready(CategoryIndex)  -- snapshot installed and readable
    """

    def __init__(
        self,
        catalog: CatalogProtocol,
        index: MealIndex,
        *,
        on_loading: Callable[[bool], None] | None = None,
        on_error: Callable[[FetchError], None] | None = None,
        on_ready: Callable[[CategoryIndex], None] | None = None,
    ) -> None:
        self._catalog = catalog
        self._index = index
        self._on_loading = on_loading or _noop
        self._on_error = on_error or _noop
        self._on_ready = on_ready or _noop
        self.status = LoadStatus.PENDING

    async def run(self) -> LoadResult:
        if self.status is not LoadStatus.PENDING:
            raise RuntimeError(f"pipeline already ran (status={self.status.value})")

        self.status = LoadStatus.LOADING
        self._on_loading(True)
        try:
            result = await self._run_stages()
        except asyncio.CancelledError:
            self.status = LoadStatus.CANCELLED
            log.info("pipeline_cancelled")
            raise
        finally:
            self._on_loading(False)

        self.status = result.status
        if result.error is not None:
            self._on_error(result.error)
        else:
            self._on_ready(self._index.snapshot)
        return result

    async def _run_stages(self) -> LoadResult:
        try:
            categories = await self._catalog.fetch_categories()
        except FetchError as exc:
            log.warning("pipeline_failed", stage="categories", code=exc.code.value)
            return LoadResult(status=LoadStatus.FAILED, error=exc)

        results = await self._catalog.fetch_meals(categories)
        failed = [result.category for result in results if not result.ok]
        if failed:
            log.warning("pipeline_partial_meals", failed_categories=failed)

        self._index.install(merge(categories, results))
        log.info("pipeline_ready", categories=len(categories), failed=len(failed))
        return LoadResult(status=LoadStatus.READY, failed_categories=failed)
