"""HTTP transport: fetch bytes, decode typed models.

Every failure is converted to a ``FetchError`` so callers only ever deal with
one exception type. httpx errors and pydantic validation errors never cross
the Fetcher boundary.
"""

from __future__ import annotations

from typing import TypeVar

import httpx
import structlog
from pydantic import BaseModel, ValidationError

from mealbrowser.config import ApiSettings
from mealbrowser.errors import ErrorCode, FetchError

log = structlog.get_logger()

ModelT = TypeVar("ModelT", bound=BaseModel)


def build_http_client(settings: ApiSettings | None = None) -> httpx.AsyncClient:
    """Create the shared AsyncClient used for all API requests."""
    settings = settings or ApiSettings()
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.timeout_seconds),
        follow_redirects=True,
        headers={"Accept": "application/json"},
    )


class Fetcher:
    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def fetch_bytes(self, url: str) -> bytes:
        """GET ``url`` and return the raw body. Raises ``FetchError`` on any failure."""
        try:
            response = await self._client.get(url)
        except httpx.HTTPError as exc:
            log.warning("fetch_network_error", url=url, error=str(exc))
            raise FetchError(
                ErrorCode.NETWORK_ERROR, f"Request to {url} failed: {exc}", url=url
            ) from exc

        if not response.is_success:
            log.warning("fetch_http_error", url=url, status_code=response.status_code)
            raise FetchError(
                ErrorCode.NETWORK_ERROR,
                f"Request to {url} returned HTTP {response.status_code}",
                url=url,
            )

        log.debug("fetch_complete", url=url, size=len(response.content))
        return response.content

    @staticmethod
    def decode(content: bytes, model: type[ModelT], *, url: str = "") -> ModelT:
        """Decode a JSON body into ``model``. Raises ``FetchError`` on shape mismatch."""
        try:
            return model.model_validate_json(content)
        except ValidationError as exc:
            log.warning(
                "fetch_decode_error",
                url=url,
                model=model.__name__,
                error_count=exc.error_count(),
            )
            raise FetchError(
                ErrorCode.DECODE_ERROR,
                f"Response from {url or 'request'} is not a valid {model.__name__}",
                url=url,
            ) from exc

    async def fetch_model(self, url: str, model: type[ModelT]) -> ModelT:
        content = await self.fetch_bytes(url)
        return self.decode(content, model, url=url)
