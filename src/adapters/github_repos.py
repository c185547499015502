"""Fetcher de repositorios vía API REST de GitHub.

Flujo por repo:
- Caché (TTL) primero; si hay hit no hay red.
- Si no, dos GET en paralelo: metadata y README.
- La metadata es la señal principal: sin ella no hay nada que mostrar.
- El README solo aporta el título; cualquier fallo ahí se absorbe.

Nunca lanza: el resultado es siempre un `FetchResult`.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import httpx
from pydantic import ValidationError

from core.domain.models import FetchResult, RepositoryData, repository_cache_key
from core.readme_title import extract_readme_title
from core.ttl_cache import TTLCache

logger = logging.getLogger(__name__)

DEFAULT_API_BASE = "https://api.github.com/repos"
RATE_LIMIT_STATUS = 403


class RepositoryStatsFetcher:
    """Implementa `core.interfaces.fetcher.RepositoryFetcher` sobre httpx."""

    def __init__(
        self,
        *,
        client: httpx.AsyncClient,
        cache: TTLCache[RepositoryData] | None = None,
        api_base: str = DEFAULT_API_BASE,
    ) -> None:
        self._client = client
        self._cache: TTLCache[RepositoryData] = cache if cache is not None else TTLCache()
        self._api_base = api_base.rstrip("/")
        # Peticiones en curso, con la misma clave que la caché.
        self._in_flight: dict[str, asyncio.Task[FetchResult]] = {}

    async def fetch(self, owner: str, name: str) -> FetchResult:
        key = repository_cache_key(owner, name)

        cached = self._cache.get(key)
        if cached is not None:
            return FetchResult.success(cached, from_cache=True)

        task = self._in_flight.get(key)
        if task is None:
            task = asyncio.ensure_future(self._fetch_uncached(owner, name, key))
            self._in_flight[key] = task

        try:
            return await asyncio.shield(task)
        except Exception as exc:
            logger.error("Error fetching GitHub data for %s: %s", key, exc)
            return FetchResult.failed(f"unexpected error: {exc}")

    async def _fetch_uncached(self, owner: str, name: str, key: str) -> FetchResult:
        try:
            return await self._request(owner, name, key)
        finally:
            self._in_flight.pop(key, None)

    async def _request(self, owner: str, name: str, key: str) -> FetchResult:
        repo_url = f"{self._api_base}/{owner}/{name}"
        readme_url = f"{repo_url}/readme"

        repo_resp, readme_resp = await asyncio.gather(
            self._client.get(repo_url),
            self._client.get(readme_url),
            return_exceptions=True,
        )

        if isinstance(repo_resp, BaseException):
            logger.error("Error fetching GitHub data for %s: %s", key, repo_resp)
            return FetchResult.failed(f"transport error: {repo_resp}")

        if repo_resp.status_code == RATE_LIMIT_STATUS:
            logger.warning("GitHub API rate limit exceeded (%s)", key)
            return FetchResult.rate_limited(f"HTTP {repo_resp.status_code}")

        if not repo_resp.is_success:
            logger.error("GitHub API error for %s: HTTP %s", key, repo_resp.status_code)
            return FetchResult.failed(f"HTTP {repo_resp.status_code}")

        try:
            payload = repo_resp.json()
            if not isinstance(payload, dict):
                raise ValueError("repository payload is not a JSON object")
            data = RepositoryData.model_validate(payload)
        except (ValueError, ValidationError) as exc:
            logger.error("Invalid repository payload for %s: %s", key, exc)
            return FetchResult.failed(f"invalid payload: {exc}")

        title = self._readme_title(readme_resp, key)
        # `extract_readme_title` ya devuelve None o un título no vacío.
        merged = data.model_copy(update={"readme_title": title})

        self._cache.set(key, merged)
        return FetchResult.success(merged)

    @staticmethod
    def _readme_title(response: httpx.Response | BaseException, key: str) -> str | None:
        if isinstance(response, BaseException):
            logger.info("Could not fetch README title for %s: %s", key, response)
            return None
        if not response.is_success:
            return None

        try:
            payload: Any = response.json()
        except ValueError as exc:
            logger.info("Could not fetch README title for %s: %s", key, exc)
            return None
        if not isinstance(payload, dict):
            logger.info("Could not fetch README title for %s: payload is not a JSON object", key)
            return None
        return extract_readme_title(payload.get("content"))
