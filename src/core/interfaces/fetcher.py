"""Contrato del fetcher de datos de repositorio."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import FetchResult


@runtime_checkable
class RepositoryFetcher(Protocol):
    """Obtiene metadata + título del README para un par (owner, name).

    Reglas de diseño:
    - `fetch` es asíncrono porque hace I/O (HTTP).
    - Nunca lanza: todo fallo se expresa como `FetchResult`.
    """

    async def fetch(self, owner: str, name: str) -> FetchResult: ...
