"""Caché en memoria con expiración perezosa.

Reglas:
- Una entrada es válida mientras `now - stored_at < ttl`.
- Las entradas vencidas no se borran; `get` simplemente las ignora y el
  siguiente `set` las sobrescribe.
- Sin límite de capacidad: hay tantas claves como repos distintos en la página.
- No es thread-safe; se usa desde un único event loop.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Generic, TypeVar

V = TypeVar("V")

DEFAULT_TTL_SECONDS = 5 * 60


@dataclass
class CacheEntry(Generic[V]):
    payload: V
    stored_at: float


class TTLCache(Generic[V]):
    """Store clave -> valor con un TTL fijo definido al construir."""

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self._ttl = float(ttl_seconds)
        self._clock = clock
        self._entries: dict[str, CacheEntry[V]] = {}

    @property
    def ttl_seconds(self) -> float:
        return self._ttl

    def get(self, key: str) -> V | None:
        """Valor vigente para `key`, o `None` si no existe o ya venció."""

        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._clock() - entry.stored_at < self._ttl:
            return entry.payload
        return None

    def set(self, key: str, value: V) -> None:
        self._entries[key] = CacheEntry(payload=value, stored_at=self._clock())

    def __len__(self) -> int:
        # Incluye entradas vencidas (no hay evicción).
        return len(self._entries)
