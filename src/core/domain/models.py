"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Valida el JSON de la API en el borde sin acoplar el Core a HTTP.
- Permite conservar campos upstream desconocidos (`extra="allow"`) para que
  el resultado sea la unión de la metadata del repo más los campos derivados.

Nota:
- Estos modelos describen *qué* es la información, no *cómo* se obtiene.
"""

from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict


def repository_cache_key(owner: str, name: str) -> str:
    """Clave de caché: `owner/name`, sensible a mayúsculas."""

    return f"{owner}/{name}"


class RepositoryIdentifier(BaseModel):
    """Par (owner, name) extraído de una URL del hosting."""

    model_config = ConfigDict(frozen=True)

    owner: str = Field(..., min_length=1, description="Usuario u organización dueña del repo.")
    name: str = Field(..., min_length=1, description="Nombre del repositorio tal cual aparece en la URL.")

    @property
    def cache_key(self) -> str:
        return repository_cache_key(self.owner, self.name)


class RepositoryData(BaseModel):
    """Metadata del repositorio + título del README.

    Solo tipamos los campos que usa el render; el resto de la respuesta de la
    API se conserva como extra.
    """

    model_config = ConfigDict(extra="allow")

    name: str | None = Field(default=None, description="Nombre canónico del repo.")
    full_name: str | None = Field(default=None, description="`owner/name` canónico.")
    description: str | None = Field(default=None, description="Descripción libre.")
    stargazers_count: int | None = Field(default=None, ge=0, description="Número de estrellas.")
    forks_count: int | None = Field(default=None, ge=0, description="Número de forks.")
    language: str | None = Field(default=None, description="Lenguaje principal detectado upstream.")
    html_url: str | None = Field(default=None, description="URL pública del repo.")

    readme_title: str | None = Field(
        default=None,
        description="Primer encabezado de nivel 1 del README (nunca cadena vacía).",
    )

    @field_validator("readme_title")
    @classmethod
    def _normalize_title(cls, value: str | None) -> str | None:
        if value is None:
            return None
        value = value.strip()
        return value or None


class FetchStatus(str, Enum):
    """Resultado de una consulta a la API."""

    OK = "ok"
    RATE_LIMITED = "rate_limited"
    FAILED = "failed"


class FetchResult(BaseModel):
    """Variante explícita del resultado de `fetch`.

    Distingue "rate limited" de "fallo real" sin que el fetcher lance excepciones.
    """

    status: FetchStatus
    data: RepositoryData | None = None
    detail: str | None = Field(default=None, description="Motivo legible del fallo (para logs/CLI).")
    from_cache: bool = False

    @classmethod
    def success(cls, data: RepositoryData, *, from_cache: bool = False) -> "FetchResult":
        return cls(status=FetchStatus.OK, data=data, from_cache=from_cache)

    @classmethod
    def rate_limited(cls, detail: str | None = None) -> "FetchResult":
        return cls(status=FetchStatus.RATE_LIMITED, detail=detail)

    @classmethod
    def failed(cls, detail: str) -> "FetchResult":
        return cls(status=FetchStatus.FAILED, detail=detail)

    @property
    def ok(self) -> bool:
        return self.status is FetchStatus.OK and self.data is not None


class StatItem(BaseModel):
    """Un elemento del bloque de estadísticas de una tarjeta."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["stars", "forks", "language"]
    text: str
