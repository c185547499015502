"""Contrato de tarjeta de proyecto.

Por qué Protocol:
- El render solo necesita una capacidad (leer el enlace, escribir textos,
  reemplazar el bloque de stats), no un tipo concreto de HTML/UI.
- Permite testear el render con dobles simples, sin parsear HTML.
"""

from __future__ import annotations

from typing import Protocol, Sequence, runtime_checkable

from core.domain.models import StatItem


@runtime_checkable
class ProjectCard(Protocol):
    """Tarjeta ya existente en la página.

    Las implementaciones toleran sub-elementos ausentes (no-op).
    """

    def repository_url(self) -> str | None:
        """URL del enlace al hosting dentro de la tarjeta, si existe."""

        ...

    def set_title(self, text: str) -> None: ...

    def set_description(self, text: str) -> None: ...

    def show_loading(self) -> None:
        """Inserta el indicador transitorio de carga en la zona de stats."""

        ...

    def hide_loading(self) -> None:
        """Quita el indicador de carga (idempotente)."""

        ...

    def replace_stats(self, items: Sequence[StatItem]) -> None:
        """Reconstruye desde cero el bloque de stats con `items` en orden."""

        ...
