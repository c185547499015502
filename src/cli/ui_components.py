"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import FetchResult, FetchStatus, RepositoryIdentifier
from core.services.card_pipeline import CardOutcome
from core.services.card_renderer import build_stat_items, card_description, card_title

_STATUS_STYLES = {
    FetchStatus.OK: "green",
    FetchStatus.RATE_LIMITED: "yellow",
    FetchStatus.FAILED: "red",
}

_STAT_LABELS = {"stars": "★", "forks": "⑂", "language": "●"}


def configure_logging(level: str | int, console: Console) -> None:
    """Instala un `RichHandler` en el logger raíz."""

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True, show_path=False)],
        force=True,
    )
    # httpx loguea cada request a INFO.
    logging.getLogger("httpx").setLevel(logging.WARNING)


def build_outcomes_table(outcomes: list[CardOutcome]) -> Table:
    table = Table(title="Repository Cards")
    table.add_column("Repository", style="cyan", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Cached", style="dim")
    table.add_column("Detail", style="red")
    for outcome in outcomes:
        status = outcome.result.status
        table.add_row(
            outcome.identifier.cache_key,
            Text(status.value, style=_STATUS_STYLES[status]),
            "yes" if outcome.result.from_cache else "no",
            outcome.result.detail or "",
        )
    return table


def build_repository_panel(identifier: RepositoryIdentifier, result: FetchResult) -> Panel:
    """Panel con la vista de tarjeta de un repo (o el motivo del fallo)."""

    if not result.ok or result.data is None:
        style = _STATUS_STYLES[result.status]
        body = Text(f"{result.status.value}: {result.detail or 'no data'}", style=style)
        return Panel(body, title=identifier.cache_key, border_style=style)

    data = result.data
    body = Text()
    body.append(card_title(data) + "\n", style="bold")
    body.append(card_description(data) + "\n\n")
    stats = [f"{_STAT_LABELS[item.kind]} {item.text}" for item in build_stat_items(data)]
    body.append("   ".join(stats), style="cyan")
    if result.from_cache:
        body.append("\n(cached)", style="dim")
    return Panel(body, title=identifier.cache_key, border_style="green")
