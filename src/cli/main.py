"""CLI entrypoint (Typer).

Commands:
- `render`: augment the project cards of an HTML page with repository stats.
- `stats`: show the card view of a single repository.
- `doctor`: environment diagnostics.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

import typer
from rich.console import Console

from adapters.github_repos import RepositoryStatsFetcher
from adapters.html_cards import augment_html
from adapters.http_client import build_async_client
from cli import doctor
from cli.ui_components import build_outcomes_table, build_repository_panel, configure_logging
from core.config import AppSettings
from core.domain.models import FetchResult, RepositoryData, RepositoryIdentifier
from core.services.card_pipeline import CardOutcome
from core.ttl_cache import TTLCache
from core.url_parser import parse_repository_url

app = typer.Typer(no_args_is_help=True, help="Repository stats for project cards.")
app.add_typer(doctor.app, name="doctor")

# stdout queda libre para el HTML generado.
_console = Console(stderr=True)

logger = logging.getLogger(__name__)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    settings = AppSettings()
    configure_logging(logging.DEBUG if verbose else settings.log_level.upper(), _console)


def parse_repository_ref(value: str, host: str) -> RepositoryIdentifier | None:
    """Accepts a hosting URL or a bare `owner/name`."""

    value = value.strip()
    if host not in value:
        value = f"{host}/{value}"
    return parse_repository_url(value, host=host)


async def _render(html: str, settings: AppSettings) -> tuple[str, list[CardOutcome]]:
    async with build_async_client(settings) as client:
        fetcher = RepositoryStatsFetcher(
            client=client,
            cache=TTLCache[RepositoryData](settings.cache_ttl_seconds),
            api_base=settings.api_base,
        )
        return await augment_html(html, fetcher, host_marker=settings.host_marker)


async def _stats(identifier: RepositoryIdentifier, settings: AppSettings) -> FetchResult:
    async with build_async_client(settings) as client:
        fetcher = RepositoryStatsFetcher(
            client=client,
            cache=TTLCache[RepositoryData](settings.cache_ttl_seconds),
            api_base=settings.api_base,
        )
        return await fetcher.fetch(identifier.owner, identifier.name)


@app.command()
def render(
    input_path: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True, help="HTML page."),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write the result here instead of stdout."),
) -> None:
    """Augment every project card of INPUT_PATH with repository stats."""

    settings = AppSettings()
    html = input_path.read_text(encoding="utf-8")
    rendered, outcomes = asyncio.run(_render(html, settings))

    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(rendered, encoding="utf-8")
        logger.info("Wrote %s", output)
    else:
        typer.echo(rendered)

    if outcomes:
        _console.print(build_outcomes_table(outcomes))


@app.command()
def stats(
    repo: str = typer.Argument(..., help="Repository URL or owner/name."),
) -> None:
    """Fetch one repository and print its card view."""

    settings = AppSettings()
    identifier = parse_repository_ref(repo, settings.host_marker)
    if identifier is None:
        _console.print(f"[red]Not a repository reference:[/red] {repo}")
        raise typer.Exit(code=2)

    result = asyncio.run(_stats(identifier, settings))
    _console.print(build_repository_panel(identifier, result))
    if not result.ok:
        raise typer.Exit(code=1)


def run() -> None:
    app()


if __name__ == "__main__":
    run()
