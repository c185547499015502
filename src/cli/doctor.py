"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import build_async_client
from core.config import AppSettings

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


def rate_limit_url(api_base: str) -> str:
    """`.../repos` -> `.../rate_limit` (api.github.com o GitHub Enterprise)."""

    base = api_base.rstrip("/")
    if base.endswith("/repos"):
        base = base[: -len("/repos")]
    return f"{base}/rate_limit"


async def _check_api(settings: AppSettings) -> tuple[bool, str]:
    url = rate_limit_url(settings.api_base)
    try:
        async with build_async_client(settings) as client:
            response = await client.get(url)
    except Exception as exc:
        return False, str(exc)

    if not response.is_success:
        return False, f"HTTP {response.status_code}"
    try:
        core = response.json()["resources"]["core"]
        return True, f"HTTP {response.status_code}, {core['remaining']}/{core['limit']} requests left"
    except (ValueError, KeyError, TypeError):
        return True, f"HTTP {response.status_code}"


@app.command()
def run() -> None:
    """Show effective configuration and check API connectivity."""

    settings = AppSettings()

    table = Table(title="repo-cards Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    table.add_row("API base", "OK", settings.api_base)
    table.add_row("Host marker", "OK", settings.host_marker)
    table.add_row("Cache TTL", "OK", f"{settings.cache_ttl_seconds:g}s")
    table.add_row("HTTP timeout", "OK", f"{settings.http_timeout_seconds:g}s")

    ok_api, detail_api = asyncio.run(_check_api(settings))
    table.add_row("API connectivity", "OK" if ok_api else "FAIL", f"{rate_limit_url(settings.api_base)}: {detail_api}")

    _console.print(table)

    if not ok_api:
        _console.print(
            "\n[yellow]Note:[/yellow] Unauthenticated requests share a small hourly quota; "
            "HTTP 403 means it is exhausted."
        )
