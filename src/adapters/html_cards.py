"""Tarjetas de proyecto sobre HTML (BeautifulSoup).

Estructura esperada de cada tarjeta:
- `.project-card`: contenedor.
- `.project-link[href*="github.com"]`: enlace al repo.
- `.project-title .project-link`: texto del título.
- `.project-description`: descripción.
- `.project-meta`: zona donde van el loading y las stats.

Si falta algún sub-elemento, la operación correspondiente es un no-op.
"""

from __future__ import annotations

from typing import Sequence

from bs4 import BeautifulSoup, Tag

from core.domain.models import StatItem
from core.interfaces.fetcher import RepositoryFetcher
from core.services.card_pipeline import CardOutcome, augment_cards
from core.url_parser import DEFAULT_HOST

CARD_SELECTOR = ".project-card"
TITLE_SELECTOR = ".project-title .project-link"
DESCRIPTION_SELECTOR = ".project-description"
META_SELECTOR = ".project-meta"

LOADING_TEXT = "Loading stats..."

# Octicons (16px) para estrellas y forks.
_ICON_PATHS = {
    "stars": (
        "M8 .25a.75.75 0 01.673.418l1.882 3.815 4.21.612a.75.75 0 01.416 1.279l-3.046 2.97"
        ".719 4.192a.75.75 0 01-1.088.791L8 12.347l-3.766 1.98a.75.75 0 01-1.088-.79l.72-4.194"
        "L.818 6.374a.75.75 0 01.416-1.28l4.21-.611L7.327.668A.75.75 0 018 .25z"
    ),
    "forks": (
        "M5 3.25a.75.75 0 11-1.5 0 .75.75 0 011.5 0zm0 2.122a2.25 2.25 0 10-1.5 0v.878A2.25 2.25 0 0"
        "05.75 8.5h1.5v2.128a2.25 2.25 0 101.5 0V8.5h1.5a2.25 2.25 0 002.25-2.25v-.878a2.25 2.25 0 1"
        "0-1.5 0v.878a.75.75 0 01-.75.75h-4.5A.75.75 0 015 6.25v-.878zm3.75 7.378a.75.75 0 11-1.5 0 "
        ".75.75 0 011.5 0zm3-8.75a.75.75 0 100-1.5.75.75 0 000 1.5z"
    ),
}


class SoupProjectCard:
    """Implementa `core.interfaces.card.ProjectCard` sobre un `Tag` de bs4."""

    def __init__(self, tag: Tag, soup: BeautifulSoup, *, host_marker: str = DEFAULT_HOST) -> None:
        self._tag = tag
        self._soup = soup
        self._host_marker = host_marker
        self._loading: Tag | None = None

    def repository_url(self) -> str | None:
        link = self._tag.select_one(f'.project-link[href*="{self._host_marker}"]')
        if link is None:
            return None
        href = link.get("href")
        return str(href) if href else None

    def set_title(self, text: str) -> None:
        title = self._tag.select_one(TITLE_SELECTOR)
        if title is not None:
            title.string = text

    def set_description(self, text: str) -> None:
        description = self._tag.select_one(DESCRIPTION_SELECTOR)
        if description is not None:
            description.string = text

    def show_loading(self) -> None:
        meta = self._tag.select_one(META_SELECTOR)
        if meta is None or self._loading is not None:
            return
        loading = self._soup.new_tag("div", attrs={"class": ["project-stats", "project-stats--loading"]})
        item = self._soup.new_tag("span", attrs={"class": "stat-item"})
        item.append(self._soup.new_tag("span", attrs={"class": "loading-dot"}))
        item.append(LOADING_TEXT)
        loading.append(item)
        meta.append(loading)
        self._loading = loading

    def hide_loading(self) -> None:
        if self._loading is None:
            return
        self._loading.decompose()
        self._loading = None

    def replace_stats(self, items: Sequence[StatItem]) -> None:
        meta = self._tag.select_one(META_SELECTOR)
        if meta is None:
            return
        meta.clear()
        stats = self._soup.new_tag("div", attrs={"class": "project-stats"})
        for item in items:
            stats.append(self._stat_tag(item))
        meta.append(stats)

    def _stat_tag(self, item: StatItem) -> Tag:
        if item.kind == "language":
            span = self._soup.new_tag("span", attrs={"class": ["stat-item", "stat-language"]})
            span.append(self._soup.new_tag("span", attrs={"class": "language-dot"}))
            span.append(item.text)
            return span

        span = self._soup.new_tag("span", attrs={"class": "stat-item"})
        svg = self._soup.new_tag(
            "svg",
            attrs={"class": "stat-icon", "viewBox": "0 0 16 16", "fill": "currentColor"},
        )
        svg.append(self._soup.new_tag("path", attrs={"d": _ICON_PATHS[item.kind]}))
        span.append(svg)
        span.append(item.text)
        return span


def discover_cards(soup: BeautifulSoup, *, host_marker: str = DEFAULT_HOST) -> list[SoupProjectCard]:
    """Tarjetas en orden de documento."""

    return [SoupProjectCard(tag, soup, host_marker=host_marker) for tag in soup.select(CARD_SELECTOR)]


async def augment_html(
    html: str,
    fetcher: RepositoryFetcher,
    *,
    host_marker: str = DEFAULT_HOST,
) -> tuple[str, list[CardOutcome]]:
    """Parsea una página, aumenta sus tarjetas y devuelve el HTML resultante."""

    soup = BeautifulSoup(html, "html.parser")
    cards = discover_cards(soup, host_marker=host_marker)
    outcomes = await augment_cards(cards, fetcher, host_marker=host_marker)
    return str(soup), outcomes
