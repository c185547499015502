"""Card rendering: turns fetched repository data into card mutations.

The renderer only decides *what* to show (title, description, ordered stat
items). *How* it is painted is up to the `ProjectCard` implementation.
"""

from __future__ import annotations

import re

from core.domain.formatting import format_number
from core.domain.models import RepositoryData, StatItem
from core.interfaces.card import ProjectCard

UNKNOWN_TITLE = "Unknown Project"
MISSING_DESCRIPTION = "No description available."

_WORD_START = re.compile(r"\b\w", re.ASCII)


def title_from_name(name: str) -> str:
    """`my-cool-repo` -> `My Cool Repo` (only first letters are touched)."""

    return _WORD_START.sub(lambda m: m.group(0).upper(), name.replace("-", " "))


def card_title(data: RepositoryData) -> str:
    if data.readme_title:
        return data.readme_title
    if data.name:
        return title_from_name(data.name)
    return UNKNOWN_TITLE


def card_description(data: RepositoryData) -> str:
    if data.description and data.description.strip():
        return data.description
    return MISSING_DESCRIPTION


def build_stat_items(data: RepositoryData) -> list[StatItem]:
    """Stars, forks, language, in that order, skipping absent fields."""

    items: list[StatItem] = []
    if data.stargazers_count is not None:
        items.append(StatItem(kind="stars", text=format_number(data.stargazers_count)))
    if data.forks_count is not None:
        items.append(StatItem(kind="forks", text=format_number(data.forks_count)))
    if data.language:
        items.append(StatItem(kind="language", text=data.language))
    return items


def render_card(card: ProjectCard, data: RepositoryData) -> None:
    card.set_title(card_title(data))
    card.set_description(card_description(data))
    card.replace_stats(build_stat_items(data))
