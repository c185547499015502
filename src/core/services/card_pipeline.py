"""Card augmentation orchestration.

Drives the per-card sequence: parse link -> show loading -> fetch -> hide
loading -> render. Cards are processed one at a time, in discovery order, and
a failure on one card never leaks into the next. Failures are silent for the
page (the card keeps its original markup) and visible only in the logs.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

from core.domain.models import FetchResult, RepositoryIdentifier
from core.interfaces.card import ProjectCard
from core.interfaces.fetcher import RepositoryFetcher
from core.services.card_renderer import render_card
from core.url_parser import DEFAULT_HOST, parse_repository_url

logger = logging.getLogger(__name__)


@dataclass
class CardOutcome:
    """What happened to one card (used by the CLI summary and tests)."""

    identifier: RepositoryIdentifier
    result: FetchResult
    rendered: bool = False


async def process_card(
    card: ProjectCard,
    fetcher: RepositoryFetcher,
    *,
    host_marker: str = DEFAULT_HOST,
) -> CardOutcome | None:
    """Augment a single card. Returns None when the card has no repo link."""

    url = card.repository_url()
    if not url or host_marker not in url:
        return None
    identifier = parse_repository_url(url, host=host_marker)
    if identifier is None:
        return None

    try:
        card.show_loading()
        result = await fetcher.fetch(identifier.owner, identifier.name)
    except Exception as exc:
        logger.error("Error processing repository stats for %s", identifier.cache_key, exc_info=True)
        result = FetchResult.failed(f"unexpected error: {exc}")
    finally:
        try:
            card.hide_loading()
        except Exception:
            logger.error("Error removing loading state for %s", identifier.cache_key, exc_info=True)

    outcome = CardOutcome(identifier=identifier, result=result)
    if result.ok and result.data is not None:
        try:
            render_card(card, result.data)
            outcome.rendered = True
        except Exception:
            logger.error("Error rendering card for %s", identifier.cache_key, exc_info=True)
    return outcome


async def augment_cards(
    cards: Iterable[ProjectCard],
    fetcher: RepositoryFetcher,
    *,
    host_marker: str = DEFAULT_HOST,
) -> list[CardOutcome]:
    outcomes: list[CardOutcome] = []
    for card in cards:
        try:
            outcome = await process_card(card, fetcher, host_marker=host_marker)
        except Exception:
            logger.error("Error processing project card", exc_info=True)
            continue
        if outcome is not None:
            outcomes.append(outcome)
    logger.info(
        "Augmented %d/%d repository cards",
        sum(1 for o in outcomes if o.rendered),
        len(outcomes),
    )
    return outcomes
