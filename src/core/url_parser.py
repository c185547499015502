"""Extracción de (owner, repo) desde URLs del hosting."""

from __future__ import annotations

import re

from core.domain.models import RepositoryIdentifier

DEFAULT_HOST = "github.com"


def _pattern_for(host: str) -> re.Pattern[str]:
    return re.compile(re.escape(host) + r"/([^/]+)/([^/]+)")


_DEFAULT_PATTERN = _pattern_for(DEFAULT_HOST)


def parse_repository_url(url: str, host: str = DEFAULT_HOST) -> RepositoryIdentifier | None:
    """Devuelve el primer `<host>/<owner>/<name>` encontrado en `url`.

    Sin normalización: ni se quita `.git` ni se cambia el case. Los segmentos
    posteriores (`/tree/main`, etc.) se ignoran. `None` si no hay match.
    """

    if not url:
        return None
    pattern = _DEFAULT_PATTERN if host == DEFAULT_HOST else _pattern_for(host)
    match = pattern.search(url)
    if not match:
        return None
    return RepositoryIdentifier(owner=match.group(1), name=match.group(2))
