"""Extracción del título de un README codificado en base64.

Orden de búsqueda:
1) Encabezado markdown de nivel 1 (`# Título`) al inicio de línea.
2) Fallback: etiqueta HTML `<h1 ...>Título</h1>` (case-insensitive).

Nunca lanza: cualquier fallo de decodificación devuelve `None`.
"""

from __future__ import annotations

import base64
import binascii
import logging
import re

logger = logging.getLogger(__name__)

_MARKDOWN_H1 = re.compile(r"^#[ \t]+(\S.*)$", re.MULTILINE)
_HTML_H1 = re.compile(r"<h1[^>]*>([^<]+)</h1>", re.IGNORECASE)
_WHITESPACE = re.compile(r"\s+")


def decode_content(encoded: str) -> str | None:
    """Decodifica el campo `content` de la API (base64 con saltos de línea)."""

    # La API parte el base64 en líneas de 60 caracteres.
    compact = _WHITESPACE.sub("", encoded)
    # Igual que atob: el padding final es opcional.
    compact += "=" * (-len(compact) % 4)
    try:
        raw = base64.b64decode(compact, validate=True)
    except (binascii.Error, ValueError):
        return None
    return raw.decode("utf-8", errors="replace")


def find_title(text: str) -> str | None:
    """Primer encabezado de nivel 1 en texto plano, ya recortado."""

    for pattern in (_MARKDOWN_H1, _HTML_H1):
        match = pattern.search(text)
        if match:
            # Solo cuenta el primer match; un título vacío es "sin título".
            return match.group(1).strip() or None
    return None


def extract_readme_title(encoded_content: str | None) -> str | None:
    if not isinstance(encoded_content, str) or not encoded_content:
        return None

    text = decode_content(encoded_content)
    if text is None:
        logger.info("README content is not valid base64")
        return None

    title = find_title(text)
    if title is None:
        logger.debug("No H1 title found in README")
    else:
        logger.debug("Found README title: %s", title)
    return title
