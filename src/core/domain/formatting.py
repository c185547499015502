"""Formato de contadores para mostrar en tarjetas (p.ej. 1234 -> 1.2k)."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

_ONE_DECIMAL = Decimal("0.1")


def _scaled(value: int, divisor: int) -> str:
    return str((Decimal(value) / Decimal(divisor)).quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP))


def format_number(value: int) -> str:
    """Formatea un contador con sufijo `k`/`M` y un decimal.

    No se recorta el `.0` final: `2000 -> "2.0k"`.
    """

    if value >= 1_000_000:
        return _scaled(value, 1_000_000) + "M"
    if value >= 1_000:
        return _scaled(value, 1_000) + "k"
    return str(int(value))
