"""
Filtros de presupuestos / Quote filtering.
"""

import enum
from collections.abc import Iterable

from autostock.models.quote import QuoteStatus
from autostock.schemas.quote import QuoteRead


class QuoteStatusFilter(str, enum.Enum):
    ALL = "all"
    ENVIADO = "enviado"
    ACEPTADO = "aceptado"
    PERDIDO = "perdido"


class QuoteFilter:
    """Filtro por estado y busqueda / Status filter and search."""

    @staticmethod
    def filter_by_status(quotes: Iterable[QuoteRead], status: QuoteStatusFilter | str) -> list[QuoteRead]:
        status = QuoteStatusFilter(status)
        if status is QuoteStatusFilter.ALL:
            return list(quotes)
        return [q for q in quotes if q.estado == QuoteStatus(status.value)]

    @staticmethod
    def search(quotes: Iterable[QuoteRead], term: str | None) -> list[QuoteRead]:
        """Busqueda por cliente, referencia o vendedor / Search by client, reference or seller."""
        if not term or not term.strip():
            return list(quotes)
        q = term.lower()
        return [
            item for item in quotes
            if q in item.cliente_nombre.lower()
            or q in (item.vehiculo_referencia or "").lower()
            or q in (item.vendedor or "").lower()
        ]

    @staticmethod
    def apply_filters(
        quotes: Iterable[QuoteRead],
        status: QuoteStatusFilter | str = QuoteStatusFilter.ALL,
        term: str | None = None,
    ) -> list[QuoteRead]:
        return QuoteFilter.search(QuoteFilter.filter_by_status(quotes, status), term)
