"""
Presupuestos / Quotes: lista y alta.

No hay modificacion ni baja de presupuestos.
"""

import logging

from autostock.schemas.quote import QuoteCreate, QuoteRead
from autostock.services.workflow import ReadFailure, Step, run_workflow
from autostock.store.client import StoreClient
from autostock.store.records import StoreError

logger = logging.getLogger(__name__)

QUOTES = "quotes"


class QuoteService:
    def __init__(self, client: StoreClient):
        self.records = client.records

    async def load_quotes(self, vehicle_id: str | None = None) -> list[QuoteRead]:
        """Recarga completa, mas nuevos primero / Full reload, newest first."""
        filters = {"vehicle_id": vehicle_id} if vehicle_id else None
        try:
            rows = await self.records.query(QUOTES, filters, order_by="-created_at")
        except StoreError as exc:
            logger.error("Loading quotes failed: %s", exc)
            raise ReadFailure("load_quotes", "query", "Error cargando presupuestos", exc) from exc
        return [QuoteRead.model_validate(r) for r in rows]

    async def create(self, data: QuoteCreate) -> QuoteRead:
        fields = data.model_dump(mode="json")
        result = await run_workflow("create_quote", [
            Step("insert_quote", lambda _: self.records.insert(QUOTES, fields),
                 message="Error guardando presupuesto"),
        ])
        return QuoteRead.model_validate(result.outputs["insert_quote"])
