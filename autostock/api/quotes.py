"""Rutas Presupuestos / Quote API routes."""

from fastapi import APIRouter, Depends

from autostock.api.deps import get_quote_service
from autostock.schemas.quote import QuoteCreate, QuoteRead
from autostock.services.quote_filter import QuoteFilter, QuoteStatusFilter
from autostock.services.quote_service import QuoteService

router = APIRouter()


@router.get("/", response_model=list[QuoteRead])
async def list_quotes(
    status: QuoteStatusFilter = QuoteStatusFilter.ALL,
    q: str | None = None,
    vehicle_id: str | None = None,
    service: QuoteService = Depends(get_quote_service),
):
    """Listar presupuestos / List quotes."""
    quotes = await service.load_quotes(vehicle_id)
    return QuoteFilter.apply_filters(quotes, status, q)


@router.post("/", response_model=QuoteRead, status_code=201)
async def create_quote(
    data: QuoteCreate,
    service: QuoteService = Depends(get_quote_service),
):
    """Crear presupuesto / Create quote."""
    return await service.create(data)
