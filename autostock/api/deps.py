"""
Dependencias de las rutas / Route dependencies.
Inyectadas en las rutas via Depends().
"""

from fastapi import Depends, Request

from autostock.services.document_workflow import DocumentWorkflow
from autostock.services.quote_service import QuoteService
from autostock.services.vehicle_workflow import VehicleWorkflow
from autostock.store.client import StoreClient


def get_client(request: Request) -> StoreClient:
    """Cliente creado en el arranque / Client built at startup."""
    return request.app.state.client


def get_vehicle_workflow(client: StoreClient = Depends(get_client)) -> VehicleWorkflow:
    return VehicleWorkflow(client)


def get_document_workflow(client: StoreClient = Depends(get_client)) -> DocumentWorkflow:
    return DocumentWorkflow(client)


def get_quote_service(client: StoreClient = Depends(get_client)) -> QuoteService:
    return QuoteService(client)
