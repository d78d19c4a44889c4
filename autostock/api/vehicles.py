"""Rutas Autos / Vehicle API routes."""

from datetime import datetime

from fastapi import APIRouter, Depends, File, Form, HTTPException, Request, UploadFile

from autostock.api.deps import get_document_workflow, get_vehicle_workflow
from autostock.config import settings
from autostock.rate_limit import limiter
from autostock.schemas.document import DocumentRead
from autostock.schemas.log import VehicleLogRead
from autostock.schemas.vehicle import (
    VehicleCreate,
    VehicleDetailRead,
    VehicleListResponse,
    VehicleMetrics,
    VehicleRead,
    VehicleUpdate,
)
from autostock.schemas.workflow import WorkflowOutcome
from autostock.services.document_workflow import DocumentWorkflow
from autostock.services.inventory_service import InventoryService, VehicleStatusFilter
from autostock.services.vehicle_workflow import VehicleWorkflow

router = APIRouter()


@router.get("/", response_model=VehicleListResponse)
async def list_vehicles(
    status: VehicleStatusFilter = VehicleStatusFilter.ALL,
    q: str | None = None,
    workflow: VehicleWorkflow = Depends(get_vehicle_workflow),
):
    """Listar autos con metricas / List vehicles with metrics."""
    vehicles = await workflow.load_vehicles()
    now = datetime.now()
    filtered = InventoryService.apply_filters(vehicles, status, q)
    return VehicleListResponse(
        items=InventoryService.list_items(filtered, now),
        metrics=InventoryService.metrics(vehicles, now),
    )


@router.get("/metrics", response_model=VehicleMetrics)
async def vehicle_metrics(workflow: VehicleWorkflow = Depends(get_vehicle_workflow)):
    """Metricas del inventario / Inventory metrics."""
    return InventoryService.metrics(await workflow.load_vehicles())


@router.post("/", response_model=VehicleRead, status_code=201)
async def create_vehicle(
    data: VehicleCreate,
    workflow: VehicleWorkflow = Depends(get_vehicle_workflow),
):
    """Crear un auto / Create vehicle."""
    return await workflow.create(data)


@router.get("/{vehicle_id}", response_model=VehicleDetailRead)
async def get_vehicle(
    vehicle_id: str,
    workflow: VehicleWorkflow = Depends(get_vehicle_workflow),
):
    """Ficha del auto con documentos e historial / Vehicle detail."""
    detail = await workflow.load_detail(vehicle_id)
    return VehicleDetailRead(
        vehicle=InventoryService.list_items([detail.vehicle])[0],
        documents=detail.documents,
        logs=detail.logs,
    )


@router.put("/{vehicle_id}", response_model=VehicleRead)
async def update_vehicle(
    vehicle_id: str,
    data: VehicleUpdate,
    workflow: VehicleWorkflow = Depends(get_vehicle_workflow),
):
    """Modificar un auto / Update vehicle."""
    return await workflow.update(vehicle_id, data)


@router.post("/{vehicle_id}/mark-sold", response_model=VehicleRead)
async def mark_vehicle_sold(
    vehicle_id: str,
    workflow: VehicleWorkflow = Depends(get_vehicle_workflow),
):
    """Marcar vendido hoy / Mark sold today."""
    return await workflow.mark_sold_today(vehicle_id)


@router.post("/{vehicle_id}/trash", response_model=VehicleRead)
async def trash_vehicle(
    vehicle_id: str,
    workflow: VehicleWorkflow = Depends(get_vehicle_workflow),
):
    """Enviar a papelera / Soft delete."""
    return await workflow.soft_delete(vehicle_id)


@router.post("/{vehicle_id}/restore", response_model=VehicleRead)
async def restore_vehicle(
    vehicle_id: str,
    workflow: VehicleWorkflow = Depends(get_vehicle_workflow),
):
    """Restaurar desde papelera / Restore from trash."""
    return await workflow.restore(vehicle_id)


@router.delete("/{vehicle_id}", response_model=WorkflowOutcome)
async def delete_vehicle(
    vehicle_id: str,
    workflow: VehicleWorkflow = Depends(get_vehicle_workflow),
):
    """Borrado definitivo con documentos / Hard delete with documents."""
    return WorkflowOutcome.from_result(await workflow.hard_delete(vehicle_id))


@router.get("/{vehicle_id}/documents", response_model=list[DocumentRead])
async def list_vehicle_documents(
    vehicle_id: str,
    documents: DocumentWorkflow = Depends(get_document_workflow),
):
    """Documentos del auto / Vehicle documents."""
    return await documents.list_documents(vehicle_id)


@router.post("/{vehicle_id}/documents", response_model=DocumentRead, status_code=201)
@limiter.limit(settings.RATE_LIMIT_UPLOAD)
async def upload_vehicle_document(
    request: Request,
    vehicle_id: str,
    tipo: str = Form(...),
    file: UploadFile = File(...),
    documents: DocumentWorkflow = Depends(get_document_workflow),
):
    """Subir documento (PDF) / Upload document."""
    max_bytes = settings.MAX_UPLOAD_MB * 1024 * 1024
    too_large = HTTPException(status_code=413, detail=f"Archivo demasiado grande (max {settings.MAX_UPLOAD_MB} MB)")
    if file.size is not None and file.size > max_bytes:
        raise too_large
    # Lee como maximo un byte de mas para detectar el exceso sin cargarlo todo
    content = await file.read(max_bytes + 1)
    if len(content) > max_bytes:
        raise too_large
    return await documents.upload(vehicle_id, tipo, file.filename, content)


@router.get("/{vehicle_id}/logs", response_model=list[VehicleLogRead])
async def list_vehicle_logs(
    vehicle_id: str,
    workflow: VehicleWorkflow = Depends(get_vehicle_workflow),
):
    """Historial de cambios / Change history."""
    return await workflow.list_logs(vehicle_id)
