"""
Ciclo de vida del vehiculo / Vehicle lifecycle workflow.

Alta, modificacion, papelera, restauracion, borrado definitivo y
"vendido hoy", cada uno como una secuencia ordenada de llamadas al
almacenamiento. Los logs de historial son de mejor esfuerzo.
"""

import asyncio
import logging
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any

from autostock.models.vehicle import VehicleStatus
from autostock.schemas.document import DocumentRead
from autostock.schemas.log import VehicleLogRead
from autostock.schemas.vehicle import VehicleCreate, VehicleRead, VehicleUpdate
from autostock.services.document_workflow import DocumentWorkflow
from autostock.services.history import LOGS, append_vehicle_log
from autostock.services.workflow import (
    ReadFailure,
    RecordNotFound,
    Step,
    StepPolicy,
    WorkflowResult,
    run_workflow,
)
from autostock.store.client import StoreClient
from autostock.store.records import StoreError

logger = logging.getLogger(__name__)

VEHICLES = "vehicles"
DOCUMENTS = "vehicle_documents"


@dataclass
class VehicleDetail:
    vehicle: VehicleRead
    documents: list[DocumentRead]
    logs: list[VehicleLogRead]


class VehicleWorkflow:
    """Operaciones sobre autos / Vehicle operations."""

    def __init__(self, client: StoreClient):
        self.client = client
        self.records = client.records

    # --- Lecturas / Reads ---

    async def load_vehicles(self) -> list[VehicleRead]:
        """Recarga completa de la coleccion / Full collection reload."""
        try:
            rows = await self.records.query(VEHICLES, order_by="-fecha_ingreso")
        except StoreError as exc:
            logger.error("Loading vehicles failed: %s", exc)
            raise ReadFailure("load_vehicles", "query", "Error cargando autos", exc) from exc
        return [VehicleRead.model_validate(r) for r in rows]

    async def get(self, vehicle_id: str) -> VehicleRead:
        try:
            row = await self.records.get_one(VEHICLES, vehicle_id)
        except StoreError as exc:
            logger.error("Loading vehicle %s failed: %s", vehicle_id, exc)
            raise ReadFailure("get_vehicle", "get_one", "Error cargando auto", exc) from exc
        if row is None:
            raise RecordNotFound(VEHICLES, vehicle_id)
        return VehicleRead.model_validate(row)

    async def list_logs(self, vehicle_id: str) -> list[VehicleLogRead]:
        try:
            rows = await self.records.query(LOGS, {"vehicle_id": vehicle_id}, order_by="-created_at")
        except StoreError as exc:
            raise ReadFailure("list_logs", "query", "Error cargando historial", exc) from exc
        return [VehicleLogRead.model_validate(r) for r in rows]

    async def load_detail(self, vehicle_id: str) -> VehicleDetail:
        """Auto, documentos e historial en paralelo / Vehicle, documents and logs concurrently.

        Solo el fallo al leer el auto se informa; documentos e historial
        quedan vacios y se registran en el log.
        """
        documents = DocumentWorkflow(self.client)
        vehicle, docs, logs = await asyncio.gather(
            self.get(vehicle_id),
            documents.list_documents(vehicle_id),
            self.list_logs(vehicle_id),
            return_exceptions=True,
        )
        if isinstance(vehicle, BaseException):
            raise vehicle
        if isinstance(docs, ReadFailure):
            logger.error("Loading documents for %s failed: %s", vehicle_id, docs.cause)
            docs = []
        elif isinstance(docs, BaseException):
            raise docs
        if isinstance(logs, ReadFailure):
            logger.error("[vehicle_logs] Loading logs for %s failed: %s", vehicle_id, logs.cause)
            logs = []
        elif isinstance(logs, BaseException):
            raise logs
        return VehicleDetail(vehicle=vehicle, documents=docs, logs=logs)

    # --- Mutaciones / Mutations ---

    async def _update_row(self, vehicle_id: str, fields: dict) -> VehicleRead:
        row = await self.records.update(VEHICLES, vehicle_id, fields)
        if row is None:
            raise RecordNotFound(VEHICLES, vehicle_id)
        return VehicleRead.model_validate(row)

    async def _log_step(self, vehicle_id: str, action: str, description: str, diff: Any = None):
        return append_vehicle_log(self.client, vehicle_id, action, description, diff)

    async def create(self, data: VehicleCreate) -> VehicleRead:
        """Alta de auto: un unico insert / Create: a single atomic insert."""
        fields = data.model_dump(mode="json")
        result = await run_workflow("create_vehicle", [
            Step("insert_vehicle", lambda _: self.records.insert(VEHICLES, fields),
                 message="Error guardando auto"),
        ])
        return VehicleRead.model_validate(result.outputs["insert_vehicle"])

    async def update(self, vehicle_id: str, data: VehicleUpdate) -> VehicleRead:
        """Reemplazo de los campos editables + log `update` / Field replace + `update` log.

        deleted_at nunca forma parte del payload, asi que no se toca.
        """
        payload = data.payload()
        result = await run_workflow("update_vehicle", [
            Step("update_vehicle", lambda _: self._update_row(vehicle_id, payload),
                 message="Error actualizando auto"),
            Step("append_log", lambda _: self._log_step(
                vehicle_id, "update", "Datos del vehículo actualizados", payload,
            ), policy=StepPolicy.CONTINUE),
        ])
        return result.outputs["update_vehicle"]

    async def mark_sold_today(self, vehicle_id: str, today: date | None = None) -> VehicleRead:
        """Atajo: vendido con egreso hoy / Shortcut: sold, exit date today."""
        fields = {
            "estado": VehicleStatus.VENDIDO.value,
            "fecha_egreso": (today or date.today()).isoformat(),
        }
        result = await run_workflow("mark_sold_today", [
            Step("update_vehicle", lambda _: self._update_row(vehicle_id, fields),
                 message="Error marcando como vendido"),
        ])
        return result.outputs["update_vehicle"]

    async def soft_delete(self, vehicle_id: str, now: datetime | None = None) -> VehicleRead:
        """Enviar a la papelera / Move to trash."""
        deleted_at = (now or datetime.now(timezone.utc)).isoformat(timespec="milliseconds")
        result = await run_workflow("soft_delete_vehicle", [
            Step("update_vehicle", lambda _: self._update_row(vehicle_id, {"deleted_at": deleted_at}),
                 message="Error enviando el auto a la papelera"),
            Step("append_log", lambda _: self._log_step(
                vehicle_id, "soft_delete", "Vehículo enviado a la papelera",
            ), policy=StepPolicy.CONTINUE),
        ])
        return result.outputs["update_vehicle"]

    async def restore(self, vehicle_id: str) -> VehicleRead:
        """Restaurar desde la papelera / Restore from trash.

        El estado previo se conserva porque la papelera nunca toca `estado`.
        """
        result = await run_workflow("restore_vehicle", [
            Step("update_vehicle", lambda _: self._update_row(vehicle_id, {"deleted_at": None}),
                 message="Error restaurando auto desde la papelera"),
            Step("append_log", lambda _: self._log_step(
                vehicle_id, "restore", "Vehículo restaurado desde la papelera",
            ), policy=StepPolicy.CONTINUE),
        ])
        return result.outputs["update_vehicle"]

    async def hard_delete(self, vehicle_id: str) -> WorkflowResult:
        """Borrado definitivo del auto y sus documentos / Permanent delete with documents.

        1. borrar archivos del storage (sigue aunque falle)
        2. borrar filas de documentos (corta si falla: el auto queda)
        3. borrar el auto (corta si falla; las filas del paso 2 ya no estan)
        """
        await self.get(vehicle_id)
        bucket = self.client.bucket

        async def load_documents(_):
            return await self.records.query(DOCUMENTS, {"vehicle_id": vehicle_id})

        async def remove_blobs(outputs):
            paths = [d["file_path"] for d in outputs["load_documents"]]
            if paths:
                await self.client.blobs.remove(bucket, paths)
            return paths

        return await run_workflow("hard_delete_vehicle", [
            Step("load_documents", load_documents,
                 message="Error cargando documentos del auto", raises=ReadFailure),
            Step("remove_blobs", remove_blobs, policy=StepPolicy.CONTINUE,
                 message="Error borrando archivos del storage"),
            Step("delete_document_rows",
                 lambda _: self.records.delete(DOCUMENTS, {"vehicle_id": vehicle_id}),
                 message="Error borrando documentos del auto"),
            Step("delete_vehicle", lambda _: self.records.delete(VEHICLES, vehicle_id),
                 message="Error eliminando auto"),
        ])
