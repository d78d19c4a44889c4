"""
Ciclo de vida de documentos / Document lifecycle workflow.

Subida (archivo + fila) y borrado (archivo + fila + log). No hay
compensacion: un archivo subido cuya fila no se pudo insertar queda
huerfano en el storage.
"""

import logging
import time

from autostock.schemas.document import DocumentRead
from autostock.services.history import append_vehicle_log
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
from autostock.utils.filenames import sanitize_filename

logger = logging.getLogger(__name__)

VEHICLES = "vehicles"
DOCUMENTS = "vehicle_documents"


class DocumentValidationError(ValueError):
    """Formulario de subida incompleto / Incomplete upload form."""


def build_file_path(vehicle_id: str, filename: str | None, timestamp_ms: int | None = None) -> str:
    """Clave del archivo: `<vehicle_id>/<timestamp ms>-<nombre>` / Blob key."""
    if timestamp_ms is None:
        timestamp_ms = time.time_ns() // 1_000_000
    return f"{vehicle_id}/{timestamp_ms}-{sanitize_filename(filename)}"


class DocumentWorkflow:
    """Operaciones sobre documentos / Document operations."""

    def __init__(self, client: StoreClient):
        self.client = client
        self.records = client.records

    def to_read(self, row: dict) -> DocumentRead:
        return DocumentRead(
            **row,
            url=self.client.public_url(row["file_path"]),
            is_pdf=row["file_path"].lower().endswith(".pdf"),
        )

    async def list_documents(self, vehicle_id: str) -> list[DocumentRead]:
        try:
            rows = await self.records.query(DOCUMENTS, {"vehicle_id": vehicle_id}, order_by="-uploaded_at")
        except StoreError as exc:
            raise ReadFailure("list_documents", "query", "Error cargando documentos", exc) from exc
        return [self.to_read(r) for r in rows]

    async def upload(
        self,
        vehicle_id: str,
        tipo: str,
        filename: str | None,
        data: bytes,
        timestamp_ms: int | None = None,
    ) -> DocumentRead:
        """Subir un documento / Upload a document.

        1. escribir el archivo (si falla no se crea fila)
        2. insertar la fila (si falla el archivo queda huerfano)
        """
        tipo = (tipo or "").strip()
        if not tipo:
            raise DocumentValidationError("El tipo de documento es obligatorio")
        if not data:
            raise DocumentValidationError("Hay que seleccionar un archivo")

        try:
            vehicle = await self.records.get_one(VEHICLES, vehicle_id)
        except StoreError as exc:
            raise ReadFailure("upload_document", "get_vehicle", "Error cargando auto", exc) from exc
        if vehicle is None:
            raise RecordNotFound(VEHICLES, vehicle_id)

        file_path = build_file_path(vehicle_id, filename, timestamp_ms)
        bucket = self.client.bucket

        async def insert_row(_):
            try:
                return await self.records.insert(DOCUMENTS, {
                    "vehicle_id": vehicle_id,
                    "tipo": tipo,
                    "file_path": file_path,
                })
            except StoreError:
                logger.warning("Document row insert failed, blob left orphaned: %s/%s", bucket, file_path)
                raise

        result = await run_workflow("upload_document", [
            Step("upload_blob", lambda _: self.client.blobs.upload(bucket, file_path, data),
                 message="Error subiendo documento"),
            Step("insert_row", insert_row, message="Error subiendo documento"),
        ])
        return self.to_read(result.outputs["insert_row"])

    async def delete(self, document_id: str) -> WorkflowResult:
        """Eliminar un documento / Delete a document.

        1. borrar el archivo (se informa pero sigue)
        2. borrar la fila (corta si falla)
        3. log `delete_document` de mejor esfuerzo
        """
        try:
            doc = await self.records.get_one(DOCUMENTS, document_id)
        except StoreError as exc:
            raise ReadFailure("delete_document", "get_document", "Error cargando documento", exc) from exc
        if doc is None:
            raise RecordNotFound(DOCUMENTS, document_id)

        async def append_log(_):
            return append_vehicle_log(
                self.client,
                doc["vehicle_id"],
                "delete_document",
                f"Documento eliminado: {doc['tipo']}",
                {"file_path": doc["file_path"]},
            )

        return await run_workflow("delete_document", [
            Step("remove_blob", lambda _: self.client.blobs.remove(self.client.bucket, [doc["file_path"]]),
                 policy=StepPolicy.CONTINUE, message="Error borrando archivo del storage"),
            Step("delete_row", lambda _: self.records.delete(DOCUMENTS, document_id),
                 message="Error borrando registro del documento"),
            Step("append_log", append_log, policy=StepPolicy.CONTINUE),
        ])
