"""Rutas Documentos / Document API routes."""

from fastapi import APIRouter, Depends

from autostock.api.deps import get_document_workflow
from autostock.schemas.workflow import WorkflowOutcome
from autostock.services.document_workflow import DocumentWorkflow

router = APIRouter()


@router.delete("/{document_id}", response_model=WorkflowOutcome)
async def delete_document(
    document_id: str,
    documents: DocumentWorkflow = Depends(get_document_workflow),
):
    """Eliminar documento / Delete document.

    Si el archivo no se pudo borrar del storage el documento igual se elimina
    y el aviso vuelve en `warnings`.
    """
    return WorkflowOutcome.from_result(await documents.delete(document_id))
