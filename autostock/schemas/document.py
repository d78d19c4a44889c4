"""Esquemas Documento / Document schemas."""

from pydantic import BaseModel


class DocumentRead(BaseModel):
    id: str
    vehicle_id: str
    tipo: str
    file_path: str
    uploaded_at: str | None = None
    # URL publica y tipo de vista previa / Public URL and preview kind
    url: str
    is_pdf: bool
