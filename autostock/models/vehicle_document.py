"""Modelo Documento de vehiculo / Vehicle document model."""

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from autostock.database import Base
from autostock.models._helpers import new_id, utc_now_iso


class VehicleDocument(Base):
    __tablename__ = "vehicle_documents"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    vehicle_id: Mapped[str] = mapped_column(ForeignKey("vehicles.id"), nullable=False, index=True)
    tipo: Mapped[str] = mapped_column(String(100), nullable=False)  # Titulo, Cedula...
    file_path: Mapped[str] = mapped_column(String(300), nullable=False)  # <vehicle_id>/<ts>-<nombre>
    uploaded_at: Mapped[str] = mapped_column(String(32), default=utc_now_iso)

    def __repr__(self) -> str:
        return f"<VehicleDocument {self.tipo} {self.file_path}>"
