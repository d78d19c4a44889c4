"""Modelo Historial de vehiculo / Vehicle log model.

Registro de solo-anexado; la aplicacion nunca lo modifica ni lo borra.
"""

from sqlalchemy import JSON, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from autostock.database import Base
from autostock.models._helpers import new_id, utc_now_iso


class VehicleLog(Base):
    __tablename__ = "vehicle_logs"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    # Sin FK: el historial sobrevive al borrado definitivo / no FK, survives hard delete
    vehicle_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    action: Mapped[str] = mapped_column(String(40), nullable=False)  # update, soft_delete, restore...
    description: Mapped[str | None] = mapped_column(Text)
    diff: Mapped[dict | None] = mapped_column(JSON)
    created_at: Mapped[str] = mapped_column(String(32), default=utc_now_iso)

    def __repr__(self) -> str:
        return f"<VehicleLog {self.action} {self.vehicle_id}>"
