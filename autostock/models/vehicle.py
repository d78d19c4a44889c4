"""Modelo Vehiculo / Vehicle model.

Auto en inventario de la concesionaria, con su estado de venta y su marca
de papelera (deleted_at).
Dealership inventory item, with its sale state and trash marker.
"""

import enum

from sqlalchemy import Enum, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from autostock.database import Base
from autostock.models._helpers import new_id, utc_now_iso


class VehicleStatus(str, enum.Enum):
    """Estado del auto / Vehicle status."""
    EN_STOCK = "en_stock"
    VENDIDO = "vendido"
    RETIRADO = "retirado"


class Vehicle(Base):
    """Auto del inventario / Inventory vehicle."""
    __tablename__ = "vehicles"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)

    # --- Identificacion / Identification ---
    patente: Mapped[str | None] = mapped_column(String(20))
    marca: Mapped[str] = mapped_column(String(80), nullable=False)
    modelo: Mapped[str] = mapped_column(String(80), nullable=False)
    anio: Mapped[int | None] = mapped_column(Integer)
    precio_publicado: Mapped[float | None] = mapped_column(Numeric(14, 2, asdecimal=False))

    # --- Fechas / Dates ---
    fecha_ingreso: Mapped[str] = mapped_column(String(10), nullable=False)  # YYYY-MM-DD
    fecha_egreso: Mapped[str | None] = mapped_column(String(10))  # YYYY-MM-DD

    estado: Mapped[VehicleStatus] = mapped_column(
        Enum(VehicleStatus, values_callable=lambda e: [m.value for m in e]),
        default=VehicleStatus.EN_STOCK,
        nullable=False,
    )
    observaciones: Mapped[str | None] = mapped_column(Text)

    # Papelera / Trash (ISO 8601)
    deleted_at: Mapped[str | None] = mapped_column(String(32))

    created_at: Mapped[str] = mapped_column(String(32), default=utc_now_iso)
    updated_at: Mapped[str | None] = mapped_column(String(32), onupdate=utc_now_iso)

    def __repr__(self) -> str:
        return f"<Vehicle {self.marca} {self.modelo} ({self.patente or '-'})>"
