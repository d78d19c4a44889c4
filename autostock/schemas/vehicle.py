"""Esquemas Vehiculo / Vehicle schemas."""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field, field_validator

from autostock.models.vehicle import VehicleStatus
from autostock.schemas._common import blank_to_none
from autostock.schemas.document import DocumentRead
from autostock.schemas.log import VehicleLogRead

# Campos editables enviados completos en cada actualizacion /
# Editable fields, resent in full on every update
EDITABLE_FIELDS = (
    "marca",
    "modelo",
    "patente",
    "anio",
    "precio_publicado",
    "fecha_ingreso",
    "fecha_egreso",
    "estado",
    "observaciones",
)


class VehicleBase(BaseModel):
    marca: str = Field(min_length=1, max_length=80)
    modelo: str = Field(min_length=1, max_length=80)
    patente: str | None = Field(default=None, max_length=20)
    anio: int | None = Field(default=None, ge=1900, le=2100)
    precio_publicado: float | None = Field(default=None, ge=0)
    fecha_ingreso: date = Field(default_factory=date.today)
    fecha_egreso: date | None = None
    estado: VehicleStatus = VehicleStatus.EN_STOCK
    observaciones: str | None = None

    @field_validator("marca", "modelo", mode="before")
    @classmethod
    def _strip_required(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator("patente", "observaciones", "fecha_egreso", mode="before")
    @classmethod
    def _blank_optional(cls, value):
        return blank_to_none(value)


class VehicleCreate(VehicleBase):
    pass


class VehicleUpdate(VehicleBase):
    """Reemplazo completo de los campos editables / Full editable-field replacement."""

    # Sin valores por defecto: el cliente reenvia la ficha completa
    fecha_ingreso: date
    estado: VehicleStatus

    def payload(self) -> dict:
        return self.model_dump(mode="json", include=set(EDITABLE_FIELDS))


class VehicleRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    marca: str
    modelo: str
    patente: str | None = None
    anio: int | None = None
    precio_publicado: float | None = None
    fecha_ingreso: date | None = None
    fecha_egreso: date | None = None
    estado: VehicleStatus
    observaciones: str | None = None
    deleted_at: str | None = None
    created_at: str | None = None
    updated_at: str | None = None


class VehicleListItem(VehicleRead):
    days_in_stock: int | None = None
    status_label: str
    in_trash: bool


class VehicleMetrics(BaseModel):
    in_stock_count: int
    sold_count: int
    # None = sin ventas para promediar / no sales to average
    average_days_to_sell: int | None = None


class VehicleListResponse(BaseModel):
    items: list[VehicleListItem]
    metrics: VehicleMetrics


class VehicleDetailRead(BaseModel):
    vehicle: VehicleListItem
    documents: list[DocumentRead]
    logs: list[VehicleLogRead]
