"""Esquemas Presupuesto / Quote schemas."""

from datetime import date

from pydantic import BaseModel, Field, field_validator

from autostock.models.quote import QuoteStatus
from autostock.schemas._common import blank_to_none


class QuoteCreate(BaseModel):
    vehicle_id: str | None = None
    vehiculo_referencia: str | None = Field(default=None, max_length=200)
    cliente_nombre: str = Field(min_length=1, max_length=150)
    cliente_telefono: str | None = Field(default=None, max_length=50)
    monto_presupuestado: float | None = Field(default=None, ge=0)
    fecha_presupuesto: date = Field(default_factory=date.today)
    vendedor: str | None = Field(default=None, max_length=100)
    estado: QuoteStatus = QuoteStatus.ENVIADO
    notas: str | None = None

    @field_validator("cliente_nombre", mode="before")
    @classmethod
    def _strip_name(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator(
        "vehicle_id", "vehiculo_referencia", "cliente_telefono", "vendedor", "notas", mode="before"
    )
    @classmethod
    def _blank_optional(cls, value):
        return blank_to_none(value)


class QuoteRead(BaseModel):
    id: str
    vehicle_id: str | None = None
    vehiculo_referencia: str | None = None
    cliente_nombre: str
    cliente_telefono: str | None = None
    monto_presupuestado: float | None = None
    fecha_presupuesto: date
    vendedor: str | None = None
    estado: QuoteStatus
    notas: str | None = None
    created_at: str | None = None
