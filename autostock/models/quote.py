"""Modelo Presupuesto / Quote model."""

import enum

from sqlalchemy import Enum, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from autostock.database import Base
from autostock.models._helpers import new_id, utc_now_iso


class QuoteStatus(str, enum.Enum):
    """Estado del presupuesto / Quote status."""
    ENVIADO = "enviado"
    ACEPTADO = "aceptado"
    PERDIDO = "perdido"


class Quote(Base):
    """Presupuesto a cliente / Customer quote."""
    __tablename__ = "quotes"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)

    # Auto vinculado o referencia libre / Linked vehicle or free-text reference
    vehicle_id: Mapped[str | None] = mapped_column(String(36), index=True)
    vehiculo_referencia: Mapped[str | None] = mapped_column(String(200))

    cliente_nombre: Mapped[str] = mapped_column(String(150), nullable=False)
    cliente_telefono: Mapped[str | None] = mapped_column(String(50))
    monto_presupuestado: Mapped[float | None] = mapped_column(Numeric(14, 2, asdecimal=False))
    fecha_presupuesto: Mapped[str] = mapped_column(String(10), nullable=False)  # YYYY-MM-DD
    vendedor: Mapped[str | None] = mapped_column(String(100))
    estado: Mapped[QuoteStatus] = mapped_column(
        Enum(QuoteStatus, values_callable=lambda e: [m.value for m in e]),
        default=QuoteStatus.ENVIADO,
        nullable=False,
    )
    notas: Mapped[str | None] = mapped_column(Text)
    created_at: Mapped[str] = mapped_column(String(32), default=utc_now_iso)

    def __repr__(self) -> str:
        return f"<Quote {self.cliente_nombre} {self.estado}>"
