"""
Estado derivado del inventario / Inventory derived state.

Funciones puras sobre la coleccion de autos en memoria: dias en stock,
metricas, filtro por estado y busqueda libre. Se recalculan despues de cada
recarga completa.
"""

import enum
from collections.abc import Iterable
from datetime import date, datetime, time, timedelta
from decimal import ROUND_HALF_UP, Decimal

from autostock.models.vehicle import VehicleStatus
from autostock.schemas.vehicle import VehicleListItem, VehicleMetrics, VehicleRead

MS_PER_DAY = 1000 * 60 * 60 * 24

STATUS_LABELS = {
    VehicleStatus.EN_STOCK: "En stock",
    VehicleStatus.VENDIDO: "Vendido",
    VehicleStatus.RETIRADO: "Retirado",
}
TRASH_LABEL = "En papelera"


class VehicleStatusFilter(str, enum.Enum):
    """Filtro de la lista de autos / Vehicle list filter."""
    ALL = "all"
    EN_STOCK = "en_stock"
    VENDIDO = "vendido"
    RETIRADO = "retirado"
    TRASH = "trash"


def round_half_away(value: float) -> int:
    """Redondeo al entero mas cercano, empates lejos de cero / Round half away from zero."""
    return int(Decimal(repr(value)).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def _as_date(value: date | str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(value[:10])


def _local_naive(moment: datetime) -> datetime:
    if moment.tzinfo is not None:
        return moment.astimezone().replace(tzinfo=None)
    return moment


class InventoryService:
    """Calculos sobre el inventario / Inventory computations."""

    @staticmethod
    def days_in_stock(vehicle: VehicleRead, reference_time: datetime | None = None) -> int | None:
        """Dias en venta / Days in stock.

        Desde fecha_ingreso (medianoche local) hasta fecha_egreso, o hasta
        `reference_time` si el auto sigue sin egreso. Puede dar 0 o negativo
        con fechas inconsistentes; se devuelve tal cual.
        """
        if not vehicle.fecha_ingreso:
            return None
        start = datetime.combine(_as_date(vehicle.fecha_ingreso), time.min)
        if vehicle.fecha_egreso:
            end = datetime.combine(_as_date(vehicle.fecha_egreso), time.min)
        else:
            end = _local_naive(reference_time or datetime.now())
        elapsed_ms = (end - start) / timedelta(milliseconds=1)
        return round_half_away(elapsed_ms / MS_PER_DAY)

    @staticmethod
    def metrics(vehicles: Iterable[VehicleRead], reference_time: datetime | None = None) -> VehicleMetrics:
        """Autos en stock, vendidos y promedio de dias hasta la venta / Stock metrics.

        Los autos en papelera no cuentan. Un `vendido` sin fecha_egreso no
        entra en vendidos ni en el promedio.
        """
        active = [v for v in vehicles if not v.deleted_at]
        in_stock = [v for v in active if v.estado == VehicleStatus.EN_STOCK]
        sold = [v for v in active if v.estado == VehicleStatus.VENDIDO and v.fecha_egreso]

        days_sold = [
            d for d in (InventoryService.days_in_stock(v, reference_time) for v in sold)
            if d is not None
        ]
        average = round_half_away(sum(days_sold) / len(days_sold)) if days_sold else None

        return VehicleMetrics(
            in_stock_count=len(in_stock),
            sold_count=len(sold),
            average_days_to_sell=average,
        )

    @staticmethod
    def filter_by_status(
        vehicles: Iterable[VehicleRead], status: VehicleStatusFilter | str
    ) -> list[VehicleRead]:
        status = VehicleStatusFilter(status)
        if status is VehicleStatusFilter.TRASH:
            return [v for v in vehicles if v.deleted_at]
        active = [v for v in vehicles if not v.deleted_at]
        if status is VehicleStatusFilter.ALL:
            return active
        return [v for v in active if v.estado == VehicleStatus(status.value)]

    @staticmethod
    def search(vehicles: Iterable[VehicleRead], term: str | None) -> list[VehicleRead]:
        """Busqueda por patente, marca o modelo / Search by plate, make or model."""
        if not term or not term.strip():
            return list(vehicles)
        q = term.lower()
        return [
            v for v in vehicles
            if q in (v.patente or "").lower()
            or q in v.marca.lower()
            or q in v.modelo.lower()
        ]

    @staticmethod
    def apply_filters(
        vehicles: Iterable[VehicleRead],
        status: VehicleStatusFilter | str = VehicleStatusFilter.ALL,
        term: str | None = None,
    ) -> list[VehicleRead]:
        """Primero el estado, despues la busqueda / Status filter first, then search."""
        return InventoryService.search(InventoryService.filter_by_status(vehicles, status), term)

    @staticmethod
    def status_label(vehicle: VehicleRead) -> str:
        if vehicle.deleted_at:
            return TRASH_LABEL
        return STATUS_LABELS.get(vehicle.estado, str(vehicle.estado))

    @staticmethod
    def list_items(
        vehicles: Iterable[VehicleRead], reference_time: datetime | None = None
    ) -> list[VehicleListItem]:
        """Filas de la tabla de autos / Vehicle table rows."""
        return [
            VehicleListItem(
                **v.model_dump(),
                days_in_stock=InventoryService.days_in_stock(v, reference_time),
                status_label=InventoryService.status_label(v),
                in_trash=bool(v.deleted_at),
            )
            for v in vehicles
        ]
