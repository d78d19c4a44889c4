"""Tests de los calculos de inventario y presupuestos / Inventory and quote engine tests."""

from datetime import date, datetime

import pytest

from autostock.models.quote import QuoteStatus
from autostock.models.vehicle import VehicleStatus
from autostock.schemas.quote import QuoteRead
from autostock.schemas.vehicle import VehicleRead
from autostock.services.inventory_service import InventoryService, VehicleStatusFilter, round_half_away
from autostock.services.quote_filter import QuoteFilter, QuoteStatusFilter


def make_vehicle(**kwargs) -> VehicleRead:
    fields = {
        "id": kwargs.pop("id", "v1"),
        "marca": "Toyota",
        "modelo": "Corolla",
        "fecha_ingreso": date(2024, 1, 1),
        "estado": VehicleStatus.EN_STOCK,
    }
    fields.update(kwargs)
    return VehicleRead(**fields)


def make_quote(**kwargs) -> QuoteRead:
    fields = {
        "id": kwargs.pop("id", "q1"),
        "cliente_nombre": "Juan Perez",
        "fecha_presupuesto": date(2024, 3, 1),
        "estado": QuoteStatus.ENVIADO,
    }
    fields.update(kwargs)
    return QuoteRead(**fields)


# --- Dias en stock / Days in stock ---

def test_days_in_stock_with_exit_date():
    v = make_vehicle(fecha_egreso=date(2024, 1, 11))
    assert InventoryService.days_in_stock(v) == 10


def test_days_in_stock_ignores_reference_when_exit_date_present():
    v = make_vehicle(fecha_egreso=date(2024, 1, 11))
    assert InventoryService.days_in_stock(v, datetime(2030, 1, 1)) == 10


def test_days_in_stock_uses_reference_time():
    v = make_vehicle()
    assert InventoryService.days_in_stock(v, datetime(2024, 1, 15, 9, 0)) == 14


def test_days_in_stock_rounds_half_away_from_zero():
    v = make_vehicle()
    assert InventoryService.days_in_stock(v, datetime(2024, 1, 1, 12, 0)) == 1
    assert InventoryService.days_in_stock(v, datetime(2024, 1, 1, 11, 59)) == 0


def test_days_in_stock_missing_intake_date():
    v = make_vehicle(fecha_ingreso=None)
    assert InventoryService.days_in_stock(v) is None


def test_days_in_stock_negative_for_inconsistent_dates():
    v = make_vehicle(fecha_ingreso=date(2024, 1, 10), fecha_egreso=date(2024, 1, 5))
    assert InventoryService.days_in_stock(v) == -5


def test_round_half_away():
    assert round_half_away(2.5) == 3
    assert round_half_away(3.5) == 4
    assert round_half_away(-2.5) == -3
    assert round_half_away(2.49) == 2


# --- Metricas / Metrics ---

def test_metrics_empty():
    m = InventoryService.metrics([])
    assert m.in_stock_count == 0
    assert m.sold_count == 0
    assert m.average_days_to_sell is None


def test_metrics_counts_and_average():
    vehicles = [
        make_vehicle(id="a"),
        make_vehicle(id="b"),
        make_vehicle(id="c", estado=VehicleStatus.VENDIDO, fecha_egreso=date(2024, 1, 11)),
        make_vehicle(id="d", estado=VehicleStatus.VENDIDO, fecha_egreso=date(2024, 1, 22)),
        make_vehicle(id="e", estado=VehicleStatus.RETIRADO),
    ]
    m = InventoryService.metrics(vehicles)
    assert m.in_stock_count == 2
    assert m.sold_count == 2
    # (10 + 21) / 2 = 15.5 -> 16
    assert m.average_days_to_sell == 16


def test_metrics_sold_without_exit_date_is_not_counted():
    vehicles = [make_vehicle(estado=VehicleStatus.VENDIDO)]
    m = InventoryService.metrics(vehicles)
    assert m.sold_count == 0
    assert m.average_days_to_sell is None


def test_metrics_exclude_trashed():
    vehicles = [
        make_vehicle(id="a", deleted_at="2024-02-01T00:00:00.000+00:00"),
        make_vehicle(
            id="b", estado=VehicleStatus.VENDIDO, fecha_egreso=date(2024, 1, 3),
            deleted_at="2024-02-01T00:00:00.000+00:00",
        ),
        make_vehicle(id="c"),
    ]
    m = InventoryService.metrics(vehicles)
    assert m.in_stock_count == 1
    assert m.sold_count == 0


# --- Filtros / Filters ---

@pytest.fixture
def fleet():
    return [
        make_vehicle(id="stock", patente="AA111AA"),
        make_vehicle(id="sold", marca="Abarth", modelo="595", estado=VehicleStatus.VENDIDO,
                     fecha_egreso=date(2024, 2, 1)),
        make_vehicle(id="gone", marca="Ford", modelo="Ka", estado=VehicleStatus.RETIRADO),
        make_vehicle(id="trashed", marca="Fiat", modelo="Cronos",
                     deleted_at="2024-02-01T00:00:00.000+00:00"),
    ]


def ids(items):
    return {v.id for v in items}


def test_filter_all_excludes_trash(fleet):
    assert ids(InventoryService.filter_by_status(fleet, "all")) == {"stock", "sold", "gone"}


def test_filter_trash_is_disjoint_from_all(fleet):
    trash = ids(InventoryService.filter_by_status(fleet, VehicleStatusFilter.TRASH))
    active = ids(InventoryService.filter_by_status(fleet, VehicleStatusFilter.ALL))
    assert trash == {"trashed"}
    assert trash.isdisjoint(active)


def test_filter_by_estado(fleet):
    assert ids(InventoryService.filter_by_status(fleet, "vendido")) == {"sold"}
    assert ids(InventoryService.filter_by_status(fleet, "retirado")) == {"gone"}
    assert ids(InventoryService.filter_by_status(fleet, "en_stock")) == {"stock"}


def test_filter_by_estado_excludes_trashed_vehicle_with_that_estado(fleet):
    # "trashed" esta en_stock pero en la papelera
    assert "trashed" not in ids(InventoryService.filter_by_status(fleet, "en_stock"))


def test_filter_rejects_unknown_status(fleet):
    with pytest.raises(ValueError):
        InventoryService.filter_by_status(fleet, "reservado")


def test_search_case_insensitive_substring(fleet):
    assert ids(InventoryService.search(fleet, "ab")) == {"sold"}
    assert ids(InventoryService.search(fleet, "aa111")) == {"stock"}
    assert ids(InventoryService.search(fleet, "KA")) == {"gone"}


def test_search_blank_term_passes_through(fleet):
    assert ids(InventoryService.search(fleet, "   ")) == ids(fleet)
    assert ids(InventoryService.search(fleet, None)) == ids(fleet)


def test_apply_filters_status_then_search(fleet):
    assert ids(InventoryService.apply_filters(fleet, "all", "fiat")) == set()
    assert ids(InventoryService.apply_filters(fleet, "trash", "fiat")) == {"trashed"}


def test_status_labels(fleet):
    labels = {v.id: InventoryService.status_label(v) for v in fleet}
    assert labels == {
        "stock": "En stock",
        "sold": "Vendido",
        "gone": "Retirado",
        "trashed": "En papelera",
    }


def test_list_items_carry_derived_fields(fleet):
    items = InventoryService.list_items(fleet, datetime(2024, 1, 21))
    by_id = {i.id: i for i in items}
    assert by_id["stock"].days_in_stock == 20
    assert by_id["sold"].days_in_stock == 31
    assert by_id["trashed"].in_trash is True
    assert by_id["stock"].in_trash is False


# --- Presupuestos / Quotes ---

@pytest.fixture
def quotes():
    return [
        make_quote(id="q1", vehiculo_referencia="Gol Trend 2015", vendedor="Marta"),
        make_quote(id="q2", cliente_nombre="Lucia Gomez", estado=QuoteStatus.ACEPTADO),
        make_quote(id="q3", cliente_nombre="Pedro", estado=QuoteStatus.PERDIDO, vendedor="Carlos"),
    ]


def test_quote_filter_all(quotes):
    assert ids(QuoteFilter.filter_by_status(quotes, QuoteStatusFilter.ALL)) == {"q1", "q2", "q3"}


def test_quote_filter_by_estado(quotes):
    assert ids(QuoteFilter.filter_by_status(quotes, "aceptado")) == {"q2"}
    assert ids(QuoteFilter.filter_by_status(quotes, "perdido")) == {"q3"}


def test_quote_search_fields(quotes):
    assert ids(QuoteFilter.search(quotes, "gol")) == {"q1"}
    assert ids(QuoteFilter.search(quotes, "GOMEZ")) == {"q2"}
    assert ids(QuoteFilter.search(quotes, "MARTA")) == {"q1"}
    assert ids(QuoteFilter.search(quotes, "carlos")) == {"q3"}
    assert ids(QuoteFilter.search(quotes, "")) == {"q1", "q2", "q3"}


def test_quote_apply_filters(quotes):
    assert ids(QuoteFilter.apply_filters(quotes, "enviado", "juan")) == {"q1"}
