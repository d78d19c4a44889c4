"""Tests API / API tests."""

from datetime import date

import pytest
from httpx import ASGITransport, AsyncClient

from autostock.api.deps import get_client
from autostock.config import settings
from autostock.main import app
from autostock.rate_limit import limiter
from tests.fakes import FlakyBlobs, FlakyRecords


@pytest.fixture
async def client(store):
    app.dependency_overrides[get_client] = lambda: store
    limiter.reset()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


async def create_vehicle(client, **kwargs):
    payload = {"marca": "Toyota", "modelo": "Corolla", "fecha_ingreso": "2024-01-01"}
    payload.update(kwargs)
    resp = await client.post("/api/vehicles/", json=payload)
    assert resp.status_code == 201, resp.text
    return resp.json()


@pytest.mark.asyncio
async def test_root(client):
    resp = await client.get("/")
    assert resp.status_code == 200
    assert resp.json()["status"] == "running"


@pytest.mark.asyncio
async def test_api_health(client):
    resp = await client.get("/api/")
    assert resp.status_code == 200
    assert resp.json()["app"] == "Autostock"


@pytest.mark.asyncio
async def test_create_vehicle_defaults(client):
    data = await create_vehicle(client, patente="", precio_publicado=15000000)
    assert data["estado"] == "en_stock"
    assert data["patente"] is None
    assert data["precio_publicado"] == 15000000
    assert "id" in data


@pytest.mark.asyncio
async def test_create_vehicle_validation(client):
    resp = await client.post("/api/vehicles/", json={"marca": "  ", "modelo": "Corolla"})
    assert resp.status_code == 422
    resp = await client.post("/api/vehicles/", json={"marca": "A", "modelo": "B", "precio_publicado": -1})
    assert resp.status_code == 422
    resp = await client.post("/api/vehicles/", json={"marca": "A", "modelo": "B", "estado": "reservado"})
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_list_vehicles_with_filters_and_metrics(client):
    a = await create_vehicle(client, marca="Abarth", modelo="595", fecha_ingreso="2024-01-01")
    b = await create_vehicle(client, marca="Ford", modelo="Ka", fecha_ingreso="2024-02-01")
    await client.post(f"/api/vehicles/{b['id']}/trash")

    resp = await client.get("/api/vehicles/")
    assert resp.status_code == 200
    body = resp.json()
    assert [v["id"] for v in body["items"]] == [a["id"]]
    assert body["items"][0]["status_label"] == "En stock"
    assert body["items"][0]["days_in_stock"] is not None
    assert body["metrics"] == {"in_stock_count": 1, "sold_count": 0, "average_days_to_sell": None}

    resp = await client.get("/api/vehicles/", params={"status": "trash"})
    items = resp.json()["items"]
    assert [v["id"] for v in items] == [b["id"]]
    assert items[0]["status_label"] == "En papelera"
    assert items[0]["in_trash"] is True

    resp = await client.get("/api/vehicles/", params={"q": "AB"})
    assert [v["id"] for v in resp.json()["items"]] == [a["id"]]

    resp = await client.get("/api/vehicles/", params={"status": "reservado"})
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_mark_sold_and_metrics(client):
    v = await create_vehicle(client, fecha_ingreso="2024-01-01")
    resp = await client.post(f"/api/vehicles/{v['id']}/mark-sold")
    assert resp.status_code == 200
    data = resp.json()
    assert data["estado"] == "vendido"
    assert data["fecha_egreso"] == date.today().isoformat()

    resp = await client.get("/api/vehicles/metrics")
    metrics = resp.json()
    assert metrics["sold_count"] == 1
    assert metrics["average_days_to_sell"] == (date.today() - date(2024, 1, 1)).days


@pytest.mark.asyncio
async def test_update_and_history(client, store):
    v = await create_vehicle(client)
    resp = await client.put(f"/api/vehicles/{v['id']}", json={
        "marca": "Toyota", "modelo": "Yaris", "fecha_ingreso": "2024-01-01", "estado": "retirado",
    })
    assert resp.status_code == 200
    assert resp.json()["modelo"] == "Yaris"
    assert resp.json()["estado"] == "retirado"

    await store.background.drain()
    resp = await client.get(f"/api/vehicles/{v['id']}/logs")
    logs = resp.json()
    assert [log["action"] for log in logs] == ["update"]
    assert logs[0]["description"] == "Datos del vehículo actualizados"


@pytest.mark.asyncio
async def test_update_requires_full_record(client):
    v = await create_vehicle(client, estado="vendido", fecha_egreso="2024-02-01")
    resp = await client.put(f"/api/vehicles/{v['id']}", json={"marca": "Toyota", "modelo": "Yaris"})
    assert resp.status_code == 422

    resp = await client.get(f"/api/vehicles/{v['id']}")
    stored = resp.json()["vehicle"]
    assert stored["modelo"] == "Corolla"
    assert stored["fecha_ingreso"] == "2024-01-01"
    assert stored["fecha_egreso"] == "2024-02-01"
    assert stored["estado"] == "vendido"


@pytest.mark.asyncio
async def test_trash_and_restore(client):
    v = await create_vehicle(client)
    resp = await client.post(f"/api/vehicles/{v['id']}/trash")
    assert resp.json()["deleted_at"] is not None
    resp = await client.post(f"/api/vehicles/{v['id']}/restore")
    assert resp.json()["deleted_at"] is None


@pytest.mark.asyncio
async def test_vehicle_detail(client, store):
    v = await create_vehicle(client)
    files = {"file": ("titulo.pdf", b"%PDF-1.4", "application/pdf")}
    resp = await client.post(f"/api/vehicles/{v['id']}/documents", data={"tipo": "Titulo"}, files=files)
    assert resp.status_code == 201, resp.text
    doc = resp.json()
    assert doc["file_path"].startswith(f"{v['id']}/")
    assert doc["file_path"].endswith("-titulo.pdf")
    assert doc["url"] == f"http://test/storage/vehicle_docs/{doc['file_path']}"

    await client.post(f"/api/vehicles/{v['id']}/trash")
    await store.background.drain()

    resp = await client.get(f"/api/vehicles/{v['id']}")
    assert resp.status_code == 200
    detail = resp.json()
    assert detail["vehicle"]["in_trash"] is True
    assert [d["id"] for d in detail["documents"]] == [doc["id"]]
    assert [log["action"] for log in detail["logs"]] == ["soft_delete"]


@pytest.mark.asyncio
async def test_vehicle_not_found(client):
    resp = await client.get("/api/vehicles/nope")
    assert resp.status_code == 404
    assert resp.json()["detail"] == "No se encontró el auto."
    resp = await client.post("/api/vehicles/nope/mark-sold")
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_upload_too_large(client, store, monkeypatch):
    monkeypatch.setattr(settings, "MAX_UPLOAD_MB", 0)
    v = await create_vehicle(client)
    files = {"file": ("titulo.pdf", b"%PDF-1.4", "application/pdf")}
    resp = await client.post(f"/api/vehicles/{v['id']}/documents", data={"tipo": "Titulo"}, files=files)
    assert resp.status_code == 413
    assert await store.records.query("vehicle_documents") == []


@pytest.mark.asyncio
async def test_upload_requires_tipo(client):
    v = await create_vehicle(client)
    files = {"file": ("titulo.pdf", b"%PDF", "application/pdf")}
    resp = await client.post(f"/api/vehicles/{v['id']}/documents", data={"tipo": " "}, files=files)
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_delete_document_with_storage_failure(client, store):
    v = await create_vehicle(client)
    files = {"file": ("cedula.pdf", b"%PDF", "application/pdf")}
    doc = (await client.post(f"/api/vehicles/{v['id']}/documents", data={"tipo": "Cedula"}, files=files)).json()

    store.blobs = FlakyBlobs(store.blobs, {"remove"})
    resp = await client.delete(f"/api/documents/{doc['id']}")
    assert resp.status_code == 200
    assert resp.json()["warnings"] == ["Error borrando archivo del storage"]

    resp = await client.get(f"/api/vehicles/{v['id']}/documents")
    assert resp.json() == []


@pytest.mark.asyncio
async def test_hard_delete_vehicle(client):
    v = await create_vehicle(client)
    files = {"file": ("titulo.pdf", b"%PDF", "application/pdf")}
    await client.post(f"/api/vehicles/{v['id']}/documents", data={"tipo": "Titulo"}, files=files)

    resp = await client.delete(f"/api/vehicles/{v['id']}")
    assert resp.status_code == 200
    assert resp.json()["completed"][-1] == "delete_vehicle"
    assert (await client.get(f"/api/vehicles/{v['id']}")).status_code == 404


@pytest.mark.asyncio
async def test_hard_delete_document_rows_failure(client, store):
    v = await create_vehicle(client)
    store.records = FlakyRecords(store.records, {("delete", "vehicle_documents")})
    resp = await client.delete(f"/api/vehicles/{v['id']}")
    assert resp.status_code == 502
    assert resp.json()["step"] == "delete_document_rows"
    assert (await client.get(f"/api/vehicles/{v['id']}")).status_code == 200


@pytest.mark.asyncio
async def test_read_failure_is_reported(client, store):
    store.records = FlakyRecords(store.records, {("query", "vehicles")})
    resp = await client.get("/api/vehicles/")
    assert resp.status_code == 502
    assert resp.json()["detail"] == "Error cargando autos"


@pytest.mark.asyncio
async def test_quotes(client):
    resp = await client.post("/api/quotes/", json={
        "cliente_nombre": "Ana Diaz", "vehiculo_referencia": "Gol 2015", "monto_presupuestado": 9000000,
    })
    assert resp.status_code == 201
    assert resp.json()["estado"] == "enviado"

    resp = await client.post("/api/quotes/", json={
        "cliente_nombre": "Pedro", "estado": "perdido", "vendedor": "Marta",
    })
    assert resp.status_code == 201

    resp = await client.get("/api/quotes/")
    assert len(resp.json()) == 2
    resp = await client.get("/api/quotes/", params={"status": "perdido"})
    assert [q["cliente_nombre"] for q in resp.json()] == ["Pedro"]
    resp = await client.get("/api/quotes/", params={"q": "gol"})
    assert [q["cliente_nombre"] for q in resp.json()] == ["Ana Diaz"]


@pytest.mark.asyncio
async def test_quote_validation(client):
    resp = await client.post("/api/quotes/", json={"cliente_nombre": ""})
    assert resp.status_code == 422
    resp = await client.post("/api/quotes/", json={"cliente_nombre": "Ana", "monto_presupuestado": -5})
    assert resp.status_code == 422
