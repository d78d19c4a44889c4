"""Fachada de registros / Record store facade.

Interfaz generica sobre colecciones con nombre (`vehicles`,
`vehicle_documents`, `quotes`, `vehicle_logs`) y su implementacion
SQLAlchemy async. Cada llamada abre su propia sesion y confirma: no hay
transacciones entre llamadas.
"""

from __future__ import annotations

import enum
from typing import Any, Protocol, runtime_checkable

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from autostock.database import Base
from autostock.models import Quote, Vehicle, VehicleDocument, VehicleLog

Record = dict[str, Any]

# Fallos del motor o de la conexion / Engine or connection failures
_STORE_FAILURES = (SQLAlchemyError, OSError)

COLLECTIONS: dict[str, type[Base]] = {
    "vehicles": Vehicle,
    "vehicle_documents": VehicleDocument,
    "quotes": Quote,
    "vehicle_logs": VehicleLog,
}


class StoreError(Exception):
    """Fallo opaco del almacenamiento remoto / Opaque remote store failure."""


@runtime_checkable
class RecordStore(Protocol):
    async def query(
        self,
        collection: str,
        filters: dict[str, Any] | None = None,
        order_by: str | None = None,
        limit: int | None = None,
    ) -> list[Record]: ...

    async def get_one(self, collection: str, record_id: str) -> Record | None: ...

    async def insert(self, collection: str, fields: dict[str, Any]) -> Record: ...

    async def update(self, collection: str, record_id: str, fields: dict[str, Any]) -> Record | None: ...

    async def delete(self, collection: str, where: str | dict[str, Any]) -> int: ...


def _plain(value: Any) -> Any:
    return value.value if isinstance(value, enum.Enum) else value


class SqlRecordStore:
    """Almacen de registros sobre SQLAlchemy / SQLAlchemy-backed record store."""

    def __init__(self, sessions: async_sessionmaker[AsyncSession]):
        self._sessions = sessions

    @staticmethod
    def _model(collection: str) -> type[Base]:
        try:
            return COLLECTIONS[collection]
        except KeyError:
            raise StoreError(f"Unknown collection: {collection}") from None

    @staticmethod
    def _column(model: type[Base], field: str):
        column = model.__table__.columns.get(field)
        if column is None:
            raise StoreError(f"Unknown field {model.__tablename__}.{field}")
        return getattr(model, field)

    @staticmethod
    def _to_record(obj: Base) -> Record:
        return {c.key: _plain(getattr(obj, c.key)) for c in obj.__table__.columns}

    def _where(self, model: type[Base], filters: dict[str, Any] | None) -> list:
        return [self._column(model, field) == value for field, value in (filters or {}).items()]

    async def query(self, collection, filters=None, order_by=None, limit=None) -> list[Record]:
        """Leer registros filtrados y ordenados / Read filtered, ordered records.

        `order_by` admite un prefijo `-` para orden descendente.
        """
        model = self._model(collection)
        stmt = select(model).where(*self._where(model, filters))
        if order_by:
            descending = order_by.startswith("-")
            column = self._column(model, order_by.lstrip("-"))
            stmt = stmt.order_by(column.desc() if descending else column.asc())
        if limit is not None:
            stmt = stmt.limit(limit)
        try:
            async with self._sessions() as session:
                result = await session.execute(stmt)
                return [self._to_record(obj) for obj in result.scalars().all()]
        except _STORE_FAILURES as exc:
            raise StoreError(f"query {collection} failed: {exc}") from exc

    async def get_one(self, collection, record_id) -> Record | None:
        model = self._model(collection)
        try:
            async with self._sessions() as session:
                obj = await session.get(model, record_id)
                return self._to_record(obj) if obj is not None else None
        except _STORE_FAILURES as exc:
            raise StoreError(f"get {collection}/{record_id} failed: {exc}") from exc

    async def insert(self, collection, fields) -> Record:
        model = self._model(collection)
        for field in fields:
            self._column(model, field)
        try:
            async with self._sessions() as session:
                obj = model(**fields)
                session.add(obj)
                await session.commit()
                await session.refresh(obj)
                return self._to_record(obj)
        except _STORE_FAILURES as exc:
            raise StoreError(f"insert into {collection} failed: {exc}") from exc

    async def update(self, collection, record_id, fields) -> Record | None:
        """Actualizacion parcial: solo cambian los campos nombrados / Partial update."""
        model = self._model(collection)
        for field in fields:
            self._column(model, field)
        try:
            async with self._sessions() as session:
                obj = await session.get(model, record_id)
                if obj is None:
                    return None
                for key, value in fields.items():
                    setattr(obj, key, value)
                await session.commit()
                await session.refresh(obj)
                return self._to_record(obj)
        except _STORE_FAILURES as exc:
            raise StoreError(f"update {collection}/{record_id} failed: {exc}") from exc

    async def delete(self, collection, where) -> int:
        """Borrar por id o por filtro de igualdad / Delete by id or equality filter."""
        model = self._model(collection)
        filters = {"id": where} if isinstance(where, str) else where
        if not filters:
            raise StoreError(f"Refusing unfiltered delete on {collection}")
        stmt = delete(model).where(*self._where(model, filters))
        try:
            async with self._sessions() as session:
                result = await session.execute(stmt)
                await session.commit()
                return result.rowcount or 0
        except _STORE_FAILURES as exc:
            raise StoreError(f"delete from {collection} failed: {exc}") from exc
