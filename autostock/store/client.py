"""Cliente de almacenamiento / Store client handle.

Agrupa las fachadas de registros y archivos. Lo construye el punto de
entrada del proceso y se inyecta en las rutas; no hay cliente global.
"""

from dataclasses import dataclass, field
from pathlib import Path

from sqlalchemy.ext.asyncio import AsyncEngine

from autostock.config import Settings
from autostock.database import init_db, make_engine, make_sessionmaker
from autostock.services.best_effort import BestEffortDispatcher
from autostock.store.blobs import BlobStore, LocalBlobStore
from autostock.store.records import RecordStore, SqlRecordStore


@dataclass
class StoreClient:
    records: RecordStore
    blobs: BlobStore
    bucket: str = "vehicle_docs"
    background: BestEffortDispatcher = field(default_factory=BestEffortDispatcher)
    engine: AsyncEngine | None = None

    def public_url(self, file_path: str) -> str:
        return self.blobs.public_url(self.bucket, file_path)

    async def aclose(self):
        """Esperar tareas pendientes y cerrar el motor / Drain tasks and dispose engine."""
        await self.background.drain()
        if self.engine is not None:
            await self.engine.dispose()


async def build_client(settings: Settings, **engine_kwargs) -> StoreClient:
    """Construir el cliente desde la configuracion / Build the client from settings."""
    engine = make_engine(settings.DATABASE_URL, echo=settings.DEBUG, **engine_kwargs)
    await init_db(engine)
    storage_root = Path(settings.STORAGE_DIR)
    storage_root.mkdir(parents=True, exist_ok=True)
    return StoreClient(
        records=SqlRecordStore(make_sessionmaker(engine)),
        blobs=LocalBlobStore(storage_root, settings.PUBLIC_STORAGE_URL),
        bucket=settings.DOCUMENTS_BUCKET,
        engine=engine,
    )
