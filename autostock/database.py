"""
Conexion a la base de datos / Database connection.
Soporta SQLite (dev) y PostgreSQL (prod) via SQLAlchemy 2.0 async.

No hay motor global: el punto de entrada construye el motor y lo entrega
al cliente de almacenamiento.
"""

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


def make_engine(database_url: str, echo: bool = False, **kwargs) -> AsyncEngine:
    """Crear el motor async / Create the async engine."""
    engine_kwargs: dict = {"echo": echo}

    # PostgreSQL : pool de conexiones / connection pooling
    if not database_url.startswith("sqlite"):
        engine_kwargs.update({
            "pool_size": 5,
            "max_overflow": 10,
            "pool_timeout": 30,
            "pool_recycle": 1800,
            "pool_pre_ping": True,
        })
    engine_kwargs.update(kwargs)
    return create_async_engine(database_url, **engine_kwargs)


def make_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def init_db(engine: AsyncEngine):
    """Crear las tablas al iniciar / Create tables on startup."""
    # Registrar los modelos en Base.metadata / Register models on Base.metadata
    import autostock.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
