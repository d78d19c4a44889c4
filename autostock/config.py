"""
Configuracion de la aplicacion / Application configuration.
Usa pydantic-settings para cargar desde .env o variables de entorno.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Application
    APP_NAME: str = "Autostock"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = True

    # Base de datos - SQLite por defecto para desarrollo
    # Database - SQLite by default for development
    DATABASE_URL: str = "sqlite+aiosqlite:///./autostock.db"

    # CORS - origenes permitidos / allowed origins
    CORS_ORIGINS: list[str] = ["http://localhost:5173", "http://localhost:3000"]

    # Almacenamiento de archivos / Blob storage
    STORAGE_DIR: str = "data/storage"
    PUBLIC_STORAGE_URL: str = "http://localhost:8000/storage"
    DOCUMENTS_BUCKET: str = "vehicle_docs"
    MAX_UPLOAD_MB: int = 10

    # Ping de actividad contra la base / Store liveness ping
    PING_INTERVAL_SECONDS: int = 5 * 60

    # Rate Limiting
    RATE_LIMIT_UPLOAD: str = "20/minute"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
