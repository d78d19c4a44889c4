"""
Punto de entrada FastAPI / FastAPI entry point.
Autostock - registro de autos, documentos y presupuestos de la concesionaria.
"""

import logging
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from starlette.middleware.base import BaseHTTPMiddleware

from autostock.api import api_router
from autostock.config import settings
from autostock.rate_limit import limiter
from autostock.services.document_workflow import DocumentValidationError
from autostock.services.liveness import LivenessMonitor
from autostock.services.workflow import ReadFailure, RecordNotFound, WorkflowError
from autostock.store.client import build_client

logger = logging.getLogger("autostock")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Inicializacion y cierre / Startup and shutdown."""
    # El cliente de almacenamiento vive lo que vive el proceso /
    # The store client lives as long as the process
    client = await build_client(settings)
    app.state.client = client
    monitor = LivenessMonitor(client.records, settings.PING_INTERVAL_SECONDS)
    monitor.start()
    try:
        yield
    finally:
        await monitor.stop()
        await client.aclose()


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Stock de autos, documentacion y presupuestos / Dealership stock, documents and quotes",
    lifespan=lifespan,
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
    openapi_url="/openapi.json" if settings.DEBUG else None,
)

# Rate limiting
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Authorization", "Content-Type", "X-Requested-With"],
)


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Agrega un X-Request-ID unico a cada pedido / Add unique X-Request-ID to each request."""

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID", str(uuid.uuid4()))
        request.state.request_id = request_id
        response: Response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response


app.add_middleware(RequestIDMiddleware)


# Errores de flujo -> aviso en lenguaje simple / Workflow errors -> plain-language notice
@app.exception_handler(RecordNotFound)
async def record_not_found_handler(request: Request, exc: RecordNotFound):
    detail = "No se encontró el auto." if exc.collection == "vehicles" else "No se encontró el registro."
    return JSONResponse(status_code=404, content={"detail": detail})


@app.exception_handler(WorkflowError)
async def workflow_error_handler(request: Request, exc: WorkflowError):
    kind = "read" if isinstance(exc, ReadFailure) else "mutation"
    logger.error("Workflow %s failed at %s (%s): %s", exc.workflow, exc.step, kind, exc.cause)
    return JSONResponse(
        status_code=502,
        content={"detail": exc.message, "workflow": exc.workflow, "step": exc.step},
    )


@app.exception_handler(DocumentValidationError)
async def document_validation_handler(request: Request, exc: DocumentValidationError):
    return JSONResponse(status_code=400, content={"detail": str(exc)})


# Routes API
app.include_router(api_router)

# Archivos publicos del storage / Public blob URLs
app.mount("/storage", StaticFiles(directory=settings.STORAGE_DIR, check_dir=False), name="storage")


# Salud de la API / API health check
@app.get("/api/")
async def api_health():
    """Health check."""
    return {"app": settings.APP_NAME, "version": settings.APP_VERSION, "status": "running"}


@app.get("/")
async def root():
    """Health check (raiz / root)."""
    return {"app": settings.APP_NAME, "version": settings.APP_VERSION, "status": "running"}


# Logging JSON estructurado en produccion / Structured JSON logging in production
if not settings.DEBUG:
    import json

    class JSONFormatter(logging.Formatter):
        def format(self, record):
            log_entry = {
                "timestamp": self.formatTime(record),
                "level": record.levelname,
                "logger": record.name,
                "message": record.getMessage(),
            }
            if record.exc_info and record.exc_info[0]:
                log_entry["exception"] = self.formatException(record.exc_info)
            return json.dumps(log_entry)

    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter())
    logging.root.handlers = [handler]
    logging.root.setLevel(logging.INFO)
