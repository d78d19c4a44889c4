"""Rutas API / API routes."""

from fastapi import APIRouter

from autostock.api import documents, quotes, vehicles

api_router = APIRouter(prefix="/api")

api_router.include_router(vehicles.router, prefix="/vehicles", tags=["vehicles"])
api_router.include_router(documents.router, prefix="/documents", tags=["documents"])
api_router.include_router(quotes.router, prefix="/quotes", tags=["quotes"])
