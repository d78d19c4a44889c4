"""Esquemas Historial / Vehicle log schemas."""

from typing import Any

from pydantic import BaseModel


class VehicleLogRead(BaseModel):
    id: str
    vehicle_id: str
    action: str
    description: str | None = None
    diff: Any = None
    created_at: str | None = None
