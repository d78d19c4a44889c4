"""
Modelos SQLAlchemy / SQLAlchemy models.
Importar todos los modelos aqui para registrarlos en Base.metadata.
Import all models here so they register on Base.metadata.
"""

from autostock.models.vehicle import Vehicle, VehicleStatus
from autostock.models.vehicle_document import VehicleDocument
from autostock.models.vehicle_log import VehicleLog
from autostock.models.quote import Quote, QuoteStatus

__all__ = [
    "Vehicle",
    "VehicleStatus",
    "VehicleDocument",
    "VehicleLog",
    "Quote",
    "QuoteStatus",
]
