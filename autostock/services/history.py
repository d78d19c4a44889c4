"""Historial de vehiculos / Vehicle history log (best effort)."""

import asyncio
from typing import Any

from autostock.store.client import StoreClient

LOGS = "vehicle_logs"


def append_vehicle_log(
    client: StoreClient, vehicle_id: str, action: str, description: str, diff: Any = None
) -> asyncio.Task:
    """Anexar un log sin esperar su resultado / Append a log entry, fire-and-forget.

    Un fallo del insert nunca bloquea ni revierte la mutacion registrada.
    """
    return client.background.dispatch(
        f"vehicle_log:{action}",
        client.records.insert(LOGS, {
            "vehicle_id": vehicle_id,
            "action": action,
            "description": description,
            "diff": diff,
        }),
    )
