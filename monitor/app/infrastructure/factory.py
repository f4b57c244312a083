"""Connection handle factory: selects implementation from config. Only place that imports concrete handles."""
from __future__ import annotations

from monitor.app.config.settings import Settings
from monitor.app.infrastructure.mongo.mongo_connection import MongoConnectionHandle
from monitor.app.ports.connection_handle import ConnectionHandle


def create_connection_handle(settings: Settings) -> ConnectionHandle:
    backend = settings.database_backend.strip().lower()

    if backend in ("mongo",):
        return MongoConnectionHandle(
            settings.mongodb_uri,
            monitor_commands=settings.monitor_commands,
            server_selection_timeout_ms=settings.database_connection_timeout_ms,
        )

    raise ValueError(f"Unsupported database backend: {backend}")
