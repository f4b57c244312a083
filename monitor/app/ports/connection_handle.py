"""Port: a session handle to a remote data store. Implementations live in infrastructure."""
from __future__ import annotations

from typing import Protocol

from monitor.app.constants import ConnectionState
from monitor.app.domain.subscriptions import EventCallback, Subscription


class ConnectionHandle(Protocol):
    """Interface for handle lifecycle, event subscription and the liveness check."""

    @property
    def state(self) -> ConnectionState: ...

    def subscribe(self, event_name: str, callback: EventCallback) -> Subscription: ...

    def unsubscribe(self, subscription: Subscription) -> None: ...

    async def verify_liveness(self, database_name: str = ...) -> None: ...

    async def close(self) -> None: ...

    async def __aenter__(self) -> "ConnectionHandle": ...

    async def __aexit__(self, exc_type, exc, tb) -> None: ...
