from __future__ import annotations

from typing import Any

import pytest
from pymongo.errors import ConfigurationError, ServerSelectionTimeoutError

from monitor.app.config.settings import Settings


class CommandStartedEvent:
    def __init__(self, command_name: str, database_name: str, request_id: int) -> None:
        self.command_name = command_name
        self.database_name = database_name
        self.request_id = request_id
        self.connection_id = ("localhost", 27017)


class CommandSucceededEvent:
    def __init__(self, command_name: str, database_name: str, request_id: int) -> None:
        self.command_name = command_name
        self.database_name = database_name
        self.request_id = request_id
        self.duration_micros = 120
        self.connection_id = ("localhost", 27017)


class CommandFailedEvent:
    def __init__(self, command_name: str, database_name: str, request_id: int, failure: dict[str, Any]) -> None:
        self.command_name = command_name
        self.database_name = database_name
        self.request_id = request_id
        self.duration_micros = 80
        self.failure = failure
        self.connection_id = ("localhost", 27017)


class FakeMotorDatabase:
    def __init__(self, client: "FakeMotorClient", name: str) -> None:
        self._client = client
        self.name = name

    async def command(self, command: Any) -> dict[str, Any]:
        return await self._client.run_command(self.name, command)


class FakeMotorClient:
    """Stands in for AsyncIOMotorClient; publishes command events to registered listeners.

    `succeed_times` pings succeed; `ping_error` makes the ping fail after a commandFailed event;
    `unreachable` raises server selection timeout before any command event (as the driver does).
    """

    def __init__(
        self,
        descriptor: str,
        *,
        ping_error: Exception | None = None,
        unreachable: bool = False,
        **options: Any,
    ) -> None:
        if not descriptor.startswith(("mongodb://", "mongodb+srv://")):
            raise ConfigurationError(f"Invalid URI scheme: {descriptor}")
        self.descriptor = descriptor
        self.options = options
        self.listeners = list(options.get("event_listeners", []))
        self.ping_error = ping_error
        self.unreachable = unreachable
        self.commands: list[tuple[str, Any]] = []
        self.close_calls = 0
        self._request_ids = 0

    def __getitem__(self, name: str) -> FakeMotorDatabase:
        return FakeMotorDatabase(self, name)

    async def run_command(self, database_name: str, command: Any) -> dict[str, Any]:
        if self.unreachable:
            raise ServerSelectionTimeoutError("localhost:27017: [Errno 111] Connection refused")
        self._request_ids += 1
        request_id = self._request_ids
        name = command if isinstance(command, str) else next(iter(command))
        self.commands.append((database_name, command))
        for listener in self.listeners:
            listener.started(CommandStartedEvent(name, database_name, request_id))
        if self.ping_error is not None:
            for listener in self.listeners:
                listener.failed(CommandFailedEvent(name, database_name, request_id, {"ok": 0}))
            raise self.ping_error
        for listener in self.listeners:
            listener.succeeded(CommandSucceededEvent(name, database_name, request_id))
        return {"ok": 1.0}

    def close(self) -> None:
        self.close_calls += 1


class ClientFactory:
    """Builds FakeMotorClient instances and remembers the last one."""

    def __init__(self, **client_kwargs: Any) -> None:
        self._client_kwargs = client_kwargs
        self.client: FakeMotorClient | None = None

    def __call__(self, descriptor: str, **options: Any) -> FakeMotorClient:
        self.client = FakeMotorClient(descriptor, **self._client_kwargs, **options)
        return self.client


@pytest.fixture()
def client_factory() -> ClientFactory:
    return ClientFactory()


@pytest.fixture()
def settings() -> Settings:
    return Settings(
        mongodb_uri="mongodb://localhost:27017/?replicaSet=rs&w=majority",
        monitor_commands=True,
        event_name="commandSucceeded",
        database_name="admin",
        database_connection_timeout_ms=200,
    )
