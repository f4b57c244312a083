import asyncio
import inspect
from typing import Any, Callable

from loguru import logger
from motor.motor_asyncio import AsyncIOMotorClient
from pymongo.errors import ConfigurationError, PyMongoError

from monitor.app.constants import CommandEventName, ConnectionState, DEFAULT_LIVENESS_DATABASE
from monitor.app.core import SERVICE_NAME
from monitor.app.core.errors import ConnectionConfigError, ConnectivityError
from monitor.app.domain.subscriptions import EventCallback, Subscription, SubscriptionList
from monitor.app.infrastructure.mongo.command_listener import CommandEventBridge

_KNOWN_EVENT_NAMES = frozenset(name.value for name in CommandEventName)


def _log(event: str, **kwargs: Any) -> None:
    logger.bind(service_name=SERVICE_NAME, event=event, **kwargs).info("")


class MongoConnectionHandle:
    """ConnectionHandle implementation using motor.

    Construction parses the descriptor but performs no network I/O; the first
    round trip happens in verify_liveness. close() is idempotent and the
    underlying client is closed at most once.
    """

    def __init__(
        self,
        descriptor: str,
        *,
        monitor_commands: bool = False,
        server_selection_timeout_ms: int = 5000,
        client_factory: Callable[..., Any] = AsyncIOMotorClient,
    ) -> None:
        if not descriptor or not descriptor.strip():
            raise ConnectionConfigError("connection descriptor is empty")

        self._state = ConnectionState.UNOPENED
        self._subscriptions = SubscriptionList()
        self._listener: CommandEventBridge | None = None

        options: dict[str, Any] = {"serverSelectionTimeoutMS": server_selection_timeout_ms}
        if monitor_commands:
            self._listener = CommandEventBridge(self._subscriptions)
            options["event_listeners"] = [self._listener]

        try:
            self._client = client_factory(descriptor, **options)
        except (ConfigurationError, ValueError) as exc:
            _log("descriptor_rejected", error=str(exc))
            raise ConnectionConfigError(str(exc)) from exc
        _log("handle_created", monitor_commands=monitor_commands)

    @property
    def state(self) -> ConnectionState:
        return self._state

    @property
    def monitor_commands(self) -> bool:
        return self._listener is not None

    def subscribe(self, event_name: str, callback: EventCallback) -> Subscription:
        self._ensure_usable()
        if event_name not in _KNOWN_EVENT_NAMES:
            logger.warning("{} is not a command-lifecycle event and will never fire", event_name)
        elif self._listener is None:
            logger.warning("command monitoring is disabled; {} will never fire", event_name)
        subscription = self._subscriptions.add(event_name, callback)
        _log(
            "subscribed",
            event_name=event_name,
            token=subscription.token,
            subscribers=self._subscriptions.count(event_name),
        )
        return subscription

    def unsubscribe(self, subscription: Subscription) -> None:
        self._subscriptions.remove(subscription)

    async def verify_liveness(self, database_name: str = DEFAULT_LIVENESS_DATABASE) -> None:
        """Send one ping to `database_name`; raise ConnectivityError if it fails."""
        self._ensure_usable()
        self._bind_loop()
        self._state = ConnectionState.OPEN
        _log("liveness_check", database_name=database_name)
        try:
            await self._client[database_name].command("ping")
        except PyMongoError as exc:
            _log("liveness_check_failed", database_name=database_name, error=str(exc))
            raise ConnectivityError(str(exc)) from exc

    async def close(self) -> None:
        if self._state == ConnectionState.CLOSED:
            return
        self._state = ConnectionState.CLOSED
        unsubscribed = len(self._subscriptions)
        self._subscriptions.clear()
        if self._listener is not None:
            self._listener.detach()
        res = self._client.close()
        if inspect.isawaitable(res):
            await res
        _log("handle_released", unsubscribed=unsubscribed)

    async def __aenter__(self) -> "MongoConnectionHandle":
        self._ensure_usable()
        self._bind_loop()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    def _bind_loop(self) -> None:
        if self._listener is not None:
            self._listener.bind_loop(asyncio.get_running_loop())

    def _ensure_usable(self) -> None:
        if self._state == ConnectionState.CLOSED:
            raise RuntimeError("handle_closed")
