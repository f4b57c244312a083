"""Connection session: construct, subscribe, verify, release.

The handle is used as an async context manager, so release runs exactly once
whether the liveness check returns, raises, or the task is cancelled. Errors
are not retried; they reach the caller after release.
"""
from __future__ import annotations

from typing import Any, Callable

from loguru import logger

from monitor.app.config.settings import Settings
from monitor.app.constants import CONNECTED_MESSAGE
from monitor.app.core import SERVICE_NAME
from monitor.app.domain.events import describe_event
from monitor.app.domain.subscriptions import EventCallback
from monitor.app.infrastructure.factory import create_connection_handle
from monitor.app.ports.connection_handle import ConnectionHandle


def _log(event: str, **kwargs: Any) -> None:
    logger.bind(service_name=SERVICE_NAME, event=event, **kwargs).info("")


def log_command_event(event: Any) -> None:
    """Default subscriber: write the event to the log."""
    _log("command_event", **describe_event(event))


async def run_session(
    settings: Settings,
    *,
    event_name: str | None = None,
    callback: EventCallback | None = None,
    handle_factory: Callable[[Settings], ConnectionHandle] = create_connection_handle,
) -> None:
    name = event_name or settings.event_name
    async with handle_factory(settings) as handle:
        handle.subscribe(name, callback or log_command_event)
        await handle.verify_liveness(settings.database_name)
        logger.info(CONNECTED_MESSAGE)
