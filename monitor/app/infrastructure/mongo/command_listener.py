"""pymongo command listener that feeds a handle's subscription list.

motor runs driver calls on a thread pool, so listener methods usually fire off
the event loop thread. Events are handed to the loop with call_soon_threadsafe,
which keeps occurrence order and queues delivery ahead of the command's own
result. Callbacks therefore only ever run on the loop thread.
"""
from __future__ import annotations

import asyncio
from typing import Any

from pymongo import monitoring

from monitor.app.constants import CommandEventName
from monitor.app.domain.subscriptions import SubscriptionList


def _running_loop() -> asyncio.AbstractEventLoop | None:
    try:
        return asyncio.get_running_loop()
    except RuntimeError:
        return None


class CommandEventBridge(monitoring.CommandListener):
    def __init__(self, subscriptions: SubscriptionList) -> None:
        self._subscriptions = subscriptions
        self._loop: asyncio.AbstractEventLoop | None = None
        self._detached = False

    def bind_loop(self, loop: asyncio.AbstractEventLoop) -> None:
        self._loop = loop

    def detach(self) -> None:
        """Stop delivering; later driver events are dropped."""
        self._detached = True
        self._loop = None

    def started(self, event: monitoring.CommandStartedEvent) -> None:
        self._publish(CommandEventName.STARTED, event)

    def succeeded(self, event: monitoring.CommandSucceededEvent) -> None:
        self._publish(CommandEventName.SUCCEEDED, event)

    def failed(self, event: monitoring.CommandFailedEvent) -> None:
        self._publish(CommandEventName.FAILED, event)

    def _publish(self, name: CommandEventName, event: Any) -> None:
        if self._detached:
            return
        loop = self._loop
        if loop is None or _running_loop() is loop:
            self._deliver(name.value, event)
            return
        if loop.is_closed():
            return
        loop.call_soon_threadsafe(self._deliver, name.value, event)

    def _deliver(self, event_name: str, event: Any) -> None:
        if self._detached:
            return
        self._subscriptions.dispatch(event_name, event)
