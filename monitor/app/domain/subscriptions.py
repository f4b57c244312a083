"""Explicit subscription list owned by a connection handle.

Callbacks are kept in registration order. `dispatch` invokes every callback
registered for an event name, in that order, once per call. Occurrence order
is whatever order `dispatch` is called in; the listener bridge preserves it.
"""
from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from typing import Any, Callable

from loguru import logger

EventCallback = Callable[[Any], None]


@dataclass(frozen=True)
class Subscription:
    event_name: str
    callback: EventCallback = field(compare=False)
    token: int


class SubscriptionList:
    def __init__(self) -> None:
        self._entries: list[Subscription] = []
        self._tokens = itertools.count(1)

    def __len__(self) -> int:
        return len(self._entries)

    def count(self, event_name: str) -> int:
        return sum(1 for entry in self._entries if entry.event_name == event_name)

    def add(self, event_name: str, callback: EventCallback) -> Subscription:
        if not event_name:
            raise ValueError("event_name must not be empty")
        if not callable(callback):
            raise TypeError("callback must be callable")
        subscription = Subscription(event_name=event_name, callback=callback, token=next(self._tokens))
        self._entries.append(subscription)
        return subscription

    def remove(self, subscription: Subscription) -> None:
        """Remove one registration. Unknown subscriptions are ignored."""
        self._entries = [entry for entry in self._entries if entry != subscription]

    def clear(self) -> None:
        self._entries = []

    def dispatch(self, event_name: str, event: Any) -> int:
        """Invoke callbacks for `event_name`; return how many were invoked.

        A failing callback is logged and does not stop delivery to the rest.
        """
        delivered = 0
        for entry in [e for e in self._entries if e.event_name == event_name]:
            try:
                entry.callback(event)
            except Exception as exc:
                logger.exception("event callback failed for {}: {}", event_name, exc)
            delivered += 1
        return delivered
