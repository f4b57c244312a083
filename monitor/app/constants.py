"""Monitor-level constants shared across modules."""
from __future__ import annotations

from enum import Enum


class ConnectionState(str, Enum):
    UNOPENED = "UNOPENED"
    OPEN = "OPEN"
    CLOSED = "CLOSED"


class CommandEventName(str, Enum):
    """Command-lifecycle event names published by the driver."""

    STARTED = "commandStarted"
    SUCCEEDED = "commandSucceeded"
    FAILED = "commandFailed"


DEFAULT_LIVENESS_DATABASE = "admin"
CONNECTED_MESSAGE = "Connected successfully"
