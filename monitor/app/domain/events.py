"""Render driver command events into flat, loggable records."""
from __future__ import annotations

from typing import Any

_FIELDS = ("command_name", "database_name", "request_id", "operation_id", "duration_micros")


def describe_event(event: Any) -> dict[str, Any]:
    record: dict[str, Any] = {"event_type": type(event).__name__}
    for name in _FIELDS:
        value = getattr(event, name, None)
        if value is not None:
            record[name] = value

    connection_id = getattr(event, "connection_id", None)
    if isinstance(connection_id, tuple) and len(connection_id) == 2:
        record["connection_id"] = f"{connection_id[0]}:{connection_id[1]}"
    elif connection_id is not None:
        record["connection_id"] = str(connection_id)

    failure = getattr(event, "failure", None)
    if failure is not None:
        record["failure"] = failure
    return record
