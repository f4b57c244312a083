"""Errors surfaced by a connection session."""


class MonitorError(Exception):
    """Base error for the command monitor."""


class ConnectionConfigError(MonitorError):
    """Raised when the connection descriptor cannot be parsed."""


class ConnectivityError(MonitorError):
    """Raised when the liveness check fails (unreachable, auth rejected, timeout)."""
