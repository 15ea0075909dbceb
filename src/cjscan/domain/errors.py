"""
Error family raised by the RPC adapter and the scanner.

Callers can branch on `retryable`: transport failures may succeed on a later
attempt, node rejections and malformed payloads will not.
"""
from __future__ import annotations


class ScanError(Exception):
    retryable = False


class TransportError(ScanError):
    """The HTTP exchange with the node could not be completed."""
    retryable = True


class RPCError(ScanError):
    """The node answered with a non-null `error` object."""

    def __init__(self, message: str | None, code: int | None = None) -> None:
        self.message = message or "unknown"
        self.code = code
        super().__init__(f"RPC error: {self.message}" if code is None
                         else f"RPC error code={code}: {self.message}")


class MalformedResponseError(ScanError):
    """An expected field was missing or had the wrong type."""

    def __init__(self, field: str, detail: str = "") -> None:
        self.field = field
        msg = f"Failed to parse {field}"
        super().__init__(f"{msg}: {detail}" if detail else msg)
