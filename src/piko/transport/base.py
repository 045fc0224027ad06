"""Transport exceptions.

These live outside :mod:`piko.protocol` so the protocol remains
transport-agnostic. Every one of them is contained by the command
dispatcher to the line that triggered it.
"""

from __future__ import annotations

from ..errors import PikoError


class TransportError(PikoError):
    """Base class for all transport-layer errors."""


class ConnectFailed(TransportError):
    """The broker address is unreachable or refused the connection."""


class TransportTimeout(TransportError):
    """A configured timeout expired during an exchange."""


class PayloadTooLarge(TransportError):
    """An encoded message does not fit under the one-byte length prefix."""

    def __init__(self, size: int, maximum: int):
        TransportError.__init__(self, f"{size} byte payload exceeds the {maximum} byte frame limit")
        self.size = size
        self.maximum = maximum


class ConnectionClosed(TransportError):
    """The peer closed the connection before a frame was received."""


class Truncated(ConnectionClosed):
    """The peer closed the connection part way through a frame."""

    def __init__(self, expected: int, received: int):
        ConnectionClosed.__init__(self, f"peer closed after {received} of {expected} bytes")
        self.expected = expected
        self.received = received
