"""Transport layer: framing and the one-connection-per-request session."""

from .base import (
    TransportError,
    ConnectFailed,
    TransportTimeout,
    PayloadTooLarge,
    ConnectionClosed,
    Truncated,
)

from . import framing
from . import session
