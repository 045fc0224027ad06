"""One-shot request/response exchange over a fresh TCP connection.

Every call opens a connection, writes one request frame, reads one response
frame, and closes the connection on the way out regardless of outcome.
There is no pooling, no retry, and no request pipelining.
"""

from __future__ import annotations

import logging
import socket
from typing import Optional, Tuple

from ..protocol import codec
from ..protocol.message import Request, Response, variant
from .base import ConnectFailed, ConnectionClosed, TransportTimeout
from .framing import check_size, read_frame, write_frame


logger = logging.getLogger(__name__)

Address = Tuple[str, int]


def exchange(address: Address, request: Request, timeout: Optional[float] = None) -> Response:
    """Send *request* to the broker at *address* and return its response.

    With *timeout* left as None every step blocks indefinitely, so an
    unresponsive broker stalls the caller; a number of seconds bounds the
    connect, the write and the read individually.
    """

    # An oversize request is rejected before a connection is opened.
    payload = codec.encode(request)
    check_size(payload)
    host, port = address

    try:
        connection = socket.create_connection((host, port), timeout=timeout)
    except TimeoutError as exc:
        raise TransportTimeout(f"connect to {host}:{port} timed out after {timeout} sec") from exc
    except OSError as exc:
        raise ConnectFailed(f"cannot connect to {host}:{port}: {exc.strerror or exc}") from exc
    except UnicodeError as exc:
        # Host names that cannot be IDNA-encoded never reach the resolver.
        raise ConnectFailed(f"cannot connect to {host}:{port}: invalid host name: {exc}") from exc

    with connection:
        logger.debug("%s -> %s:%d (%d bytes)", variant(request), host, port, len(payload))

        try:
            write_frame(connection, payload)
            body = read_frame(connection)
        except TimeoutError as exc:
            raise TransportTimeout(f"no response from {host}:{port} in {timeout} sec") from exc
        except OSError as exc:
            raise ConnectionClosed(f"connection to {host}:{port} lost: {exc.strerror or exc}") from exc

    response = codec.decode(body)
    logger.debug("%s <- %s:%d", variant(response), host, port)
    return response


class Session:
    """Bind a broker *address* and *timeout* for repeated exchanges.

    Holding a Session does not hold a connection; each :func:`exchange`
    call still opens and closes its own.
    """

    def __init__(self, address: Address, timeout: Optional[float] = None):
        self.address = (address[0], int(address[1]))
        self.timeout = timeout

    def __repr__(self) -> str:
        return f"Session({self.address[0]}:{self.address[1]}, timeout={self.timeout})"

    def exchange(self, request: Request, timeout: Optional[float] = None) -> Response:
        """Exchange *request*; an explicit *timeout* overrides the session default."""
        if timeout is None:
            timeout = self.timeout
        return exchange(self.address, request, timeout)
