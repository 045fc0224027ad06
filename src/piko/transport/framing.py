"""Length-prefixed framing for a single encoded message.

Wire format, identical in both directions::

    byte 0         payload length N (0-255)
    bytes 1..N+1   encoded message

The one-byte prefix is a hard ceiling of the protocol. Carrying larger
payloads requires a wider prefix, which is a protocol version change.
"""

from __future__ import annotations

from .base import ConnectionClosed, PayloadTooLarge, Truncated


LENGTH_BYTES = 1
MAXIMUM_PAYLOAD = (1 << (8 * LENGTH_BYTES)) - 1


def check_size(payload: bytes) -> int:
    """Return the length of *payload*, or raise :class:`PayloadTooLarge`."""

    size = len(payload)
    if size > MAXIMUM_PAYLOAD:
        raise PayloadTooLarge(size, MAXIMUM_PAYLOAD)

    return size


def frame(payload: bytes) -> bytes:
    """Return *payload* with its length prefix attached."""

    size = check_size(payload)
    return size.to_bytes(LENGTH_BYTES, "big") + bytes(payload)


def write_frame(stream, payload: bytes) -> None:
    """Write one frame to a connected socket.

    The size check happens before anything is written, so an oversize
    payload leaves the stream untouched.
    """

    stream.sendall(frame(payload))


def read_frame(stream) -> bytes:
    """Read one frame from a connected socket and return its payload.

    Blocks until the whole payload has arrived. A peer that closes early
    raises :class:`ConnectionClosed` (before the length prefix) or
    :class:`Truncated` (inside the payload); a short buffer is never returned.
    """

    prefix = _read_exactly(stream, LENGTH_BYTES)
    if len(prefix) < LENGTH_BYTES:
        raise ConnectionClosed("peer closed before sending a frame")

    size = int.from_bytes(prefix, "big")
    payload = _read_exactly(stream, size)
    if len(payload) < size:
        raise Truncated(size, len(payload))

    return payload


def _read_exactly(stream, count: int) -> bytes:
    """Read up to *count* bytes, stopping early only at end of stream."""

    buffer = bytearray()
    while len(buffer) < count:
        chunk = stream.recv(count - len(buffer))
        if not chunk:
            break
        buffer += chunk

    return bytes(buffer)
