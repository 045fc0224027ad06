"""Wire codec: protocol messages <-> CBOR bytes.

Messages are encoded the way the piko broker's serde/CBOR stack encodes its
enums, externally tagged: a single-entry CBOR map whose key is the variant
name and whose value is a map of the variant's fields, for example::

    {"Subscribe": {"client_id": 1234}}

Byte fields are sent as arrays of integers, serde's representation of a
``Vec<u8>``. Both that form and CBOR byte strings are accepted on decode.
Unknown keys inside a variant are ignored, so newer peers may add fields.
"""

from __future__ import annotations

from typing import Any, Dict, Type

import cbor2
import msgspec

from ..errors import PikoError
from .message import Request, Response, check_client_id, requests, responses, variant


class MalformedPayload(PikoError, ValueError):
    """A frame body is not a valid encoding of the expected message union."""


def _wrap(message) -> bytes:
    body = msgspec.to_builtins(message, builtin_types=(bytes,))

    for key, value in body.items():
        if isinstance(value, bytes):
            body[key] = list(value)

    return cbor2.dumps({variant(message): body})


def _unwrap(data: bytes, table: Dict[str, Type], kind: str) -> Any:
    try:
        decoded = cbor2.loads(data)
    except cbor2.CBORDecodeError as exc:
        raise MalformedPayload(f"invalid {kind} ({len(data)} bytes): {exc}") from exc

    if not isinstance(decoded, dict) or len(decoded) != 1:
        raise MalformedPayload(f"invalid {kind}: expected a single-variant map, got {decoded!r}")

    (name, body), = decoded.items()

    try:
        cls = table[name]
    except (KeyError, TypeError):
        raise MalformedPayload(f"invalid {kind}: unknown variant {name!r}") from None

    if not isinstance(body, dict):
        raise MalformedPayload(f"invalid {kind}: {name} body is {type(body).__name__}, not a map")

    body = dict(body)
    for key, value in body.items():
        if isinstance(value, list):
            try:
                body[key] = bytes(value)
            except (TypeError, ValueError):
                # Not a byte array; let validation report the field.
                pass

    try:
        return msgspec.convert(body, cls)
    except msgspec.ValidationError as exc:
        raise MalformedPayload(f"invalid {kind}: {name}: {exc}") from exc


def encode(request: Request) -> bytes:
    """Serialize a request for transmission to the broker."""
    return _wrap(request)


def decode(data: bytes) -> Response:
    """Deserialize a broker response, raising :class:`MalformedPayload` on failure."""
    return _unwrap(data, responses, "response")


# Broker-side mirror of the above; used by loopback harnesses.

def encode_response(response: Response) -> bytes:
    return _wrap(response)


def decode_request(data: bytes) -> Request:
    request = _unwrap(data, requests, "request")

    try:
        check_client_id(request.client_id)
    except ValueError as exc:
        raise MalformedPayload(f"invalid request: {exc}") from exc

    return request
