""" Typed representations of the messages exchanged with a piko broker.

    Requests flow from the client to the broker, responses flow back. Both are
    closed tagged unions: each variant is a frozen :class:`msgspec.Struct`,
    and its variant name is the key under which it appears on the wire. Code
    matching on a union is expected to handle every variant and raise
    :class:`TypeError` for anything else, so that a new variant is noticed
    rather than ignored.
"""

from typing import Annotated, Union

import msgspec

from . import fields


# The upper bound (fields.CLIENT_ID_MAX) cannot be expressed as a msgspec
# constraint; it is enforced by the constructors below and on decode.

ClientId = Annotated[int, msgspec.Meta(ge=0)]


class Publish(msgspec.Struct, frozen=True):
    """ Publish an opaque byte *payload* on behalf of *client_id*. The payload
        is never interpreted by the client.
    """

    client_id: ClientId
    payload: bytes


class Subscribe(msgspec.Struct, frozen=True):
    """Register *client_id* as a subscriber."""

    client_id: ClientId


class Unsubscribe(msgspec.Struct, frozen=True):
    """Deregister *client_id*."""

    client_id: ClientId


class Success(msgspec.Struct, frozen=True):
    """ The operation succeeded. The *message* is human-readable; *data* is
        an optional opaque result, carried on the wire as ``bytes``.
    """

    message: str
    data: bytes = msgspec.field(default=b'', name=fields.SUCCESS_BYTES)


class Error(msgspec.Struct, frozen=True):
    """The operation failed; *message* describes the failure."""

    message: str


Request = Union[Publish, Subscribe, Unsubscribe]
Response = Union[Success, Error]

requests = {
    fields.PUBLISH: Publish,
    fields.SUBSCRIBE: Subscribe,
    fields.UNSUBSCRIBE: Unsubscribe,
}

responses = {
    fields.SUCCESS: Success,
    fields.ERROR: Error,
}

request_types = tuple(requests.values())
response_types = tuple(responses.values())


def check_client_id(client_id):
    """ Return *client_id* if it fits in an unsigned 64-bit integer, otherwise
        raise :class:`ValueError`.
    """

    if isinstance(client_id, bool) or not isinstance(client_id, int):
        raise TypeError('client id must be an integer: ' + repr(client_id))

    if client_id < 0 or client_id > fields.CLIENT_ID_MAX:
        raise ValueError('client id must be an unsigned 64-bit integer: ' + str(client_id))

    return client_id


def publish(client_id, payload):
    """ Return a :class:`Publish` request. A string *payload* is encoded as
        UTF-8; any undecodable bytes that arrived as surrogate escapes (see
        :pep:`383`) are restored as the original bytes. Anything else must be
        bytes-like.
    """

    try:
        payload = payload.encode('utf-8', 'surrogateescape')
    except AttributeError:
        payload = bytes(payload)

    return Publish(client_id=check_client_id(client_id), payload=payload)


def subscribe(client_id):
    return Subscribe(client_id=check_client_id(client_id))


def unsubscribe(client_id):
    return Unsubscribe(client_id=check_client_id(client_id))


def variant(message):
    """ Return the variant name of a request or response, as it appears on
        the wire.
    """

    if isinstance(message, request_types + response_types):
        return type(message).__name__

    raise TypeError('not a protocol message: ' + repr(message))


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
