from . import fields
from . import message
from . import codec
from . import protocol

from .message import Publish, Subscribe, Unsubscribe, Success, Error
from .codec import MalformedPayload
from .protocol import ProtocolError


"""
piko Protocol Layer
===================

This package defines the messages exchanged with a piko broker and their
binary encoding. It MUST NOT depend on the transport that carries them.

---------------------------------------------------------------------

Layer Architecture Overview
---------------------------

Command Dispatcher (piko.dispatch)
    Maps typed commands to requests, renders responses

    │
    ▼
Protocol Facade (protocol.py)
    Request helpers for scripted callers
    - publish()
    - subscribe()
    - unsubscribe()
    Turns Error responses into ProtocolError

    │
    ▼
Wire Codec (codec.py)
    Message <-> externally tagged CBOR map
    - encode() / decode()
    - encode_response() / decode_request() for loopback use

    │
    ▼
Message Model (message.py)
    Immutable tagged unions
    - Request:  Publish | Subscribe | Unsubscribe
    - Response: Success | Error

    │
    ▼
Field Vocabulary (fields.py)
    Canonical variant tags and wire names

---------------------------------------------------------------------

Below the Protocol Layer (for context)
--------------------------------------

Session Layer (piko.transport.session)
    One connection per exchange: connect, write, read, close

Framing Layer (piko.transport.framing)
    One length byte (0-255) followed by the encoded message

---------------------------------------------------------------------
"""


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
