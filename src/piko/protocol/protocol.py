""" High-level facade over the request/response exchange. These functions
    hide message construction and variant matching for scripted callers: a
    :class:`Success` response is returned, an :class:`Error` response is
    raised as :class:`ProtocolError`. The interactive dispatcher matches on
    the response union directly instead.

    The facade never imports a transport; the caller supplies any object with
    an ``exchange(request)`` method, normally a
    :class:`piko.transport.session.Session`.
"""

from ..errors import PikoError
from . import message


class ProtocolError(PikoError):
    """ The broker answered with an :class:`message.Error` response. This is
        a domain-level rejection, not a transport fault; the rejected request
        and the response are retained for inspection.
    """

    def __init__(self, request, response):
        PikoError.__init__(self, response.message)
        self.request = request
        self.response = response


def checked(response, request=None):
    """ Return *response* if it is a :class:`message.Success`, raise
        :class:`ProtocolError` if it is a :class:`message.Error`.
    """

    if isinstance(response, message.Success):
        return response
    elif isinstance(response, message.Error):
        raise ProtocolError(request, response)
    else:
        raise TypeError('unhandled response variant: ' + repr(response))


def call(session, request):
    response = session.exchange(request)
    return checked(response, request)


def publish(session, client_id, payload):
    """ Publish *payload* on behalf of *client_id*, returning the
        :class:`message.Success` response.
    """

    return call(session, message.publish(client_id, payload))


def subscribe(session, client_id):
    return call(session, message.subscribe(client_id))


def unsubscribe(session, client_id):
    return call(session, message.unsubscribe(client_id))


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
