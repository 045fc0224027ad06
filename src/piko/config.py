""" Runtime settings for the piko client. Each setting is resolved, in order
    of precedence, from an explicit value (typically a command-line flag),
    from a ``PIKO_*`` environment variable, and finally from the built-in
    default.
"""

import os

from .protocol import fields


default_address = '0.0.0.0'
default_port = 8878
default_client_id = 1234
default_history = 'piko.hst'
default_timeout = None

environment = dict(
    address='PIKO_ADDRESS',
    port='PIKO_PORT',
    client_id='PIKO_CLIENT_ID',
    timeout='PIKO_TIMEOUT',
    history='PIKO_HISTORY',
)


class Settings:
    """ Immutable bundle of the values needed to run a client session. The
        *client_id* is fixed for the lifetime of the process; there is no
        way to change it once a :class:`Settings` instance exists.
    """

    __slots__ = ('address', 'port', 'client_id', 'timeout', 'history')

    def __init__(self, address=default_address, port=default_port,
                 client_id=default_client_id, timeout=default_timeout,
                 history=default_history):

        values = dict()
        values['address'] = str(address)
        values['port'] = port_number(port)
        values['client_id'] = client_id_number(client_id)
        values['timeout'] = timeout_seconds(timeout)
        values['history'] = str(history)

        for key,value in values.items():
            object.__setattr__(self, key, value)


    def __setattr__(self, key, value):
        raise AttributeError('Settings are read-only')


    def __repr__(self):
        contents = ', '.join('%s=%r' % (key, getattr(self, key)) for key in self.__slots__)
        return 'Settings(' + contents + ')'


    def __eq__(self, other):
        if not isinstance(other, Settings):
            return NotImplemented
        return all(getattr(self, key) == getattr(other, key) for key in self.__slots__)


    @property
    def endpoint(self):
        """ The (host, port) tuple of the broker.
        """

        return (self.address, self.port)


# end of class Settings



def port_number(value):
    port = int(value)
    if port < 0 or port > 65535:
        raise ValueError('port must be between 0 and 65535: ' + str(value))
    return port


def client_id_number(value):
    client_id = int(value)
    if client_id < 0 or client_id > fields.CLIENT_ID_MAX:
        raise ValueError('client id must be an unsigned 64-bit integer: ' + str(value))
    return client_id


def timeout_seconds(value):
    """ Interpret *value* as a timeout in seconds. None, an empty string, or
        the string 'none' mean no timeout, which blocks indefinitely.
    """

    if value is None:
        return None

    if isinstance(value, str) and value.strip().lower() in ('', 'none'):
        return None

    timeout = float(value)
    if timeout <= 0:
        raise ValueError('timeout must be a positive number of seconds: ' + str(value))
    return timeout


def load(environ=None, **overrides):
    """ Build a :class:`Settings` instance. Any keyword argument in
        *overrides* that is not None wins; otherwise the matching environment
        variable is used if set; otherwise the default applies. The
        *environ* mapping defaults to :data:`os.environ`.
    """

    if environ is None:
        environ = os.environ

    for key in overrides:
        if key not in environment:
            raise TypeError('unknown setting: ' + key)

    values = dict()

    for key,variable in environment.items():
        value = overrides.get(key)
        if value is None:
            value = environ.get(variable)
        if value is None:
            continue
        values[key] = value

    return Settings(**values)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
