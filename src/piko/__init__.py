""" Python implementation of the piko command-line client. This includes the
    wire protocol used to correspond with a piko broker, the transport that
    carries one request/response exchange per connection, and the interactive
    command dispatcher that drives both.
"""

__version__ = '1.0.0'

# Utility components.

from . import errors
from . import config

# Submodules used by multiple other components.

from . import protocol
from . import transport

# Primary public-facing interfaces.

from . import console
from . import dispatch

from .dispatch import Dispatcher
from .transport.session import Session, exchange

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
