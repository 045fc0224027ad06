""" Command-line entry point for the interactive piko client.
"""

import argparse
import logging
import sys

from . import __version__
from . import config
from .console import Console
from .dispatch import Dispatcher, command_names
from .transport.session import Session


def parser():
    """ Return the :class:`argparse.ArgumentParser` for the ``piko`` command.
        Options left unset fall back to the ``PIKO_*`` environment variables
        and then to the defaults in :mod:`piko.config`.
    """

    parser = argparse.ArgumentParser(prog='piko', description='CLI for Piko')

    parser.add_argument('-p', '--port', metavar='PORT',
        help='Specify port for client connection. Default %d' % (config.default_port))
    parser.add_argument('-a', '--address', metavar='ADDRESS',
        help='Specify address for client connection. Default %s' % (config.default_address))
    parser.add_argument('--client-id', metavar='ID',
        help='Identifier presented to the broker. Default %d' % (config.default_client_id))
    parser.add_argument('--timeout', metavar='SECONDS',
        help='Give up on a broker that does not answer in time. Default is to wait indefinitely')
    parser.add_argument('--history', metavar='FILE',
        help='Command history file. Default %s' % (config.default_history))
    parser.add_argument('-v', '--verbose', action='count', default=0,
        help='Increase logging verbosity; repeat for debug output')
    parser.add_argument('--version', action='version', version='%(prog)s ' + __version__)

    return parser


def configure_logging(verbosity):

    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )


def main(argv=None):

    arguments = parser()
    options = arguments.parse_args(argv)

    configure_logging(options.verbose)

    try:
        settings = config.load(
            address=options.address,
            port=options.port,
            client_id=options.client_id,
            timeout=options.timeout,
            history=options.history,
        )
    except ValueError as e:
        arguments.error(str(e))

    logging.getLogger(__name__).info("using %r", settings)

    console = Console(history=settings.history, commands=command_names())
    session = Session(settings.endpoint, settings.timeout)

    dispatcher = Dispatcher(session, settings.client_id, console)
    dispatcher.run()

    return 0


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
