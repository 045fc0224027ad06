""" The command dispatcher at the heart of the piko REPL. Each line of user
    input is split into a command word and an argument remainder; the command
    word selects a handler, which may build a request, exchange it with the
    broker, and render the response.

    Failures of any exchange are contained to the line that caused them:
    the dispatcher prints a one-line diagnostic and goes back to waiting for
    input. Only ``quit`` or the end of input stop the loop.
"""

import enum
import logging

from .errors import PikoError
from .protocol import message


logger = logging.getLogger(__name__)


# Command words and their help text, in the order they are listed by 'help'.
# The 'poll' command is documented for the broker but has no client-side
# implementation; typing it reports an unknown command.

commands = (
    ('help', "You're looking at it"),
    ('list-commands', 'List command names'),
    ('quit', 'Quit'),
    ('sub', 'Subscribe to cluster'),
    ('unsub', 'Unsubscribe from cluster'),
    ('pub', 'Publish to cluster'),
    ('poll', 'Poll your message queue from cluster'),
)


def command_names():
    return tuple(command for command,description in commands)


class State(enum.Enum):
    AWAITING_INPUT = 'awaiting input'
    DISPATCHING = 'dispatching'
    RENDERING = 'rendering'
    TERMINATED = 'terminated'


class Dispatcher:
    """ Map command words to requests and render the results.

        The *session* is anything with an ``exchange(request, timeout=None)``
        method, normally a :class:`piko.transport.session.Session`. Its
        optional ``timeout`` attribute, if set, also bounds the final
        unsubscribe at shutdown. The *client_id* identifies this client to
        the broker for the lifetime of the dispatcher. The *console* supplies
        input lines and displays output; the dispatcher is its sole user.

        :ivar state: The current :class:`State`.
        :ivar cleanup_timeout: Upper bound, in seconds, on the final
            unsubscribe issued at shutdown when the session itself has no
            timeout.
    """

    cleanup_timeout = 2.0

    def __init__(self, session, client_id, console):

        self.session = session
        self.client_id = client_id
        self.console = console
        self.state = State.AWAITING_INPUT

        self.handlers = {
            '': self.do_nothing,
            'help': self.do_help,
            'list-commands': self.do_list_commands,
            'pub': self.do_pub,
            'sub': self.do_sub,
            'unsub': self.do_unsub,
            'quit': self.do_quit,
        }


    def run(self):
        """ Read and execute lines until the user quits or input ends, then
            shut down. The history file is loaded first and saved last.
        """

        console = self.console
        console.write('Enter "help" for a list of commands.')
        console.write('Press Ctrl-D or enter "quit" to exit.')
        console.write()

        console.load_history()

        try:
            while self.state is not State.TERMINATED:
                line = console.read_line()
                if line is None:
                    break
                if self.execute(line) == False:
                    break
        finally:
            self.shutdown()


    def execute(self, line):
        """ Execute a single line of input. Returns False if the line
            terminated the dispatcher, otherwise True.
        """

        if self.state is State.TERMINATED:
            return False

        if line.strip():
            self.console.add_history_unique(line)

        command, arguments = split_first_word(line)

        try:
            handler = self.handlers[command]
        except KeyError:
            self.console.write('Unknown command: "%s"' % (line))
            return True

        handler(arguments)
        return self.state is not State.TERMINATED


    def shutdown(self):
        """ Enter the terminal state. The broker is sent one best-effort
            :class:`message.Unsubscribe`, whose outcome is ignored. Calling
            :func:`shutdown` more than once has no further effect.
        """

        if self.state is State.TERMINATED:
            return

        self.state = State.TERMINATED

        timeout = getattr(self.session, 'timeout', None) or self.cleanup_timeout
        request = message.unsubscribe(self.client_id)

        try:
            response = self.session.exchange(request, timeout=timeout)
        except PikoError as e:
            logger.debug("final unsubscribe failed: %s", diagnostic(e))
        else:
            logger.debug("final unsubscribe: %r", response)

        self.console.save_history()
        self.console.write('Goodbye.')


    def request(self, request):
        """ Exchange *request* with the broker and render the outcome.
            Returns the response, or None if the exchange failed.
        """

        self.state = State.DISPATCHING

        try:
            response = self.session.exchange(request)
        except PikoError as e:
            self.state = State.RENDERING
            self.console.write(diagnostic(e))
            response = None
        else:
            self.state = State.RENDERING
            self.render(response)

        self.state = State.AWAITING_INPUT
        return response


    def render(self, response):

        if isinstance(response, message.Success):
            self.console.write(response.message)
        elif isinstance(response, message.Error):
            self.console.write('Error: ' + response.message)
        else:
            raise TypeError('unhandled response variant: ' + repr(response))


    def do_nothing(self, arguments):
        pass


    def do_help(self, arguments):
        console = self.console
        console.write('piko-cli commands:')
        console.write()
        for command,description in commands:
            console.write('  %-15s - %s' % (command, description))
        console.write()


    def do_list_commands(self, arguments):
        for command in command_names():
            self.console.write(command)


    def do_pub(self, arguments):
        self.request(message.publish(self.client_id, arguments))


    def do_sub(self, arguments):
        self.request(message.subscribe(self.client_id))


    def do_unsub(self, arguments):
        self.request(message.unsubscribe(self.client_id))


    def do_quit(self, arguments):
        self.shutdown()


# end of class Dispatcher



def split_first_word(line):
    """ Split *line* into its first whitespace-delimited word and the rest
        of the line. Surrounding whitespace is removed from the line, and
        leading whitespace from the remainder, which is otherwise untouched.
    """

    line = line.strip()
    parts = line.split(None, 1)

    if len(parts) == 0:
        return ('', '')
    elif len(parts) == 1:
        return (parts[0], '')
    else:
        return (parts[0], parts[1])


def diagnostic(error):
    """ Return a one-line description of *error* suitable for the user.
    """

    return '%s: %s' % (type(error).__name__, error)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
