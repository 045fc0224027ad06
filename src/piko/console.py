""" The interactive console: line editing, history, and tab completion for
    the piko prompt. The :class:`piko.dispatch.Dispatcher` only ever asks a
    console for one line of input at a time and hands it text to display;
    everything else about the terminal is contained here.

    The standard :mod:`readline` module is used where the platform provides
    it. Without it the console still works, minus editing, completion, and
    persistent history.
"""

import logging
import os
import sys

try:
    import readline
except ImportError:
    readline = None

from . import config


logger = logging.getLogger(__name__)

prompt = 'piko> '


class Console:
    """ Single owner of the process-wide line editor state. Only one
        :class:`Console` should be active at a time, since :mod:`readline`
        keeps its history and completer as module globals.

        *history* is the path of the history file, loaded by
        :func:`load_history` and written by :func:`save_history`.
        *commands* is the sequence of command words offered for completion.
        All output goes to *output*, which defaults to :data:`sys.stdout`.
    """

    def __init__(self, history=config.default_history, prompt=prompt, commands=(), output=None):

        self.history = history
        self.prompt = prompt
        self.commands = tuple(commands)
        self.output = output
        self._matches = []

        if readline is None:
            return

        # History entries are added explicitly via add_history_unique(),
        # blank lines and duplicates are not recorded.

        readline.set_auto_history(False)
        readline.set_completer(self.complete)
        readline.set_completer_delims(' \t\n')

        if 'libedit' in (readline.__doc__ or ''):
            readline.parse_and_bind('bind ^I rl_complete')
        else:
            readline.parse_and_bind('tab: complete')


    def write(self, text=''):
        output = self.output
        if output is None:
            output = sys.stdout

        output.write(text + '\n')
        output.flush()


    def read_line(self):
        """ Block until the user enters a line, and return it without the
            trailing newline. Returns None at end of input (Ctrl-D). An
            interrupt (Ctrl-C) discards the partial line and returns an
            empty string.
        """

        try:
            return input(self.prompt)
        except EOFError:
            self.write()
            return None
        except KeyboardInterrupt:
            self.write('^C')
            return ''


    def add_history_unique(self, line):
        """ Append *line* to the history, removing any earlier copies of it.
        """

        if readline is None:
            return

        index = readline.get_current_history_length()
        while index > 0:
            index -= 1
            # get_history_item() is 1-based; remove_history_item() is not.
            if readline.get_history_item(index + 1) == line:
                readline.remove_history_item(index)

        readline.add_history(line)


    def load_history(self):
        """ Load the history file. A missing or unreadable file is reported
            but not fatal.
        """

        if readline is None:
            logger.debug("readline unavailable, history not loaded")
            return

        try:
            readline.read_history_file(self.history)
        except FileNotFoundError:
            self.write("History file %s doesn't exist, not loading history." % (self.history))
        except OSError as e:
            self.write('Could not load history file %s: %s' % (self.history, e))
        else:
            logger.debug("loaded %d history entries from %s",
                         readline.get_current_history_length(), self.history)


    def save_history(self):
        """ Write the history file. Failure is reported but not fatal.
        """

        if readline is None:
            return

        try:
            readline.write_history_file(self.history)
        except OSError as e:
            self.write('Could not save history file %s: %s' % (self.history, e))
        else:
            logger.debug("saved history to %s", os.path.abspath(self.history))


    def candidates(self, preceding, word):
        """ Return the completions for *word*, given the *preceding* text on
            the line. Only the first word, the command, is completed.
        """

        if preceding.split():
            return []

        return [command for command in self.commands if command.startswith(word)]


    def complete(self, word, state):
        """ Completer hook in the form :func:`readline.set_completer` expects.
        """

        if state == 0:
            preceding = readline.get_line_buffer()[:readline.get_begidx()]
            self._matches = self.candidates(preceding, word)

        try:
            return self._matches[state]
        except IndexError:
            return None


# end of class Console


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
