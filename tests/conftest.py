import socket
import threading

import pytest

from piko.protocol import codec
from piko.protocol.message import Success
from piko.transport import ConnectionClosed, framing


class MockBroker:
    """ Loopback stand-in for a piko broker. Each connection is answered with
        the next scripted reply: a response message, raw bytes to send as-is,
        or None to close the connection without answering. The default reply
        is used once the script runs out.
    """

    def __init__(self):
        self.connections = 0
        self.requests = list()
        self.replies = list()
        self.default = Success(message='ok')

        self.socket = socket.create_server(('127.0.0.1', 0))
        self.address = self.socket.getsockname()[:2]

        self.thread = threading.Thread(target=self.run)
        self.thread.daemon = True
        self.thread.start()


    def reply(self, *replies):
        self.replies.extend(replies)


    def run(self):

        while True:
            try:
                connection, _peer = self.socket.accept()
            except OSError:
                break

            self.connections += 1

            with connection:
                self.handle(connection)


    def handle(self, connection):

        try:
            body = framing.read_frame(connection)
        except ConnectionClosed:
            return

        self.requests.append(codec.decode_request(body))

        if self.replies:
            reply = self.replies.pop(0)
        else:
            reply = self.default

        if reply is None:
            return
        elif isinstance(reply, bytes):
            connection.sendall(reply)
        else:
            framing.write_frame(connection, codec.encode_response(reply))


    def close(self):
        try:
            self.socket.shutdown(socket.SHUT_RDWR)
        except OSError:
            pass
        self.socket.close()
        self.thread.join(1)


class FakeConsole:
    """ Scripted console: hands out *lines* one at a time, then signals the
        end of input. Everything written is collected in *output*.
    """

    def __init__(self, lines=()):
        self.lines = list(lines)
        self.output = list()
        self.history = list()
        self.loaded = False
        self.saved = False

    def read_line(self):
        if self.lines:
            return self.lines.pop(0)
        return None

    def write(self, text=''):
        self.output.append(text)

    def add_history_unique(self, line):
        if line in self.history:
            self.history.remove(line)
        self.history.append(line)

    def load_history(self):
        self.loaded = True

    def save_history(self):
        self.saved = True


@pytest.fixture
def broker():
    broker = MockBroker()
    yield broker
    broker.close()


@pytest.fixture
def closed_address():
    """ A loopback address with nothing listening on it.
    """

    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(('127.0.0.1', 0))
    address = sock.getsockname()[:2]
    sock.close()
    return address


@pytest.fixture
def silent_address():
    """ A loopback address that accepts connections but never answers.
    """

    sock = socket.create_server(('127.0.0.1', 0))
    yield sock.getsockname()[:2]
    sock.close()


@pytest.fixture
def console():
    return FakeConsole()


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
