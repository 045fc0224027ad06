import pytest

from piko import dispatch
from piko.dispatch import Dispatcher, State
from piko.protocol import message
from piko.transport.session import Session


@pytest.fixture
def dispatcher(broker, console):
    session = Session(broker.address, timeout=5)
    return Dispatcher(session, 1234, console)


def test_split_first_word():

    split = dispatch.split_first_word

    assert split('') == ('', '')
    assert split('   ') == ('', '')
    assert split('sub') == ('sub', '')
    assert split('  sub  ') == ('sub', '')
    assert split('pub hello world') == ('pub', 'hello world')
    assert split('pub    hello   world  ') == ('pub', 'hello   world')
    assert split('pub\thello') == ('pub', 'hello')


def test_publish(dispatcher, broker, console):
    """ pub hello world -> Publish{1234, "hello world"} -> Success -> printed.
    """

    broker.reply(message.Success(message='published', data=b''))

    assert dispatcher.execute('pub hello world') == True

    assert broker.requests == [message.Publish(client_id=1234, payload=b'hello world')]
    assert console.output == ['published']
    assert dispatcher.state is State.AWAITING_INPUT


def test_error_response(dispatcher, broker, console):

    broker.reply(message.Error(message='already subscribed'))

    dispatcher.execute('sub')

    assert broker.requests == [message.Subscribe(client_id=1234)]
    assert console.output == ['Error: already subscribed']


def test_success_bytes_not_printed(dispatcher, broker, console):

    broker.reply(message.Success(message='queued', data=b'secret'))
    dispatcher.execute('pub x')

    assert console.output == ['queued']


def test_quit(dispatcher, broker, console):
    """ quit sends one Unsubscribe, ignores the answer, and says goodbye.
    """

    broker.reply(message.Error(message='not subscribed'))
    console.lines = ['quit', 'sub']

    dispatcher.run()

    assert broker.requests == [message.Unsubscribe(client_id=1234)]
    assert console.output[-1] == 'Goodbye.'
    assert 'Error: not subscribed' not in console.output
    assert console.lines == ['sub']
    assert console.loaded == True
    assert console.saved == True
    assert dispatcher.state is State.TERMINATED


def test_end_of_input(dispatcher, broker, console):

    console.lines = ['sub']
    dispatcher.run()

    assert broker.requests == [message.subscribe(1234), message.unsubscribe(1234)]
    assert console.output[-1] == 'Goodbye.'


def test_connect_failed(closed_address, console):
    """ An unreachable broker is reported and the REPL keeps going.
    """

    dispatcher = Dispatcher(Session(closed_address, timeout=5), 1234, console)

    for line in ('sub', 'pub hello', 'unsub'):
        assert dispatcher.execute(line) == True
        assert dispatcher.state is State.AWAITING_INPUT

    assert len(console.output) == 3
    for line in console.output:
        assert line.startswith('ConnectFailed: ')


def test_failed_cleanup(closed_address, console):

    dispatcher = Dispatcher(Session(closed_address), 1234, console)
    console.lines = ['quit']

    dispatcher.run()

    assert console.output[-1] == 'Goodbye.'
    assert not any(line.startswith('ConnectFailed') for line in console.output)


def test_cleanup_is_bounded(silent_address, console):

    dispatcher = Dispatcher(Session(silent_address), 1234, console)
    dispatcher.cleanup_timeout = 0.2

    dispatcher.shutdown()

    assert console.output == ['Goodbye.']


def test_shutdown_once(dispatcher, broker, console):

    dispatcher.shutdown()
    dispatcher.shutdown()

    assert broker.requests == [message.unsubscribe(1234)]
    assert console.output == ['Goodbye.']
    assert dispatcher.execute('sub') == False


def test_repeated_sub_and_unsub(dispatcher, broker, console):

    broker.reply(
        message.Error(message='not subscribed'),
        message.Success(message='subscribed'),
        message.Error(message='already subscribed'),
        message.Success(message='unsubscribed'),
    )

    for line in ('unsub', 'sub', 'sub', 'unsub'):
        assert dispatcher.execute(line) == True

    assert console.output == [
        'Error: not subscribed',
        'subscribed',
        'Error: already subscribed',
        'unsubscribed',
    ]


def test_broker_failures_are_contained(dispatcher, broker, console):

    broker.reply(None, b'\x03abc', b'\x09\x81')

    dispatcher.execute('sub')
    dispatcher.execute('sub')
    dispatcher.execute('sub')

    assert console.output[0].startswith('ConnectionClosed: ')
    assert console.output[1].startswith('MalformedPayload: ')
    assert console.output[2].startswith('Truncated: ')
    assert dispatcher.state is State.AWAITING_INPUT


def test_publish_too_large(dispatcher, broker, console):

    dispatcher.execute('pub ' + 'x' * 300)

    assert console.output[0].startswith('PayloadTooLarge: ')
    assert broker.connections == 0


def test_help(dispatcher, broker, console):

    dispatcher.execute('help')

    assert console.output[0] == 'piko-cli commands:'
    assert '  help            - You\'re looking at it' in console.output
    assert '  poll            - Poll your message queue from cluster' in console.output
    assert broker.connections == 0


def test_list_commands(dispatcher, broker, console):

    dispatcher.execute('list-commands')

    assert console.output == ['help', 'list-commands', 'quit', 'sub', 'unsub', 'pub', 'poll']
    assert broker.connections == 0


def test_unknown(dispatcher, broker, console):

    for line in ('poll', 'SUB', 'publish hello'):
        assert dispatcher.execute(line) == True

    assert console.output == [
        'Unknown command: "poll"',
        'Unknown command: "SUB"',
        'Unknown command: "publish hello"',
    ]
    assert broker.connections == 0


def test_blank_lines(dispatcher, broker, console):

    assert dispatcher.execute('') == True
    assert dispatcher.execute('   ') == True

    assert console.output == []
    assert console.history == []
    assert broker.connections == 0


def test_history(dispatcher, console):

    dispatcher.execute('help')
    dispatcher.execute('list-commands')
    dispatcher.execute('help')
    dispatcher.execute('bogus')

    assert console.history == ['list-commands', 'help', 'bogus']


def test_banner(dispatcher, console):

    dispatcher.run()

    assert console.output[:3] == [
        'Enter "help" for a list of commands.',
        'Press Ctrl-D or enter "quit" to exit.',
        '',
    ]


def test_render_rejects_unknown_variants(dispatcher):

    with pytest.raises(TypeError):
        dispatcher.render(message.subscribe(1))


def test_publish_undecodable_input(dispatcher, broker, console):
    """ Bytes that arrived as surrogate escapes are published as typed.
    """

    dispatcher.execute('pub caf\udce9')

    assert broker.requests == [message.Publish(client_id=1234, payload=b'caf\xe9')]
    assert console.output == ['ok']
    assert dispatcher.state is State.AWAITING_INPUT


def test_invalid_host_name(console):

    session = Session(('a' * 64 + '.example', 8878), timeout=5)
    dispatcher = Dispatcher(session, 1234, console)
    console.lines = ['sub']

    dispatcher.run()

    assert console.output[3].startswith('ConnectFailed: ')
    assert console.output[-1] == 'Goodbye.'
    assert dispatcher.state is State.TERMINATED


class BareSession:
    """ A session with only an exchange() method and no timeout attribute.
    """

    def __init__(self):
        self.requests = list()
        self.timeouts = list()

    def exchange(self, request, timeout=None):
        self.requests.append(request)
        self.timeouts.append(timeout)
        return message.Success(message='ok')


def test_session_without_timeout(console):

    session = BareSession()
    dispatcher = Dispatcher(session, 1234, console)

    dispatcher.execute('sub')
    dispatcher.execute('quit')

    assert session.requests == [message.subscribe(1234), message.unsubscribe(1234)]
    assert session.timeouts == [None, Dispatcher.cleanup_timeout]
    assert console.output == ['ok', 'Goodbye.']


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
