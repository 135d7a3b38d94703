# tests/test_shell.py
import io

import pytest

from cmdcore.cli import build_base, run
from cmdcore.cli.listeners import PermissionListener
from cmdcore.cli.shell import split_line
from cmdcore.engine import Command, CommandPreProcessEvent, EngineConfig


@pytest.fixture
def shell_base():
    base = build_base(EngineConfig(max_workers=2))
    yield base
    base.shutdown()


def session(base, *lines):
    out = io.StringIO()
    state = run(stdin=io.StringIO("\n".join(lines) + "\n"), stdout=out, base=base)
    return state, out.getvalue()


def test_split_line_keeps_quotes_and_escapes():
    assert split_line('say "hello there" \\-x') == ['say', 'hello there', '\\-x']


def test_echo_and_say(shell_base):
    state, _ = session(shell_base, 'echo -u hi there', 'say --times=2 hey', 'say \\-x')
    assert state.transcript == ['HI THERE', 'console: hey', 'console: hey', 'console: -x']


def test_ban_needs_admin(shell_base):
    state, _ = session(shell_base, 'ban bob', 'op', 'ban bob', 'b bob spamming links --days=2', 'op -r', 'ban bob')
    assert state.transcript == [
        'Permission denied: ban',
        'You are now an admin.',
        'bob was banned',
        'bob was banned for 2 day(s): spamming links',
        'You are no longer an admin.',
        'Permission denied: ban',
    ]


def test_failures_are_reported(shell_base):
    state, _ = session(shell_base, 'frobnicate', 'nick', 'say --loud=yes --what hi', 'roll banana')
    assert state.transcript == [
        'Unknown command: frobnicate. Try \'help\'.',
        'Usage: nick <name>',
        '[Flag Error] { what } is not a valid flag for the command.',
        "[Command Error] Dice must look like NdM, got 'banana'",
    ]


def test_flags_toggle_and_alias(shell_base):
    state, _ = session(shell_base, 'flags off', 'echo -u x', 'flags on', 'alias echo e', 'e hi', 'echo', 'whoami')
    assert state.transcript[:4] == ['Flag parsing is off.', '-u x', 'Flag parsing is on.', 'echo: aliases e']
    assert state.transcript[4:6] == ['hi', '']
    assert state.transcript[6] == 'console [user]'


def test_quit_stops_reading(shell_base):
    state, _ = session(shell_base, 'nick alice', 'quit', 'whoami')
    assert state.running is False
    assert state.transcript == ['console is now known as alice']


def test_help_lists_commands(shell_base, state):
    shell_base.dispatch(state, "help")
    out = state.console.file.getvalue()
    for name in ('ban', 'echo', 'roll', 'whoami', 'quit'):
        assert name in out


def test_help_for_one_command(shell_base, state):
    shell_base.dispatch(state, 'help', ['ban'])
    assert state.transcript == ['ban <user>  - Ban a user', 'ban <user> <reason...>  - Ban a user and say why']


def test_parse_error(shell_base):
    state, _ = session(shell_base, 'say "unterminated')
    assert state.transcript[0].startswith('Parse error')


def test_permission_listener_ignores_unmarked_commands():
    event = CommandPreProcessEvent(object(), Command(name='x'), {}, {})
    PermissionListener().on_pre_process(event)
    assert event.cancelled is False


def test_permission_listener_cancels_senders_without_permission_checks():
    event = CommandPreProcessEvent(object(), Command(name='x', attributes={'permission': 'admin'}), {}, {})
    PermissionListener().on_pre_process(event)
    assert event.cancelled is True
