# tests/test_command.py
import re

import pytest

from cmdcore.engine import (
    AnnotatedCommand,
    Command,
    CommandFormatError,
    annotated_commands,
    attribute,
    command,
    compile_format,
)


@pytest.mark.parametrize("fmt, text, expected", [
    ("", "", {}),
    ("<user>", "bob", {"user": "bob"}),
    ("<user> [reason...]", "bob", {"user": "bob"}),
    ("<user> [reason...]", "bob being rude", {"user": "bob", "reason": "being rude"}),
    ("[a] [b]", "x", {"a": "x"}),
    ("add <user>", "add bob", {"user": "bob"}),
])
def test_format_binds_named_slots(fmt, text, expected):
    m = compile_format(fmt).search(text)
    assert m is not None
    assert {k: v for k, v in m.groupdict().items() if v is not None} == expected


@pytest.mark.parametrize("fmt, text", [
    ("", "extra"),
    ("<user>", ""),
    ("<user>", "bob alice"),
    ("<message...>", ""),
    ("add <user>", "del bob"),
    ("<user>", "bob\n"),
])
def test_format_rejects(fmt, text):
    assert compile_format(fmt).search(text) is None


@pytest.mark.parametrize("fmt", [
    "<a...> <b>",
    "[a] <b>",
    "<a> <a>",
    "[a] literal",
])
def test_bad_formats_raise(fmt):
    with pytest.raises(CommandFormatError):
        compile_format(fmt)


def test_class_attributes_become_instance_state():
    class Ban(Command):
        name = 'ban'
        aliases = ['b', 'b', 'banish']
        format = '<user>'
        flags = ['s']
        attributes = {'permission': 'admin'}

    cmd = Ban()
    assert cmd.aliases == ('b', 'banish')
    assert cmd.flags == frozenset({'s'})
    assert cmd.get_attribute('permission') == 'admin'
    assert cmd.process_args(['bob']) == {'user': 'bob'}
    assert cmd.process_args(['bob', 'x']) == {}


def test_explicit_pattern_wins_over_format():
    cmd = Command(name='n', format='<ignored>', pattern=r'^(?P<num>\d+)$')
    assert cmd.matches('42')
    assert not cmd.matches('abc')
    assert cmd.process_args(['42']) == {'num': '42'}


def test_precompiled_pattern():
    cmd = Command(name='n', pattern=re.compile(r'user'))
    assert cmd.matches('some user here')


def test_nameless_command_is_rejected():
    with pytest.raises(CommandFormatError):
        Command()


def test_run_must_be_overridden():
    with pytest.raises(NotImplementedError):
        Command(name='x').run(None, {}, {})


class Holder:
    def __init__(self):
        self.seen = []

    @command('greet', '<who>', aliases=['hi'], flags=['l'])
    @attribute('permission', 'user')
    @attribute('category', 'social')
    def greet(self, sender, args, flags):
        self.seen.append(args['who'])

    @command('greet', '<who> <greeting...>')
    def greet_with(self, sender, args, flags):
        """Greet someone with a custom greeting."""
        self.seen.append(args['greeting'])

    def not_a_command(self):
        pass


def test_annotated_methods_become_descriptors_in_definition_order():
    holder = Holder()
    cmds = annotated_commands(holder)
    assert [type(c) for c in cmds] == [AnnotatedCommand, AnnotatedCommand]
    first, second = cmds
    assert first.format == '<who>'
    assert first.aliases == ('hi',)
    assert first.flags == frozenset({'l'})
    assert first.attributes == {'permission': 'user', 'category': 'social'}
    assert second.help == 'Greet someone with a custom greeting.'

    first.run(None, {'who': 'bob'}, {})
    assert holder.seen == ['bob']


def test_plain_objects_yield_nothing():
    assert annotated_commands(object()) == []
