# tests/conftest.py
import io

import pytest
from rich.console import Console

from cmdcore.cli.state import ShellState
from cmdcore.engine import Command, CommandBase, CommandEventListener, EngineConfig


class Recorder(CommandEventListener):
    def __init__(self):
        self.pre = []
        self.post = []
        self.exceptions = []

    def on_pre_process(self, event):
        self.pre.append(event)

    def on_post_process(self, event):
        self.post.append(event)

    def on_exception(self, event):
        self.exceptions.append(event)


class Counting(Command):
    """Counts runs and remembers what it was called with."""

    def __init__(self, **kw):
        super().__init__(**kw)
        self.calls = []

    def run(self, sender, args, flags):
        self.calls.append((sender, args, flags))


@pytest.fixture
def base():
    b = CommandBase(EngineConfig(max_workers=4))
    yield b
    b.shutdown()


@pytest.fixture
def recorder(base):
    r = Recorder()
    base.register_event_listener(r)
    return r


@pytest.fixture
def state():
    return ShellState(console=Console(file=io.StringIO(), width=200))
