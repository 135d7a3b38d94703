# cmdcore/cli/shell.py
from __future__ import annotations
import logging
import os
import shlex
import sys
from typing import List, Optional

from rich.console import Console
from rich.logging import RichHandler

from ..engine import CommandBase, EngineConfig
from .commands.common import load_common_commands
from .listeners import PermissionListener, ShellReporter
from .loader import discover_commands
from .state import ShellState


def configure_logging(level: Optional[str] = None) -> None:
    level = (level or os.getenv("CMDLAB_LOG_LEVEL") or "WARNING").upper()
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
    )


def split_line(line: str) -> List[str]:
    """
    shlex with quoting but no backslash escapes, so ``\\-x`` reaches the
    flag parser intact and stays a positional "-x".
    """
    lex = shlex.shlex(line, posix=True)
    lex.whitespace_split = True
    lex.escape = ''
    return list(lex)


def build_base(config: Optional[EngineConfig] = None, package_root: str = 'cmdcore.cli.plugins') -> CommandBase:
    base = CommandBase(config or EngineConfig.from_env())
    load_common_commands(base)
    discover_commands(base, package_root)
    base.register_event_listener(PermissionListener())
    base.register_event_listener(ShellReporter(base))
    return base


def _read_line(prompt: str, stdin, console: Console) -> str:
    if stdin is sys.stdin:
        return input(prompt)
    console.print(prompt, end="", markup=False, highlight=False)
    line = stdin.readline()
    if not line:
        raise EOFError
    return line


def run(stdin=None, stdout=None, base: Optional[CommandBase] = None) -> ShellState:
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout

    owns_base = base is None
    base = base or build_base()
    state = ShellState(console=Console(file=stdout))

    try:
        while state.running:
            try:
                line = _read_line(f"{state.prompt_prefix()}cmdlab$ ", stdin, state.console)
            except (EOFError, KeyboardInterrupt):
                state.console.print()
                break

            line = line.strip()
            if not line:
                continue

            try:
                tokens = split_line(line)
            except ValueError as e:
                state.reply(f"Parse error: {e}")
                continue
            if not tokens:
                continue

            # the shell waits for each command; the engine itself would not
            base.execute(state, tokens[0].lower(), tokens[1:]).result()
    finally:
        if owns_base:
            base.shutdown()
    return state
