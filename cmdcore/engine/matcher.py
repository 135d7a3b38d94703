# cmdcore/engine/matcher.py
from __future__ import annotations
from typing import Optional, Sequence

from .command import Command, join_args
from .registry import CommandRegistry


def match(registry: CommandRegistry, name: str, args: Sequence[str]) -> Optional[Command]:
    """First variant registered under ``name`` whose pattern accepts ``args``, else None."""
    joined = join_args(args)
    for candidate in registry.lookup(name):
        if candidate.matches(joined):
            return candidate
    return None
