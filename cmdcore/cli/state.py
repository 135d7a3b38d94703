# cmdcore/cli/state.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Set

from rich.console import Console


@dataclass
class ShellState:
    """The shell's sender: who is typing, and where replies go."""
    user: str = "console"
    permissions: Set[str] = field(default_factory=lambda: {"user"})
    console: Console = field(default_factory=Console)
    running: bool = True

    # lines that commands replied with, newest last (handy for scripting and tests)
    transcript: List[str] = field(default_factory=list)

    def reply(self, text: str) -> None:
        self.transcript.append(text)
        self.console.print(text, markup=False, highlight=False)

    def has_permission(self, perm: str) -> bool:
        return perm in self.permissions

    def prompt_prefix(self) -> str:
        if "admin" in self.permissions:
            return f"({self.user}#) "
        return f"({self.user}) "
