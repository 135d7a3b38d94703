# cmdcore/engine/errors.py
"""
Failures attached to lifecycle events.

None of these are raised out of ``CommandBase.execute``; the pipeline captures
them and hands them to listeners. ``CommandFormatError`` is the exception: it
is a programming error raised when a descriptor is built.
"""

from __future__ import annotations


class CommandError(Exception):
    pass


class UnknownCommandError(CommandError, LookupError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown command: {name}")
        self.name = name


class NoMatchingVariantError(CommandError, LookupError):
    """The name is registered but no variant's pattern accepted the arguments."""

    def __init__(self, name: str, arguments: str) -> None:
        super().__init__(f"No variant of '{name}' accepts: {arguments!r}")
        self.name = name
        self.arguments = arguments


class InvalidFlagError(CommandError, ValueError):
    def __init__(self, flag: str, command: str) -> None:
        super().__init__(f"{{ {flag} }} is not a valid flag for the command.")
        self.flag = flag
        self.command = command


class CommandFormatError(CommandError, ValueError):
    pass
