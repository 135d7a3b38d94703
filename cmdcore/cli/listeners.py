# cmdcore/cli/listeners.py
from __future__ import annotations
import logging

from ..engine import (
    CommandBase,
    CommandEventListener,
    CommandPostProcessEvent,
    CommandPreProcessEvent,
    CommandResult,
    NoMatchingVariantError,
)

logger = logging.getLogger(__name__)


class PermissionListener(CommandEventListener):
    """Cancels commands whose ``permission`` attribute the sender does not hold."""

    def on_pre_process(self, event: CommandPreProcessEvent) -> None:
        perm = event.command.get_attribute("permission")
        if perm is None:
            return
        has_permission = getattr(event.sender, "has_permission", None)
        if has_permission is None or not has_permission(perm):
            logger.info("Denied %s to %r: missing %r", event.command.name, event.sender, perm)
            event.cancel()


class ShellReporter(CommandEventListener):
    """Tells the shell user why a command did not succeed."""

    def __init__(self, base: CommandBase) -> None:
        self.base = base

    def on_post_process(self, event: CommandPostProcessEvent) -> None:
        reply = getattr(event.sender, "reply", None)
        if reply is None or event.result is CommandResult.SUCCESS:
            return

        if event.result is CommandResult.UNKNOWN_COMMAND:
            if isinstance(event.failure, NoMatchingVariantError):
                reply(f"Usage: {usage(self.base, event.failure.name)}")
            else:
                reply(f"{event.failure}. Try 'help'.")
        elif event.result is CommandResult.INVALID_FLAGS:
            reply(f"[Flag Error] {event.failure}")
        elif event.result is CommandResult.CANCELLED:
            reply(f"Permission denied: {event.command.name}")
        elif event.result is CommandResult.EXCEPTION:
            reply(f"[Command Error] {event.failure}")


def usage(base: CommandBase, name: str) -> str:
    variants = base.get_command(name)
    return " | ".join(f"{c.name} {c.format}".strip() for c in variants) or name
