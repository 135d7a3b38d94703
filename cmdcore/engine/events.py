# cmdcore/engine/events.py
"""
Lifecycle events and the listener bus.

Listeners are called synchronously, in registration order, on the worker
thread that runs the command. What happens when a listener raises is decided
by the bus policy:

- "continue": the failure is logged and the remaining listeners still get the event
- "abort":    the failure is logged and the event goes no further

Either way the failure stays inside the bus; it never changes the command's result.
"""

from __future__ import annotations
import logging
import threading
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, List, Mapping, Optional

from .results import CommandResult

logger = logging.getLogger(__name__)

LISTENER_POLICIES = ("continue", "abort")


def _frozen(d: Optional[Mapping]) -> Optional[Mapping]:
    return None if d is None else MappingProxyType(dict(d))


@dataclass(frozen=True)
class CommandEvent:
    sender: Any
    command: Optional[Any]
    args: Optional[Mapping[str, str]] = None
    flags: Optional[Mapping[str, Optional[str]]] = None

    def __post_init__(self):
        # snapshot: later changes to the caller's dicts never show up here
        object.__setattr__(self, "args", _frozen(self.args))
        object.__setattr__(self, "flags", _frozen(self.flags))


@dataclass(frozen=True)
class CommandPreProcessEvent(CommandEvent):
    cancelled: bool = False

    def cancel(self, cancelled: bool = True) -> None:
        # the one mutable bit: a listener may veto the run
        object.__setattr__(self, "cancelled", cancelled)


@dataclass(frozen=True)
class CommandPostProcessEvent(CommandEvent):
    result: CommandResult = CommandResult.SUCCESS
    failure: Optional[BaseException] = None


@dataclass(frozen=True)
class CommandExceptionEvent(CommandEvent):
    failure: Optional[BaseException] = None


class CommandEventListener:
    """Override any subset; the defaults do nothing."""

    def on_pre_process(self, event: CommandPreProcessEvent) -> None:
        pass

    def on_post_process(self, event: CommandPostProcessEvent) -> None:
        pass

    def on_exception(self, event: CommandExceptionEvent) -> None:
        pass


class EventBus:
    def __init__(self, listener_errors: str = "continue") -> None:
        if listener_errors not in LISTENER_POLICIES:
            raise ValueError(f"listener_errors must be one of {LISTENER_POLICIES}, got {listener_errors!r}")
        self.listener_errors = listener_errors
        self._listeners: List[CommandEventListener] = []
        self._lock = threading.Lock()

    def register(self, listener: CommandEventListener) -> None:
        with self._lock:
            self._listeners.append(listener)

    def unregister(self, listener: CommandEventListener) -> bool:
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)
                return True
            return False

    @property
    def listeners(self) -> List[CommandEventListener]:
        with self._lock:
            return list(self._listeners)

    def pre_process(self, event: CommandPreProcessEvent) -> None:
        self._fire("on_pre_process", event)

    def post_process(self, event: CommandPostProcessEvent) -> None:
        self._fire("on_post_process", event)

    def exception(self, event: CommandExceptionEvent) -> None:
        self._fire("on_exception", event)

    def _fire(self, hook: str, event: CommandEvent) -> None:
        # listeners added or removed mid-delivery take effect from the next event
        for listener in self.listeners:
            try:
                getattr(listener, hook)(event)
            except Exception:
                logger.exception("Listener %r failed in %s", listener, hook)
                if self.listener_errors == "abort":
                    return
