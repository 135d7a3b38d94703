# cmdcore/engine/base.py
from __future__ import annotations
import logging
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from .command import AnnotatedCommand, Command, CommandTree, annotated_commands, join_args
from .config import EngineConfig
from .errors import InvalidFlagError, NoMatchingVariantError, UnknownCommandError
from .events import (
    CommandEventListener,
    CommandExceptionEvent,
    CommandPostProcessEvent,
    CommandPreProcessEvent,
    EventBus,
)
from .flags import split_flags
from .matcher import match
from .registry import CommandRegistry
from .results import CommandResult

logger = logging.getLogger(__name__)


class CommandBase:
    """
    Dispatch engine: registry, flag parsing, matching and the run pipeline.

    ``execute`` hands each invocation to the worker pool and returns a Future
    that resolves to exactly one CommandResult. The whole pipeline for one
    invocation runs on one worker:

        split flags -> match -> check flags -> bind args -> pre-process
        -> run -> (exception) -> post-process

    Every path ends with exactly one post-process event. Failures from the
    handler are reported to listeners and through the result, never raised
    through the Future.
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        executor: Optional[Executor] = None,
        registry: Optional[CommandRegistry] = None,
        event_bus: Optional[EventBus] = None,
    ) -> None:
        self.config = config or EngineConfig()
        self.registry = registry if registry is not None else CommandRegistry()
        self.events = event_bus if event_bus is not None else EventBus(self.config.listener_errors)
        self._process_flags = self.config.process_flags
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=self.config.max_workers,
            thread_name_prefix=self.config.thread_name_prefix,
        )

    # ---------- registration ----------

    def register_commands(self, obj: Any) -> None:
        """
        Register a Command, a CommandTree (its children, recursively), and any
        ``@command`` methods ``obj`` carries.
        """
        if isinstance(obj, Command):
            self._add(obj)
        elif isinstance(obj, CommandTree):
            logger.info("Registering CommandTree: %s", type(obj).__name__)
            obj.register_children(self)

        for cmd in annotated_commands(obj):
            if self._has_annotated(cmd):
                logger.debug("Annotated command already registered, skipping: %r", cmd)
                continue
            self._add(cmd)

    def _add(self, cmd: Command) -> None:
        if self.registry.register(cmd):
            cmd.command_base = self

    def _has_annotated(self, cmd: AnnotatedCommand) -> bool:
        func = _unbound(cmd.method)
        return any(
            isinstance(c, AnnotatedCommand) and c.target is cmd.target and _unbound(c.method) is func
            for c in self.registry.lookup(cmd.name)
        )

    def remove_command(self, cmd: Command) -> None:
        if self.registry.remove(cmd) and cmd.command_base is self:
            cmd.command_base = None

    def update_aliases(self, cmd: Command, old: Iterable[str], new: Iterable[str]) -> None:
        """Re-index cmd under ``new`` and make ``new`` its aliases."""
        new = tuple(dict.fromkeys(new))
        # cmd.aliases may differ from old when this is called directly
        stale = list(dict.fromkeys([*old, *cmd.aliases]))
        self.registry.update_aliases(cmd, stale, new)
        cmd.aliases = new

    def get_command(self, name: str) -> List[Command]:
        return self.registry.lookup(name)

    def get_commands(self) -> Dict[str, List[Command]]:
        return self.registry.commands()

    def get_aliases(self) -> Dict[str, List[Command]]:
        return self.registry.aliases()

    def register_event_listener(self, listener: CommandEventListener) -> None:
        self.events.register(listener)

    def unregister_event_listener(self, listener: CommandEventListener) -> None:
        self.events.unregister(listener)

    @property
    def process_flags(self) -> bool:
        return self._process_flags

    @process_flags.setter
    def process_flags(self, value: bool) -> None:
        self._process_flags = bool(value)

    # ---------- execution ----------

    def execute(self, sender: Any, command: str, arguments: Sequence[str] = ()) -> "Future[CommandResult]":
        # copy now: the caller may reuse its list before a worker picks this up
        return self._executor.submit(self.dispatch, sender, command, tuple(arguments))

    def dispatch(self, sender: Any, command: str, arguments: Sequence[str] = ()) -> CommandResult:
        """Run the whole pipeline on the calling thread."""
        flags, args = split_flags(arguments, self._process_flags)

        candidate = match(self.registry, command, args)
        if candidate is None:
            if self.registry.lookup(command):
                failure: Exception = NoMatchingVariantError(command, join_args(args))
            else:
                failure = UnknownCommandError(command)
            return self._finish(sender, None, None, None, CommandResult.UNKNOWN_COMMAND, failure)

        for flag in flags:
            if flag not in candidate.flags:
                return self._finish(sender, candidate, None, flags, CommandResult.INVALID_FLAGS,
                                    InvalidFlagError(flag, candidate.name))

        try:
            bound = candidate.process_args(args)
        except Exception as e:
            return self._fail(sender, candidate, None, flags, e)

        pre = CommandPreProcessEvent(sender, candidate, bound, flags)
        self.events.pre_process(pre)
        if pre.cancelled:
            return self._finish(sender, candidate, bound, flags, CommandResult.CANCELLED)

        try:
            candidate.run(sender, dict(bound), dict(flags))
        except Exception as e:
            return self._fail(sender, candidate, bound, flags, e)
        return self._finish(sender, candidate, bound, flags, CommandResult.SUCCESS)

    def _fail(self, sender, cmd: Command, args: Optional[Mapping], flags: Mapping,
              failure: Exception) -> CommandResult:
        logger.debug("Command %s raised %r", cmd.name, failure)
        self.events.exception(CommandExceptionEvent(sender, cmd, args, flags, failure=failure))
        return self._finish(sender, cmd, args, flags, CommandResult.EXCEPTION, failure)

    def _finish(self, sender, cmd: Optional[Command], args: Optional[Mapping], flags: Optional[Mapping],
                result: CommandResult, failure: Optional[Exception] = None) -> CommandResult:
        logger.debug("Dispatch of %s finished: %s", cmd.name if cmd else "<none>", result.name)
        self.events.post_process(CommandPostProcessEvent(sender, cmd, args, flags, result=result, failure=failure))
        return result

    # ---------- lifecycle ----------

    def shutdown(self, wait: bool = True) -> None:
        """Stop the worker pool this engine created. An injected executor is left alone."""
        if self._owns_executor:
            self._executor.shutdown(wait=wait)

    def __enter__(self) -> "CommandBase":
        return self

    def __exit__(self, *exc) -> None:
        self.shutdown()


def _unbound(method):
    return getattr(method, "__func__", method)
