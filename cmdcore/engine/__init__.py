# cmdcore/engine/__init__.py
from .base import CommandBase
from .command import (
    AnnotatedCommand,
    Command,
    CommandTree,
    annotated_commands,
    attribute,
    command,
    compile_format,
)
from .config import EngineConfig
from .errors import (
    CommandError,
    CommandFormatError,
    InvalidFlagError,
    NoMatchingVariantError,
    UnknownCommandError,
)
from .events import (
    CommandEventListener,
    CommandExceptionEvent,
    CommandPostProcessEvent,
    CommandPreProcessEvent,
    EventBus,
)
from .flags import split_flags
from .registry import CommandRegistry
from .results import CommandResult

__all__ = [
    "AnnotatedCommand", "Command", "CommandBase", "CommandError", "CommandEventListener",
    "CommandExceptionEvent", "CommandFormatError", "CommandPostProcessEvent",
    "CommandPreProcessEvent", "CommandRegistry", "CommandResult", "CommandTree",
    "EngineConfig", "EventBus", "InvalidFlagError", "NoMatchingVariantError",
    "UnknownCommandError", "annotated_commands", "attribute", "command",
    "compile_format", "split_flags",
]
