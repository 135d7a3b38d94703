# cmdcore/engine/results.py
from __future__ import annotations
from enum import Enum


class CommandResult(str, Enum):
    """Outcome of one dispatch attempt. Exactly one per ``execute`` call."""
    SUCCESS         = "success"
    CANCELLED       = "cancelled"        # a pre-process listener vetoed it
    EXCEPTION       = "exception"        # binding or the handler raised
    UNKNOWN_COMMAND = "unknown_command"  # no such name, or no variant matched
    INVALID_FLAGS   = "invalid_flags"    # a flag outside the command's set
