# cmdcore/engine/config.py
from __future__ import annotations
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional, Union

from dotenv import dotenv_values

from .events import LISTENER_POLICIES

ENV_PREFIX = "CMDLAB_"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def _parse_bool(key: str, raw: str) -> bool:
    v = raw.strip().lower()
    if v in _TRUE:
        return True
    if v in _FALSE:
        return False
    raise ValueError(f"{key}: expected a boolean (on/off, true/false, 1/0), got {raw!r}")


@dataclass
class EngineConfig:
    process_flags: bool = True
    max_workers: int = 16
    listener_errors: str = "continue"   # "continue" | "abort"
    thread_name_prefix: str = "CommandThread"

    def __post_init__(self):
        if self.max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {self.max_workers}")
        if self.listener_errors not in LISTENER_POLICIES:
            raise ValueError(f"listener_errors must be one of {LISTENER_POLICIES}, got {self.listener_errors!r}")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None,
                 env_file: Optional[Union[str, Path]] = None) -> "EngineConfig":
        """
        Build a config from CMDLAB_* variables.

        Values in ``env_file`` (a .env file) only fill in what the environment
        does not already define.
        """
        env = {}
        if env_file is not None:
            env.update({k: v for k, v in dotenv_values(env_file).items() if v is not None})
        env.update(os.environ if environ is None else environ)

        kwargs = {}
        raw = env.get(ENV_PREFIX + "PROCESS_FLAGS")
        if raw is not None:
            kwargs["process_flags"] = _parse_bool(ENV_PREFIX + "PROCESS_FLAGS", raw)
        raw = env.get(ENV_PREFIX + "MAX_WORKERS")
        if raw is not None:
            try:
                kwargs["max_workers"] = int(raw)
            except ValueError:
                raise ValueError(f"{ENV_PREFIX}MAX_WORKERS: expected an integer, got {raw!r}") from None
        raw = env.get(ENV_PREFIX + "LISTENER_ERRORS")
        if raw is not None:
            kwargs["listener_errors"] = raw.strip().lower()
        return cls(**kwargs)
