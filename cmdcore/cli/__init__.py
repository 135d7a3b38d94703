# cmdcore/cli/__init__.py
from .shell import build_base, configure_logging, run

__all__ = ["build_base", "configure_logging", "run"]
