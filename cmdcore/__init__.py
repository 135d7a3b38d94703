# cmdcore/__init__.py
from .engine import *  # noqa: F401,F403
from .engine import __all__
