# cmdcore/cli/loader.py
from __future__ import annotations
import importlib
import logging
import pkgutil
from typing import List

from ..engine import AnnotatedCommand, Command, CommandBase, CommandTree
from ..engine.command import has_annotated_commands

logger = logging.getLogger(__name__)


def discover_commands(base: CommandBase, package_root: str = 'cmdcore.cli.plugins') -> List[str]:
    """
    Import every module under ``package_root`` and register what it defines:
    Command subclasses with a name, CommandTree subclasses, and classes
    carrying ``@command`` methods. Classes listed as a tree's children are
    left to the tree. Returns the imported module names.
    """
    pkg = importlib.import_module(package_root)
    loaded = []
    for modinfo in pkgutil.iter_modules(pkg.__path__):
        module_name = f"{package_root}.{modinfo.name}"
        try:
            module = importlib.import_module(module_name)
        except ImportError:
            logger.exception("Skipping command module %s", module_name)
            continue

        # definition order, so variants of one name keep their priority
        classes = [obj for obj in vars(module).values()
                   if isinstance(obj, type) and obj.__module__ == module.__name__]
        in_trees = {child for cls in classes if issubclass(cls, CommandTree)
                    for child in cls.children if isinstance(child, type)}

        for cls in classes:
            if cls in in_trees or not _registrable(cls):
                continue
            try:
                instance = cls()
            except Exception:
                logger.exception("Could not instantiate %s.%s", module_name, cls.__name__)
                continue
            base.register_commands(instance)
        loaded.append(module_name)
    return loaded


def _registrable(cls: type) -> bool:
    if issubclass(cls, Command):
        return cls is not AnnotatedCommand and bool(cls.name)
    if issubclass(cls, CommandTree):
        return True
    return has_annotated_commands(cls)
