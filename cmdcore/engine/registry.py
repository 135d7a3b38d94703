# cmdcore/engine/registry.py
from __future__ import annotations
import logging
import threading
from typing import Dict, Iterable, List

from .command import Command

logger = logging.getLogger(__name__)


class CommandRegistry:
    """
    Name and alias index of command variants.

    Each key maps to the variants registered under it, in registration order;
    that order is the order the matcher tries them in. Every method takes the
    same lock, so dispatch threads may look up while commands are being added,
    removed or re-aliased, and an alias update is observed either entirely
    before or entirely after.
    """

    def __init__(self) -> None:
        self._by_name: Dict[str, List[Command]] = {}
        self._by_alias: Dict[str, List[Command]] = {}
        self._lock = threading.RLock()

    def register(self, cmd: Command) -> bool:
        with self._lock:
            bucket = self._by_name.setdefault(cmd.name, [])
            if _contains(bucket, cmd):
                logger.debug("Command already registered, skipping: %r", cmd)
                return False
            bucket.append(cmd)
            for alias in cmd.aliases:
                aliased = self._by_alias.setdefault(alias, [])
                if not _contains(aliased, cmd):
                    aliased.append(cmd)
        logger.info("Added command, %r", cmd)
        return True

    def remove(self, cmd: Command) -> bool:
        removed = False
        with self._lock:
            removed |= _discard(self._by_name, cmd.name, cmd)
            # scan every alias bucket, not just cmd.aliases: the index may have
            # been re-aliased without the descriptor knowing
            for alias in list(self._by_alias):
                removed |= _discard(self._by_alias, alias, cmd)
        if removed:
            logger.debug("Removed command %r", cmd)
        return removed

    def lookup(self, key: str) -> List[Command]:
        with self._lock:
            found = self._by_name.get(key) or self._by_alias.get(key) or []
            return list(found)

    def update_aliases(self, cmd: Command, old: Iterable[str], new: Iterable[str]) -> None:
        with self._lock:
            for alias in old:
                _discard(self._by_alias, alias, cmd)
            for alias in new:
                bucket = self._by_alias.setdefault(alias, [])
                if not _contains(bucket, cmd):
                    bucket.append(cmd)
        logger.debug("Updated aliases of %s: %s -> %s", cmd.name, list(old), list(new))

    def commands(self) -> Dict[str, List[Command]]:
        with self._lock:
            return {k: list(v) for k, v in self._by_name.items()}

    def aliases(self) -> Dict[str, List[Command]]:
        with self._lock:
            return {k: list(v) for k, v in self._by_alias.items()}

    def __contains__(self, key: str) -> bool:
        return bool(self.lookup(key))


def _contains(bucket: List[Command], cmd: Command) -> bool:
    # identity, not equality: two commands may compare equal and still be distinct variants
    return any(c is cmd for c in bucket)


def _discard(index: Dict[str, List[Command]], key: str, cmd: Command) -> bool:
    bucket = index.get(key)
    if not bucket:
        return False
    kept = [c for c in bucket if c is not cmd]
    if len(kept) == len(bucket):
        return False
    if kept:
        index[key] = kept
    else:
        del index[key]
    return True
