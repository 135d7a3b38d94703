# cmdcore/engine/flags.py
"""
Flag tokenizer.

    -abc            -> {"a": None, "b": None, "c": None}
    --verbose       -> {"verbose": None}
    --level=5       -> {"level": "5"}
    \\-x             -> positional "-x"  (escaped, not a flag)

Anything else is positional. Later flags overwrite earlier ones of the same name.
"""

from __future__ import annotations
import re
from typing import Dict, Iterable, List, Optional, Tuple

SHORT_FLAGS_RE = re.compile(r"^-([A-Za-z]+)\Z")
LONG_FLAG_RE   = re.compile(r"^--([A-Za-z][\w-]*)\Z")
VALUE_FLAG_RE  = re.compile(r"^--([A-Za-z][\w-]*)=(.*)\Z", re.DOTALL)

ESCAPE = "\\"

Flags = Dict[str, Optional[str]]


def split_flags(tokens: Iterable[str], process_flags: bool = True) -> Tuple[Flags, List[str]]:
    flags: Flags = {}
    args: List[str] = []
    for tok in tokens:
        if process_flags:
            m = SHORT_FLAGS_RE.match(tok)
            if m:
                for letter in m.group(1):
                    flags[letter] = None
                continue
            m = LONG_FLAG_RE.match(tok)
            if m:
                flags[m.group(1)] = None
                continue
            m = VALUE_FLAG_RE.match(tok)
            if m:
                flags[m.group(1)] = m.group(2)
                continue
        args.append(unescape(tok))
    return flags, args


def unescape(tok: str) -> str:
    """Drop the escape in front of a flag marker: ``\\-x`` -> ``-x``."""
    if tok.startswith(ESCAPE + "-"):
        return tok[1:]
    return tok
