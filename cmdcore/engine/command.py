# cmdcore/engine/command.py
"""
Command descriptors.

A command declares itself the way shell commands always have here: class
attributes for the name, aliases, help and the flags it accepts, plus an
argument ``format`` that is compiled into the pattern used for matching and
binding::

    class Ban(Command):
        name = 'ban'
        aliases = ['b']
        format = '<user> [reason...]'
        flags = ['s', 'silent']

        def run(self, sender, args, flags) -> None:
            ...

Format slots:
    <name>      required single token
    [name]      optional single token
    <name...>   required remainder (one or more tokens)
    [name...]   optional remainder
Any other word is a literal that must appear as-is.
"""

from __future__ import annotations
import re
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Pattern, Sequence, Union

from .errors import CommandFormatError

_SLOT_RE = re.compile(
    r"^(?:<(?P<req>[A-Za-z_]\w*)(?P<req_rest>\.\.\.)?>"
    r"|\[(?P<opt>[A-Za-z_]\w*)(?P<opt_rest>\.\.\.)?\])\Z"
)

_COMMAND_MARK = "__cmdcore_command__"
_ATTRIBUTE_MARK = "__cmdcore_attributes__"


def join_args(args: Sequence[str]) -> str:
    """Space-join positional arguments; the string every pattern is tested against."""
    return " ".join(args)


def compile_format(fmt: str) -> Pattern:
    pieces: List[str] = []
    seen: set = set()
    optional_seen = False
    rest_seen = False

    for i, part in enumerate(fmt.split()):
        if rest_seen:
            raise CommandFormatError(f"Remainder slot must be last in format {fmt!r}")
        sep = "" if i == 0 else " "
        m = _SLOT_RE.match(part)
        if m is None:
            if optional_seen:
                raise CommandFormatError(f"Literal {part!r} follows an optional slot in {fmt!r}")
            pieces.append(sep + re.escape(part))
            continue

        name = m.group("req") or m.group("opt")
        optional = m.group("opt") is not None
        rest = bool(m.group("req_rest") or m.group("opt_rest"))
        if name in seen:
            raise CommandFormatError(f"Duplicate slot {name!r} in format {fmt!r}")
        seen.add(name)
        if optional_seen and not optional:
            raise CommandFormatError(f"Required slot {name!r} follows an optional slot in {fmt!r}")

        body = f"(?P<{name}>.+)" if rest else rf"(?P<{name}>\S+)"
        if optional:
            optional_seen = True
            pieces.append(f"(?:{sep}{body})?")
        else:
            pieces.append(sep + body)
        rest_seen = rest

    return re.compile("^" + "".join(pieces) + r"\Z", re.DOTALL)


class Command:
    name: str = ''
    aliases: Sequence[str] = ()
    format: str = ''
    flags: Iterable[str] = ()
    help: str = ''
    attributes: Dict[str, str] = {}
    # a ready-made pattern wins over ``format``
    pattern: Optional[Union[str, Pattern]] = None

    def __init__(
        self,
        name: Optional[str] = None,
        format: Optional[str] = None,
        aliases: Optional[Iterable[str]] = None,
        flags: Optional[Iterable[str]] = None,
        help: Optional[str] = None,
        pattern: Optional[Union[str, Pattern]] = None,
        attributes: Optional[Dict[str, str]] = None,
    ) -> None:
        cls = type(self)
        self.name = name if name is not None else cls.name
        if not self.name:
            raise CommandFormatError(f"{cls.__name__} has no command name")
        self.format = format if format is not None else cls.format
        self.aliases = tuple(dict.fromkeys(aliases if aliases is not None else cls.aliases))
        self.flags = frozenset(flags if flags is not None else cls.flags)
        self.help = help if help is not None else cls.help
        self.attributes = dict(cls.attributes)
        self.attributes.update(attributes or {})

        pat = pattern if pattern is not None else cls.pattern
        if pat is None:
            self.pattern = compile_format(self.format)
        elif isinstance(pat, str):
            self.pattern = re.compile(pat)
        else:
            self.pattern = pat

        self.command_base = None

    def set_aliases(self, aliases: Iterable[str]) -> None:
        """Replace the aliases, keeping the engine's alias index in step when registered."""
        if self.command_base is not None:
            # the engine re-indexes and assigns self.aliases in one step
            self.command_base.update_aliases(self, self.aliases, aliases)
        else:
            self.aliases = tuple(dict.fromkeys(aliases))

    def get_attribute(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self.attributes.get(key, default)

    def matches(self, joined: str) -> bool:
        return self.pattern.search(joined) is not None

    def process_args(self, args: Sequence[str]) -> Dict[str, str]:
        """Bind positional arguments to the pattern's named groups."""
        m = self.pattern.search(join_args(args))
        if m is None:
            return {}
        return {k: v for k, v in m.groupdict().items() if v is not None}

    def run(self, sender: Any, args: Dict[str, str], flags: Dict[str, Optional[str]]) -> None:
        raise NotImplementedError('Command.run must be implemented')

    def __repr__(self) -> str:
        return (f"{type(self).__name__}(name={self.name!r}, aliases={list(self.aliases)!r}, "
                f"format={self.format!r}, flags={sorted(self.flags)!r})")


class CommandTree:
    """
    A group of commands registered together. ``children`` may hold Command or
    CommandTree classes (instantiated once, with the tree) or ready instances.
    """
    children: Sequence[Any] = ()

    def __init__(self, *children: Any) -> None:
        source = children if children else type(self).children
        # built once, so registering the same tree again finds the same instances
        self._children = [c() if isinstance(c, type) else c for c in source]

    def get_children(self) -> List[Any]:
        return list(self._children)

    def register_children(self, base) -> None:
        for child in self.get_children():
            base.register_commands(child)


# ---------- annotated methods ----------

@dataclass(frozen=True)
class CommandInfo:
    name: str
    format: str = ''
    aliases: tuple = ()
    flags: frozenset = frozenset()
    help: str = ''


def command(name: str, format: str = '', aliases: Iterable[str] = (),
            flags: Iterable[str] = (), help: str = ''):
    """Mark a method ``(self, sender, args, flags)`` as a command handler."""
    info = CommandInfo(name, format, tuple(aliases), frozenset(flags), help)

    def deco(func):
        setattr(func, _COMMAND_MARK, info)
        return func
    return deco


def attribute(name: str, value: str):
    """Attach a free-form attribute to an annotated command (stackable)."""
    def deco(func):
        attrs = func.__dict__.setdefault(_ATTRIBUTE_MARK, {})
        attrs[name] = value
        return func
    return deco


class AnnotatedCommand(Command):
    def __init__(self, info: CommandInfo, target: Any, method) -> None:
        super().__init__(
            name=info.name,
            format=info.format,
            aliases=info.aliases,
            flags=info.flags,
            help=info.help or (method.__doc__ or '').strip(),
            attributes=getattr(method, _ATTRIBUTE_MARK, None),
        )
        self.target = target
        self.method = method

    def run(self, sender, args, flags) -> None:
        self.method(sender, args, flags)

    def __repr__(self) -> str:
        return (f"AnnotatedCommand(name={self.name!r}, aliases={list(self.aliases)!r}, "
                f"format={self.format!r}, target={type(self.target).__name__}.{self.method.__name__})")


def annotated_commands(obj: Any) -> List[AnnotatedCommand]:
    """Build descriptors for every ``@command`` method of ``obj``, in definition order."""
    out: List[AnnotatedCommand] = []
    seen: set = set()
    for klass in type(obj).__mro__:
        for attr, fn in vars(klass).items():
            if attr in seen:
                continue
            seen.add(attr)
            info = getattr(fn, _COMMAND_MARK, None)
            if isinstance(info, CommandInfo):
                out.append(AnnotatedCommand(info, obj, getattr(obj, attr)))
    return out


def has_annotated_commands(cls: type) -> bool:
    return any(
        isinstance(getattr(fn, _COMMAND_MARK, None), CommandInfo)
        for klass in cls.__mro__
        for fn in vars(klass).values()
    )
