"""
Compass items: the renderable elements of a command-line surface.

Overview
- Item (closed union)
  • Decor(help)                              section heading or free text, no argument semantics
  • Positional(metavar, help)                unnamed value slot
  • Command(name, short, help)               subcommand entry
  • Flag(name, help)                         presence-only switch named by a ShortLong
  • Argument(name, metavar, env, help)       value-taking named option

- ItemKind
  • Coarse classification (FLAG, COMMAND, DECOR, POSITIONAL) behind the
    is_command()/is_flag()/is_positional() predicates. Flag and Argument are
    both of kind FLAG; Decor counts as flag-like for grouping.

Rendering
- Compact (usage synopsis) form: str(item), item.render().

      <FILE>    COMMAND ...    -v    -o OUT

- Expanded (help listing) form: f"{item:#24}", item.render(True, 24).
  The width is the column computed over the whole group by the layout driver
  (see compass.layout.column_width); it must be at least item.full_width().
  Every line of help after the first is indented to width + 6 so the text
  stays in the description column:

          -o, --output <OUT>  where to write
                              the result

- Environment annotation: an Argument bound to an environment variable shows
  the current value of that variable next to its name in the expanded form,
  read at render time through an injectable lookup:

          -t, --token <T>  [env:TOKEN = "s3cr3t"]
                           api token
          -t, --token <T>  [env:TOKEN: N/A]
          -t, --token <T>  [env:TOKEN: current value is not utf8]

Ordering
- Items are totally ordered by variant (Decor < Positional < Command < Flag <
  Argument) then by their fields; absent fields sort first.
"""
import os
import re
from collections.abc import Mapping
from enum import IntEnum
from types import MappingProxyType
from typing import assert_never

from .faults import MissingWidthError, NarrowColumnError
from .internals import Variant, _sanitize_help, _sanitize_metavar, _sanitize_short
from .meta import Single, Optional
from .names import ShortLong, Named
from .utils import *


class ItemKind(IntEnum):
    """
    coarse category of an item, used by the grouping predicates.
    """
    FLAG        = 1
    COMMAND     = 2
    DECOR       = 3
    POSITIONAL  = 4


_ESCAPES = MappingProxyType({
    "\"": "\\\"",
    "\\": "\\\\",
    "\t": "\\t",
    "\r": "\\r",
    "\n": "\\n",
    "\0": "\\0",
})


def getenv(name, /):
    """
    Read an environment variable of the current process.

    Returns the raw bytes where the platform keeps a bytes environment (so a
    value that is not valid utf8 can be told apart), the string otherwise,
    and None when the variable is not set.
    """
    if os.supports_bytes_environ:
        return os.environb.get(os.fsencode(name))
    return os.environ.get(name)


def _lookup(environ, /):
    """
    Internal: resolve the environment lookup capability of a render call.
    """
    if environ is Unset:
        return getenv
    elif isinstance(environ, Mapping):
        return environ.get
    elif callable(environ):
        return environ
    raise TypeError("'environ' must be a mapping or a callable")


def _quote(value, /):
    """
    Internal: double-quote a value, escaping what would not read back as typed.

    - '"' and '\\' are backslash-escaped
    - tab, carriage return, line feed and NUL become \\t, \\r, \\n and \\0
    - other unprintable characters (controls, format characters such as
      U+200B, separators other than space) become \\u{hex}
    """
    escaped = []
    for char in value:
        if char in _ESCAPES:
            escaped.append(_ESCAPES[char])
        elif not char.isprintable():
            escaped.append(f"\\u{{{ord(char):x}}}")
        else:
            escaped.append(char)
    return '"' + "".join(escaped) + '"'


def _annotation(value, /):
    """
    Internal: describe the current value of an environment variable.

    - None (unset)           → ': N/A'
    - invalid utf8           → ': current value is not utf8'
    - text                   → ' = "text"' (escaped, double-quoted)
    """
    match value:
        case None:
            return ": N/A"
        case bytes():
            try:
                value = value.decode("utf-8")
            except UnicodeDecodeError:
                return ": current value is not utf8"
        case str():
            try:
                # Undecodable bytes survive in str environments as lone surrogates.
                value.encode("utf-8")
            except UnicodeEncodeError:
                return ": current value is not utf8"
        case _:
            raise TypeError("environment lookup must return a string, bytes or None")
    return " = " + _quote(value)


def _sanitize_name(cls, name, /):
    """
    Internal: accept a ShortLong, or a Named converted through ShortLong.from_named.
    """
    if isinstance(name, Named):
        return ShortLong.from_named(name)
    elif not isinstance(name, ShortLong):
        raise TypeError(f"{cls.__typename__} 'name' must be a short-long or a named")
    return name


class Item(Variant, closed=True):
    """
    One renderable element of a command-line description.

    Items are immutable values; rendering is a read-only projection, except for
    the environment read of an Argument bound to a variable.
    """
    __ranks__ = MappingProxyType({
        "decor": 0,
        "positional": 1,
        "command": 2,
        "flag": 3,
        "argument": 4,
    })

    @classmethod
    def decoration(cls, help=Unset, /):
        """
        Build a Decor item, a help-only entry such as a section heading.
        """
        return Decor(help)

    @property
    def kind(self):
        match self:
            case Decor():
                return ItemKind.DECOR
            case Positional():
                return ItemKind.POSITIONAL
            case Command():
                return ItemKind.COMMAND
            case Flag() | Argument():
                return ItemKind.FLAG
            case _:
                assert_never(self)

    def is_command(self):
        return self.kind is ItemKind.COMMAND

    def is_flag(self):
        return self.kind in (ItemKind.FLAG, ItemKind.DECOR)

    def is_positional(self):
        """
        True for a Positional carrying help text.

        A Positional without help only shows up inline in the usage synopsis and
        never gets its own row in the help listing.
        """
        return self.kind is ItemKind.POSITIONAL and self.help is not None

    def required(self, required, /):
        """
        Wrap this item as a usage-grammar leaf, optional unless `required`.
        """
        if required:
            return Single(self)
        return Optional(Single(self))

    def full_width(self):
        """
        Natural width of the name column of this item.

        It covers the implicit short flag, the comma and space between short and
        long names, and the metavar with its angle brackets, if any.
        """
        match self:
            case Decor():
                return 0
            case Flag(name=name):
                return name.full_width()
            case Argument(name=name, metavar=metavar):
                return name.full_width() + len(metavar) + 3
            case Positional(metavar=metavar):
                return len(metavar) + 2
            case Command(name=name, short=short):
                return len(name) + (3 if short is not None else 0)
            case _:
                assert_never(self)

    def _padding(self, width):
        """
        Internal: the room left in a column of `width` after this item's name.

        Raises
        - MissingWidthError: no width was given.
        - NarrowColumnError: the width is below full_width().
        """
        if width is None:
            raise MissingWidthError(
                f"expanded {type(self).__typename__} requires a column width",
                hint="compute the width over the group with column_width() and pass it along",
                item=self,
            )
        elif not isinstance(width, int) or isinstance(width, bool):
            raise TypeError("width must be an integer")
        elif width < (natural := self.full_width()):
            raise NarrowColumnError(
                f"column width {width} is narrower than {type(self).__typename__} {self} ({natural})",
                hint="the width must be the maximum full width across the group",
                item=self,
                width=width,
            )
        return width - natural

    def _compact(self):
        match self:
            case Decor():
                pass
            case Positional(metavar=metavar):
                yield f"<{metavar}>", "metavar"
            case Command():
                yield "COMMAND ...", "command"
            case Flag(name=name):
                yield str(name), "name"
            case Argument(name=name, metavar=metavar):
                yield str(name), "name"
                yield " ", ""
                yield metavar, "metavar"
            case _:
                assert_never(self)

    def _expanded(self, width, lookup):
        pad = self._padding(width)
        match self:
            case Decor(help=help):
                if help is not None:
                    yield "    ", ""
            case Positional(metavar=metavar):
                yield "    ", ""
                yield f"<{metavar}>", "metavar"
            case Command(name=name, short=short):
                yield "    ", ""
                yield name, "command"
                if short is not None:
                    yield ", ", ""
                    yield short, "command"
            case Flag(name=name):
                yield "    ", ""
                yield format(name, "#"), "name"
            case Argument(name=name, metavar=metavar, env=env):
                yield "    ", ""
                yield format(name, "#"), "name"
                yield " <", ""
                yield metavar, "metavar"
                yield ">", ""
                if env is not None:
                    yield " " * pad + "  ", ""
                    yield f"[env:{env}{_annotation(lookup(env))}]", "environment"
                    if self.help is not None:
                        # Help continues below, in the description column.
                        yield "\n" + " " * (4 + self.full_width()), ""
            case _:
                assert_never(self)

        if self.help is None:
            return
        for index, line in enumerate(self.help.split("\n")):
            if index == 0:
                yield " " * pad + "  ", ""
            else:
                yield "\n" + " " * (width + 6), ""
            yield line, "description"

    def fragments(self, expanded=False, width=None, /, *, environ=Unset):
        """
        Yield the rendering of this item as (text, role) pairs.

        Roles
        - "": padding and punctuation
        - "name", "metavar", "command": the name column
        - "environment": the environment annotation
        - "description": help text

        Joining the texts gives exactly render(expanded, width, environ=environ).
        Preconditions of the expanded form are checked before anything is yielded.
        """
        if not expanded:
            return self._compact()
        # Width preconditions fail here rather than on the first next().
        self._padding(width)
        return self._expanded(width, _lookup(environ))

    def render(self, expanded=False, width=None, /, *, environ=Unset):
        """
        Render this item.

        Parameters
        - expanded: bool
          False for the compact usage form, True for the help listing form.
        - width: int
          Column width of the listing (expanded only), at least full_width().
        - environ: Unset | Mapping | Callable[[str], str | bytes | None]
          Environment lookup used for the annotation of bound arguments.
          Defaults to the process environment (see getenv).

        Raises
        - MissingWidthError, NarrowColumnError: expanded without a wide enough width.
        """
        return "".join(text for text, _ in self.fragments(expanded, width, environ=environ))

    def __str__(self):
        return self.render()

    def __format__(self, spec):
        """
        "" renders the compact form; "#" or "#<width>" renders the expanded form.
        """
        if not (match := re.fullmatch(r"(#?)(\d*)", spec)) or (match.group(2) and not match.group(1)):
            raise ValueError(f"invalid format specifier {spec!r} for {type(self).__typename__}")
        alternate, width = match.groups()
        if not alternate:
            return self.render()
        return self.render(True, int(width) if width else None)


class Decor(Item, final=True):
    __introspectable__ = ("help",)

    def __new__(cls, help=Unset, /):
        self = super().__new__(cls)
        self._help = _sanitize_help(cls, help)
        return self


class Positional(Item, final=True):
    __introspectable__ = ("metavar", "help")

    def __new__(cls, metavar, /, help=Unset):
        self = super().__new__(cls)
        self._metavar = _sanitize_metavar(cls, metavar)
        self._help = _sanitize_help(cls, help)
        return self


class Command(Item, final=True):
    __introspectable__ = ("name", "short", "help")

    def __new__(cls, name, /, short=Unset, help=Unset):
        if not isinstance(name, str):
            raise TypeError(f"{cls.__typename__} 'name' must be a string")
        elif not (name := name.strip()) or re.search(r"\s", name):
            raise ValueError(f"{cls.__typename__} 'name' must be a non-empty word")

        self = super().__new__(cls)
        self._name = name
        self._short = None if short is Unset or short is None else _sanitize_short(cls, short)
        self._help = _sanitize_help(cls, help)
        return self


class Flag(Item, final=True):
    __introspectable__ = ("name", "help")

    def __new__(cls, name, /, help=Unset):
        self = super().__new__(cls)
        self._name = _sanitize_name(cls, name)
        self._help = _sanitize_help(cls, help)
        return self


class Argument(Item, final=True):
    __introspectable__ = ("name", "metavar", "env", "help")

    def __new__(cls, name, metavar, /, env=Unset, help=Unset):
        if not isinstance(env, str | Unset | None):
            raise TypeError(f"{cls.__typename__} 'env' must be a string")
        elif isinstance(env, str) and not (env := env.strip()):
            raise ValueError(f"{cls.__typename__} 'env' cannot be empty")

        self = super().__new__(cls)
        self._name = _sanitize_name(cls, name)
        self._metavar = _sanitize_metavar(cls, metavar)
        self._env = coalesce(env)
        self._help = _sanitize_help(cls, help)
        return self


__all__ = (
    "ItemKind",
    "Item",
    "Decor",
    "Positional",
    "Command",
    "Flag",
    "Argument",
    "getenv",
)
