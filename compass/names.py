r"""
Compass names: the identity of a flag or argument.

Overview
- Named
  • The alias collaborator: an ordered, non-unique collection of short ("-v")
    and long ("--verbose") aliases, plus an optional bound environment variable
    and help text. A Named without any alias is valid (e.g., environment-only).
  • named.item(...) builds the matching Flag or Argument item.

- ShortLong (closed union)
  • Short("v")             → -v
  • Long("verbose")        → --verbose
  • Both("v", "verbose")   → -v, --verbose
  • ShortLong.from_named(named) picks the first short and the first long alias and
    raises NamelessError when there is neither.

Widths
- full_width() is the column a name occupies in the help listing. Long-only
  names reserve the room of a "-c, " prefix (4 columns) so they line up with
  short+long pairs:

      -v, --verbose
          --quiet
      -x

Rendering
- str(name) / name.render(): compact usage form, short preferred.
- format(name, "#") / name.render(True): expanded help-listing form.
"""
import re
from types import MappingProxyType
from typing import assert_never

from .faults import NamelessError
from .internals import SpecType, Variant, _sanitize_help, _sanitize_long, _sanitize_short
from .utils import *


class ShortLong(Variant, closed=True):
    """
    Name identity of a flag or argument: short letter, long word, or both.
    """
    __ranks__ = MappingProxyType({
        "short": 0,
        "long": 1,
        "both": 2,
    })

    @classmethod
    def from_named(cls, named, /):
        """
        Convert a Named alias collection, selecting its first short and first long alias.

        Raises
        - NamelessError: the collection has neither a short nor a long alias.
        """
        if not isinstance(named, Named):
            raise TypeError("from_named() argument must be a named")
        match named.short, named.long:
            case (), ():
                raise NamelessError(
                    "named should have either short or long name",
                    hint="give the item at least one '-c' or '--name' alias",
                    named=named,
                )
            case (), (long, *_):
                return Long(long)
            case (short, *_), ():
                return Short(short)
            case (short, *_), (long, *_):
                return Both(short, long)

    def full_width(self):
        match self:
            case Short():
                return 2
            case Long(long) | Both(_, long):
                return 6 + len(long)
            case _:
                assert_never(self)

    def render(self, expanded=False, /):
        """
        Render the compact (usage) or expanded (help listing) form of this name.
        """
        if expanded:
            match self:
                case Short(short):
                    return f"-{short}"
                case Long(long):
                    return f"    --{long}"
                case Both(short, long):
                    return f"-{short}, --{long}"
        else:
            match self:
                case Short(short) | Both(short, _):
                    return f"-{short}"
                case Long(long):
                    return f"--{long}"
        assert_never(self)

    def __str__(self):
        return self.render()

    def __format__(self, spec):
        match spec:
            case "":
                return self.render()
            case "#":
                return self.render(True)
            case _:
                raise ValueError(f"invalid format specifier {spec!r} for {type(self).__typename__}")


class Short(ShortLong, final=True):
    __introspectable__ = ("short",)

    def __new__(cls, short, /):
        self = super().__new__(cls)
        self._short = _sanitize_short(cls, short)
        return self


class Long(ShortLong, final=True):
    __introspectable__ = ("long",)

    def __new__(cls, long, /):
        self = super().__new__(cls)
        self._long = _sanitize_long(cls, long)
        return self


class Both(ShortLong, final=True):
    __introspectable__ = ("short", "long")

    def __new__(cls, short, long, /):
        self = super().__new__(cls)
        self._short = _sanitize_short(cls, short)
        self._long = _sanitize_long(cls, long)
        return self


class Named(metaclass=SpecType):
    """
    Alias collection of a named item, as supplied by the combinator layer.

    Parameters
    - names: zero or more str
      Shell-style aliases, "-c" (short) or "--name" (long). Order is kept and
      duplicates are allowed; only the first of each kind is ever displayed.
    - env: Unset | str
      Environment variable bound to the item (shown in the help listing).
    - help: Unset | None | str | Text
      Help text of the item.

    Raises
    - TypeError: a name is not a string, or env is not a string.
    - ValueError: a name is neither "-c" nor "--word", or env is empty.
    """
    __introspectable__ = (
        "short",
        "long",
        "env",
        "help",
    )

    def __new__(cls, *names, env=Unset, help=Unset):
        shorts, longs = [], []
        for name in names:
            if not isinstance(name, str):
                raise TypeError(f"{cls.__typename__} names must be strings")
            elif match := re.fullmatch(r"--(.+)", name := name.strip()):
                longs.append(_sanitize_long(cls, match.group(1)))
            elif match := re.fullmatch(r"-(.)", name):
                shorts.append(_sanitize_short(cls, match.group(1)))
            else:
                raise ValueError(f"{cls.__typename__} names must look like '-c' or '--name', got {name!r}")

        if not isinstance(env, str | Unset | None):
            raise TypeError(f"{cls.__typename__} 'env' must be a string")
        elif isinstance(env, str) and not (env := env.strip()):
            raise ValueError(f"{cls.__typename__} 'env' cannot be empty")

        self = super().__new__(cls)
        self._short = tuple(shorts)
        self._long = tuple(longs)
        self._env = coalesce(env)
        self._help = _sanitize_help(cls, help)
        return self

    def item(self, metavar=Unset, /):
        """
        Build the item described by these aliases.

        Without a metavar this is a Flag (the bound env, if any, is not shown
        for flags); with a metavar it is an Argument carrying env and help.

        Raises
        - NamelessError: there is neither a short nor a long alias.
        """
        from .items import Argument, Flag

        if metavar is Unset:
            return Flag(self, help=self.help)
        return Argument(self, metavar, env=self.env, help=self.help)


__all__ = (
    "ShortLong",
    "Short",
    "Long",
    "Both",
    "Named",
)
