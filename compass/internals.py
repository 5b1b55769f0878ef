"""
Compass internals: the machinery behind the closed name and item unions.

Overview
- SpecType metaclass
  • Derives __typename__ from the class name (camel-case split with hyphens).
  • Exposes every name listed in __introspectable__ as a read-only property
    (see mirror()) and as __match_args__ for structural pattern matching.
  • Provides stable __repr__/__rich_repr__ implementations.
  • closed=True: the class only accepts variants defined in its own module.
  • final=True: the class cannot be subclassed at all.

- Variant
  • Base of every union member. Equality, hashing and ordering are driven by
    an explicit discriminant table (__ranks__, keyed by __typename__) declared
    on the union base, followed by the introspectable fields in declaration
    order. An absent (None) field sorts before a present one.

- Sanitizers
  • _sanitize_metavar, _sanitize_help, _sanitize_short, _sanitize_long validate
    construction metadata and raise TypeError/ValueError prefixed with the
    offending type name.
"""
import functools
import operator
import re
from types import MappingProxyType

from rich.text import Text

from .utils import *


class SpecType(type):
    """
    Metaclass that turns union members into immutable, introspectable values.

    Conventions
    - __typename__ is used in messages and representations.
    - __introspectable__ lists the fields, in declaration order; it also drives
      ordering (see Variant) and pattern matching.
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        introspectable = namespace.get("__introspectable__", ())
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
                "__match_args__": tuple(introspectable),
            } | {
                name: mirror(name) for name in introspectable
            },
        )

        @rename("__repr__")
        def __repr__(self):
            return f"{type(self).__typename__}({', '.join(map(functools.partial(operator.mod, '%s=%r'), self.__rich_repr__()))})"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in type(self).__introspectable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        if options.get("final", False):
            @rename("__init_subclass__")
            def __init_subclass__(cls, **options):  # NOQA: F-841
                raise TypeError(f"type {self.__name__!r} is not an acceptable base type")
            self.__init_subclass__ = classmethod(__init_subclass__)

        elif options.get("closed", False):
            module = self.__module__

            @rename("__init_subclass__")
            def __init_subclass__(cls, **options):  # NOQA: F-841
                # Variants of a closed union live next to their base.
                if cls.__module__ != module:
                    raise TypeError(f"type {self.__name__!r} is a closed union and cannot be extended")
            self.__init_subclass__ = classmethod(__init_subclass__)

        return self


@functools.total_ordering
class Variant(metaclass=SpecType):
    """
    Common base of the union members: value semantics over an explicit order.
    """
    __ranks__ = MappingProxyType({})

    def _sortkey(self):
        cls = type(self)
        return (cls.__ranks__[cls.__typename__], *(
            (0,) if (object := getattr(self, name)) is None else (1, object)
            for name in cls.__introspectable__
        ))

    def _comparable(self, other):
        return isinstance(other, Variant) and type(other).__ranks__ is type(self).__ranks__

    def __eq__(self, other):
        if not self._comparable(other):
            return NotImplemented
        return self._sortkey() == other._sortkey()

    def __lt__(self, other):
        if not self._comparable(other):
            return NotImplemented
        return self._sortkey() < other._sortkey()

    def __hash__(self):
        return hash(self._sortkey())


def _sanitize_metavar(cls, metavar, /):
    """
    Internal: a metavar is a non-empty string, surrounding whitespace trimmed.
    """
    if not isinstance(metavar, str):
        raise TypeError(f"{cls.__typename__} 'metavar' must be a string")
    elif not (metavar := metavar.strip()):
        raise ValueError(f"{cls.__typename__} 'metavar' cannot be empty")
    return metavar


def _sanitize_help(cls, help, /):
    """
    Internal: normalize help text.

    - Unset or None: no help (None).
    - Text: reduced to its plain string.
    - str: kept verbatim, unless empty, which means no help.
    """
    if help is Unset or help is None:
        return None
    if isinstance(help, Text):
        help = help.plain
    if not isinstance(help, str):
        raise TypeError(f"{cls.__typename__} 'help' must be a string")
    return help if help else None


def _sanitize_short(cls, short, /):
    """
    Internal: a short alias is exactly one visible character other than '-'.
    """
    if not isinstance(short, str):
        raise TypeError(f"{cls.__typename__} short name must be a string")
    elif len(short) != 1 or short == "-" or not short.isprintable() or short.isspace():
        raise ValueError(f"{cls.__typename__} short name must be a single visible character, got {short!r}")
    return short


def _sanitize_long(cls, long, /):
    """
    Internal: a long alias is a dash-separated word, without the leading '--'.

    Segments start with a Unicode letter and may include Unicode letters/digits.
    """
    if not isinstance(long, str):
        raise TypeError(f"{cls.__typename__} long name must be a string")
    elif not re.fullmatch(r"[^\W\d_](-?[^\W_]+)*", long):
        raise ValueError(f"{cls.__typename__} long name must be a valid shell-style word, got {long!r}")
    return long


__all__ = (
    "SpecType",
    "Variant",
)
