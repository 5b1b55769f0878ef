"""
Compass meta leaves: how an item enters a usage grammar.

The grammar tree itself (sequences, alternatives, repetitions) belongs to the
combinator layer. This module only provides the two leaves an item can become:

- Single(item): a mandatory occurrence, rendered as the item's compact form.
- Optional(meta): an optional occurrence, rendered in square brackets (or not
  at all when the wrapped leaf renders empty, as a decoration does).

Both are produced by Item.required(...).
"""
from .internals import SpecType


class Meta(metaclass=SpecType):
    """
    Base of the usage-grammar leaves.
    """

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return all(getattr(self, name) == getattr(other, name) for name in type(self).__introspectable__)

    def __hash__(self):
        return hash((type(self), *(getattr(self, name) for name in type(self).__introspectable__)))


class Single(Meta):
    __introspectable__ = ("item",)

    def __new__(cls, item, /):
        from .items import Item

        if not isinstance(item, Item):
            raise TypeError(f"{cls.__typename__} must wrap an item")
        self = super().__new__(cls)
        self._item = item
        return self

    def __str__(self):
        return str(self.item)


class Optional(Meta):
    __introspectable__ = ("meta",)

    def __new__(cls, meta, /):
        if not isinstance(meta, Meta):
            raise TypeError(f"{cls.__typename__} must wrap a meta")
        self = super().__new__(cls)
        self._meta = meta
        return self

    def __str__(self):
        return f"[{inner}]" if (inner := str(self.meta)) else ""


__all__ = (
    "Meta",
    "Single",
    "Optional",
)
