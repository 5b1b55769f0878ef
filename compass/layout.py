"""
Compass layout: assemble items into a usage synopsis and a help listing.

What this module provides
- column_width(items): the shared column width of a group, i.e. the largest
  natural width (Item.full_width) across its items.
- synopsis(*metas): a one-line usage fragment from usage-grammar leaves.
- Listing: the help body. Items are grouped into sections, each aligned on
  its own column width:

      available positional items:
          <FILE>  file to read

      available options:
          -v, --verbose  talk more
              --color    paint the output

      available commands:
          build, b  compile the project

  str(listing) gives plain text, listing.__rich__() a styled rich Text, and
  listing.show() prints it on a rich console.

Palette keys
- group-label, name, metavar, command, environment, description

Customization
- Define a mapping named __styles__ in __main__ to override any palette entry.
- With colorful=False, styling is suppressed.
"""
from collections import defaultdict

from rich.console import Console
from rich.text import Text

from .items import Item
from .meta import Meta
from .utils import *


def column_width(items, /):
    """
    Return the column width shared by a group of items (0 for an empty group).
    """
    return max((item.full_width() for item in items), default=0)


def synopsis(*metas):
    """
    Join the compact forms of usage-grammar leaves (or bare items), skipping empty ones.
    """
    for meta in metas:
        if not isinstance(meta, Meta | Item):
            raise TypeError("synopsis() arguments must be metas or items")
    return " ".join(rendered for meta in metas if (rendered := str(meta)))


class Listing:
    """
    Help listing of a group of items.

    Parameters
    - items: Iterable[Item]
      Items in display order. Positionals with help, flag-like items (flags,
      arguments, decorations) and commands each go to their own section.
    - environ: Unset | Mapping | Callable
      Environment lookup for bound arguments (see Item.render).
    - colorful: bool
      Apply the palette when rendering through rich.
    """
    __sections__ = (
        ("available positional items", Item.is_positional),
        ("available options", Item.is_flag),
        ("available commands", Item.is_command),
    )

    def __init__(self, items, /, *, environ=Unset, colorful=True):
        items = tuple(items)
        for item in items:
            if not isinstance(item, Item):
                raise TypeError("listing items must be items")
        self.items = items
        self.environ = environ
        self.colorful = bool(colorful)

    def sections(self):
        """
        Yield (label, items, width) for every non-empty section.
        """
        for label, predicate in type(self).__sections__:
            if members := tuple(filter(predicate, self.items)):
                yield label, members, column_width(members)

    def _text(self, styler):
        renders = []
        for label, members, width in self.sections():
            section = Text()
            section.append(label, styler("group-label")).append(":")
            for item in members:
                section.append("\n")
                for fragment, role in item.fragments(True, width, environ=self.environ):
                    section.append(fragment, styler(role) if role else "")
            renders.append(section)
        return Text("\n\n").join(renders)

    def __str__(self):
        return self._text(lambda role: "").plain

    def __rich__(self):
        styles = defaultdict(str, {
            "group-label": "bold #FFFFFF",  # Pure white headers
            "name": "bold #00E6FF",  # CYAN for option names
            "metavar": "bold #FFD600",  # AMBER for parameters
            "command": "bold #36C5F0",  # SKY-BLUE subcommands
            "environment": "italic #737373",  # Dim gray annotation
            "description": "#9CA3AF",  # Muted gray
        } | getattr(__import__("__main__"), "__styles__", {}))

        def styler(style):
            return styles[style] if self.colorful else ""

        return self._text(styler)

    def show(self, console=Unset, /):
        """
        Print the listing on `console` (a fresh stdout Console by default).
        """
        coalesce(console, Console()).print(self)


__all__ = (
    "column_width",
    "synopsis",
    "Listing",
)
