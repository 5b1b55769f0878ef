"""
Compass faults and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every fault the
  rendering engine can raise. Codes are grouped by domain so logs and
  searches stay predictable.
- LayoutException: base type carrying message + options, able to render
  itself in a friendly, lowercased, actionable way through rich.

Fault classes
- NamelessError: a name identity was requested from an alias set that has
  neither a short nor a long alias. Programmer error, never a user condition.
- MissingWidthError: expanded rendering was requested without a column width.
- NarrowColumnError: the supplied column width is below the natural width of
  the item. Indicates a bug in the width computation step of the caller.

Displayable states (an unset or non-utf8 environment variable) are NOT faults:
they are rendered as text by the item layer and never raised.
"""
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset, coalesce


class FaultCode(IntEnum):
    """
    canonical fault codes used across the layout engine (stable identifiers).

    grouping
    - naming (2110x)
      • NAMELESS_IDENTITY
    - rendering contract (2111x)
      • MISSING_COLUMN_WIDTH, NARROW_COLUMN
    """
    # --- naming errors (21xxx) ---
    NAMELESS_IDENTITY           = 21101

    # --- rendering contract errors (21xxx) ---
    MISSING_COLUMN_WIDTH        = 21111
    NARROW_COLUMN               = 21112

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class LayoutException(Exception):
    """
    base of every compass fault.

    subclasses declare a stable `code` and a short `title`; instances carry
    the message and free-form options (hint, colorful, fancy, and any context
    such as the offending item or width).
    """
    code = Unset
    title = Unset

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(coalesce(message, ""))
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return coalesce(self.message, "")

    def __rich__(self):
        main = __import__("__main__")

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white library name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        } | getattr(main, "__styles__", {}))

        colorful = self.options.get("colorful", True)

        def styler(style):
            return styles[style] if colorful else ""

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            if isinstance(fragment, Text):
                return fragment
            return Text(str(fragment), style)

        header = Text.assemble(
            "[ ",
            text(getattr(main, "__prog__", "compass"), styler("prog-name")),
            " — ",
            text(self.code.normalize() if self.code else "", styler("code")),
            " | ",
            text(coalesce(self.title, "fault").title(), styler("error-title")),
            " ]"
        )
        message = text(self.message, styler("error-message"))
        renders = [message]
        if hint := self.options.get("hint"):
            renders.append(Text.assemble(text(" → ", styler("hint-arrow")), text(hint, styler("hint"))))

        if self.options.get("fancy", False):
            return Panel(Group(*renders), title=header, title_align="left")

        return Group(header, *renders)


class NamelessError(LayoutException, TypeError):
    code = FaultCode.NAMELESS_IDENTITY
    title = "nameless identity"


class MissingWidthError(LayoutException, TypeError):
    code = FaultCode.MISSING_COLUMN_WIDTH
    title = "missing column width"


class NarrowColumnError(LayoutException, ValueError):
    code = FaultCode.NARROW_COLUMN
    title = "narrow column"


__all__ = (
    "FaultCode",
    "LayoutException",
    "NamelessError",
    "MissingWidthError",
    "NarrowColumnError",
)
