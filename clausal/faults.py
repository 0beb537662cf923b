"""
Clausal faults (errors raised while defining or parsing commands) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing fault.
  Codes are grouped by domain (definition grammar, matching, input) so logs
  and searches stay predictable.
- CommandException: base type that carries a message plus options and knows
  how to render itself in a friendly, lowercased, actionable way through rich.
- ValidationError / DuplicateError / MissingError / UnsupportedError /
  MatchError: the five fault families raised by the public entry points.
- trigger(): surface a fault, raising it (library mode) or printing it and
  exiting (shell mode).

Integration
- The compiler and the matcher raise faults directly; hosts catch a concrete
  class or `match fault.code` to branch on the exact cause.
- A host program may expose __prog__ (program name in headers) and __styles__
  (palette overrides) in __main__.
"""
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping (by high-level domain)
    - matching (1110x/1111x/1112x)
      • UNKNOWN_COMMAND, MISSING_VALUE, PATTERN_MISMATCH
    - definition grammar (1310x/1311x/1312x)
      • MISSING_NAME, DUPLICATE_*, WHITESPACE_NAME, REQUIRED_AFTER_OPTIONAL,
        SECOND_LIST, INVALID_REGEX, UNKNOWN_TOKEN_KIND
    - input validation (1410x)
      • INVALID_INPUT

    spacing leaves room for future additions without reshuffling existing codes.
    """
    # --- matching errors (11xxx) ---
    UNKNOWN_COMMAND             = 11101
    MISSING_VALUE               = 11111
    PATTERN_MISMATCH            = 11121

    # --- definition errors (13xxx) ---
    MISSING_NAME                = 13101
    DUPLICATE_NAME              = 13111
    DUPLICATE_DESCRIPTION       = 13112
    DUPLICATE_REGEX             = 13113
    DUPLICATE_VARIABLE          = 13114
    WHITESPACE_NAME             = 13121
    REQUIRED_AFTER_OPTIONAL     = 13122
    SECOND_LIST                 = 13123
    INVALID_REGEX               = 13124
    UNKNOWN_TOKEN_KIND          = 13125

    # --- input errors (14xxx) ---
    INVALID_INPUT               = 14101

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class CommandException(Exception):
    """
    Base class of every clausal fault.

    Options commonly carried
    - code (FaultCode), title, hint: rendering essentials.
    - input, index, pattern, variable, suggestions: what went wrong and where.
    - shell, colorful, fancy: how trigger() surfaces the fault.
    """

    def __init__(self, message, /, **options):
        assert isinstance(message, str)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    @property
    def code(self):
        return self.options.get("code")

    @property
    def title(self):
        return self.options.get("title", "error")

    @property
    def hint(self):
        return self.options.get("hint")

    def __rich__(self):
        main = __import__("__main__")

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
            "suggestion": "bold #FFD600",  # amber suggested names
        } | getattr(main, "__styles__", {}))

        colorful = self.options.get("colorful", True)
        fancy = self.options.get("fancy", False)

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

        prog = text(getattr(main, "__prog__", self.options.get("prog", "clausal")), styler("prog-name"))
        code = self.code.normalize() if isinstance(self.code, FaultCode) else "?"

        header = Text.assemble(
            "[ ",
            prog,
            " — ",
            text(code, styler("code")),
            " | ",
            text(self.title.title(), styler("error-title")),
            " ]"
        )
        message = text(self.message, styler("error-message"))
        parts = [message]
        if self.hint:
            parts.append(Text.assemble(text(" → ", styler("hint-arrow")), text(self.hint, styler("hint"))))

        if fancy:
            return Panel(Group(*parts), title=header, title_align="left", width=console.width - 4)

        return Group(header, *parts)

    def __trigger__(self):
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class ValidationError(CommandException, ValueError):
    """Malformed, missing or over-length input handed to a public entry point."""


class DuplicateError(CommandException):
    """A name, description, regex or variable collides with one already defined."""


class MissingError(CommandException):
    """A command name or a required value is absent."""


class UnsupportedError(CommandException):
    """
    Grammar the compiler does not accept, or a token the matcher cannot place.

    For unknown tokens, suggestions lists registered command names the user
    probably meant (possibly empty). Grammar errors carry an empty list.
    """

    @property
    def suggestions(self):
        return list(self.options.get("suggestions", ()))

    def __rich__(self):
        render = super().__rich__()
        if not self.suggestions:
            return render
        colorful = self.options.get("colorful", True)
        style = getattr(__import__("__main__"), "__styles__", {}).get("suggestion", "bold #FFD600")
        names = Text(", ").join(Text(name, style if colorful else "") for name in self.suggestions)
        return Group(render, Text.assemble("   did you mean: ", names))


class MatchError(CommandException):
    """A consumed value does not match the definition's regex."""


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see CommandException).
    - options are merged into the fault via __replace__(**options) before triggering.
    - shell=True prints the rendered fault to stderr and exits with status 1;
      otherwise the fault is raised.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    fault.__replace__(**options).__trigger__()


__all__ = (
    "CommandException",
    "ValidationError",
    "DuplicateError",
    "MissingError",
    "UnsupportedError",
    "MatchError",
    "FaultCode",
    "trigger",
)
