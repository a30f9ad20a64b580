"""
Cardinals faults (errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every fault, grouped
  by domain so logs and searches stay predictable.
- ArgumentFault: base type carrying a message plus immutable options; it
  knows how to render itself with rich and how to surface (raise or print).
- Three families below it:
  • ConfigurationError: setup mistakes found while declaring arguments.
  • ParseError: user-input problems found while binding tokens.
  • ArgumentLookupError: queries for names or indices never registered.
- trigger(): central entry point to surface a fault with runtime options.
- getdoc(): optional description lookup for a code from the host application.

Propagation
- Configuration and lookup faults are programmer mistakes. They are raised
  where they are found and are expected to abort program construction.
- Parse faults are raised to the caller of Arguments.parse_args(), who may
  hand them to trigger(..., shell=True) for a friendly report.

Options understood by the renderer
- title, code, hint, docs: header and footer copy.
- command: owning command name, used as program label fallback.
- shell, fancy, colorful, deferred, ratio: presentation switches.
"""
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping (by high-level domain)
    - configuration (211xx)
      • EMPTY_ARGUMENT_NAME, INVALID_ARGUMENT_NAME, DUPLICATED_ARGUMENT,
        ARGUMENT_AFTER_ARRAYED, REQUIRED_AFTER_OPTIONAL, SEALED_ARGUMENT
    - parsing (221xx)
      • INVALID_ARGUMENT_VALUE, MISSING_ARGUMENT, TOO_MANY_ARGUMENTS
    - lookup (231xx)
      • UNKNOWN_ARGUMENT, ARGUMENT_INDEX_OUT_OF_RANGE

    normalize() lets a host remap codes to its own labels.
    """
    # --- configuration errors (21xxx) ---
    EMPTY_ARGUMENT_NAME         = 21101
    INVALID_ARGUMENT_NAME       = 21102
    DUPLICATED_ARGUMENT         = 21103
    ARGUMENT_AFTER_ARRAYED      = 21104
    REQUIRED_AFTER_OPTIONAL     = 21105
    SEALED_ARGUMENT             = 21106

    # --- parse errors (22xxx) ---
    INVALID_ARGUMENT_VALUE      = 22101
    MISSING_ARGUMENT            = 22102
    TOO_MANY_ARGUMENTS          = 22103

    # --- lookup errors (23xxx) ---
    UNKNOWN_ARGUMENT            = 23101
    ARGUMENT_INDEX_OUT_OF_RANGE = 23102

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class ArgumentFault(Exception):
    """
    Base fault: a message plus a read-only mapping of options.

    Subclasses only name the failure; every contextual detail (argument,
    position, tokens, code, hint, ...) travels in options so faults can be
    copied with overrides and rendered uniformly.
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(*(() if message is Unset else (message,)))
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return "" if self.message is Unset else self.message

    @property
    def code(self):
        return self.options.get("code")

    def __rich__(self):
        main = __import__("__main__")
        colorful = self.options.get("colorful", True)
        fancy = self.options.get("fancy", False)

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
            "docs": "underline #00E5FF dim",
        } | getattr(main, "__styles__", {}))

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

        prog = text(getattr(main, "__prog__", self.options.get("command") or "cardinals"), styler("prog-name"))
        code = self.options.get("code")

        header = Text.assemble(
            "[ ",
            prog,
            " — ",
            text(code.normalize() if code is not None else "?", styler("code")),
            " | ",
            text(str(self.options.get("title", type(self).__name__)).title(), styler("error-title")),
            " ]"
        )
        message = text(str(self), styler("error-message"))
        parts = [message]
        if hint := self.options.get("hint"):
            parts.append(Text.assemble(text(" → ", styler("hint-arrow")), text(hint, styler("hint"))))
        if docs := self.options.get("docs"):
            parts.append(text(docs, styler("docs")))

        if fancy:
            width = console.width - 4
            try:
                width = int(width * self.options["ratio"])
            except KeyError:
                width = None
            return Panel(Group(*parts), title=header, title_align="left", width=width)

        return Group(header, *parts)

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from self.__cause__
        console.print(self)
        if self.options.get("deferred", False):
            return
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        """
        Copy the fault with some options overridden; the cause is kept.
        """
        assert not unused, "unused arguments are not allowed"
        replaced = type(self)(self.message, **{**self.options, **overrides})
        replaced.__cause__ = self.__cause__
        return replaced


# --- configuration (registration time) ---
class ConfigurationError(ArgumentFault, ValueError): ...
class EmptyArgumentNameError(ConfigurationError): ...
class InvalidArgumentNameError(ConfigurationError): ...
class DuplicatedArgumentError(ConfigurationError): ...
class ArgumentAfterArrayedError(ConfigurationError): ...
class RequiredAfterOptionalError(ConfigurationError): ...
class SealedArgumentError(ConfigurationError): ...

# --- parsing (bind time) ---
class ParseError(ArgumentFault): ...
class InvalidArgumentValueError(ParseError): ...
class MissingArgumentError(ParseError): ...
class TooManyArgumentsError(ParseError): ...

# --- lookup (queries) ---
class ArgumentLookupError(ArgumentFault, LookupError): ...
class UnknownArgumentError(ArgumentLookupError, KeyError): ...
class ArgumentIndexError(ArgumentLookupError, IndexError): ...


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see ArgumentFault).
    - options are merged into a copy of the fault via __replace__(**options)
      before triggering; the original fault is left untouched.
    - in shell mode the copy is rendered on the rich console (and the process
      exits with status 1 unless deferred); otherwise it is raised.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    fault.__replace__(**options).__trigger__()


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    the host application may expose a __docs__ mapping in __main__ where keys
    are FaultCode instances and values are short documentation strings. when
    not found, returns None (renderers treat docs as optional).
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "ArgumentFault",
    "ConfigurationError",
    "EmptyArgumentNameError",
    "InvalidArgumentNameError",
    "DuplicatedArgumentError",
    "ArgumentAfterArrayedError",
    "RequiredAfterOptionalError",
    "SealedArgumentError",
    "ParseError",
    "InvalidArgumentValueError",
    "MissingArgumentError",
    "TooManyArgumentsError",
    "ArgumentLookupError",
    "UnknownArgumentError",
    "ArgumentIndexError",
    "FaultCode",
    "trigger",
    "getdoc",
)
