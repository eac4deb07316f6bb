"""
Rigging faults (errors and warnings) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every issue the registry and
  both parsers can report. Codes are grouped by domain to keep logs/searches predictable.
- ConfigException / ConfigWarning: base types that carry message + options and know
  how to render themselves in a friendly, lowercased, actionable way.
- trigger(): central entry point to surface any fault (respecting shell/fancy/colorful).
- getdoc(): optional description lookup for a code from the host application.

Propagation
- Parsing is fail-fast: the first fault raised stops token/character consumption.
- Every fault names the offending option in options["input"] when one is involved;
  config-file faults also carry options["line"].
- Outside shell mode, exceptions are raised and warnings go through warnings.warn.
  In shell mode they are printed to stderr via rich and errors exit with status 1.
"""
import inspect
import sys
import warnings
from abc import ABC
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
    - lookups and queries (211xx)
      • UNKNOWN_OPTION, NO_PARAMETER, OPTION_NOT_SPECIFIED,
        INVALID_PARAMETER_TYPE, WRONG_TYPE_CAST
    - arguments (212xx)
      • INVALID_ARGUMENT, OPTION_DOES_NOT_ACCEPT_ARGUMENT, MISSING_ARGUMENT_FOR_OPTION
    - config files (213xx)
      • INVALID_CONFIG_FILE, CONFIG_FILE_NOT_FOUND
    - warnings (22xxx)
      • EMPTY_INLINE_VALUE

    normalize() allows host remapping to custom labels while keeping code-stability.
    """
    # --- lookup/query errors (211xx) ---
    UNKNOWN_OPTION                  = 21101
    NO_PARAMETER                    = 21102
    OPTION_NOT_SPECIFIED            = 21103
    INVALID_PARAMETER_TYPE          = 21104
    WRONG_TYPE_CAST                 = 21105

    # --- argument errors (212xx) ---
    INVALID_ARGUMENT                = 21201
    OPTION_DOES_NOT_ACCEPT_ARGUMENT = 21202
    MISSING_ARGUMENT_FOR_OPTION     = 21203

    # --- config file errors (213xx) ---
    INVALID_CONFIG_FILE             = 21301
    CONFIG_FILE_NOT_FOUND           = 21302

    # --- warnings (22xxx) ---
    EMPTY_INLINE_VALUE              = 22101

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _render(fault, palette, title_style, message_style):
    """
    shared rich rendering for exceptions and warnings.
    """
    main = __import__("__main__")
    options = fault.options
    colorful = options.get("colorful", True)
    fancy = options.get("fancy", False)

    styles = defaultdict(str, palette | getattr(main, "__styles__", {}))

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

    prog = text(getattr(main, "__prog__", options.get("prog") or "rigging"), styler("prog-name"))

    code = options.get("code")
    header = Text.assemble(
        "[ ",
        prog,
        " — ",
        text(code.normalize() if code is not None else "?", styler("code")),
        " | ",
        text(str(options.get("title", type(fault).__name__)).title(), styler(title_style)),
        " ]"
    )
    message = text(fault.message, styler(message_style))
    parts = [message]
    if hint := options.get("hint"):
        parts.append(Text.assemble(text(" → ", styler("hint-arrow")), text(hint, styler("hint"))))

    if fancy:
        return Panel(Group(*parts), title=header, title_align="left", width=console.width - 4)

    return Group(header, *parts)


class ConfigException(Exception):
    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        self.message = message
        self.options = MappingProxyType(options)

    def __rich__(self):
        return _render(self, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        }, "error-title", "error-message")

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class UnknownOptionError(ConfigException): ...
class NoParameterError(ConfigException): ...
class OptionNotSpecifiedError(NoParameterError): ...
class InvalidParameterTypeError(ConfigException): ...
class WrongTypeCastError(InvalidParameterTypeError): ...
class InvalidArgumentError(ConfigException): ...
class OptionDoesNotAcceptArgumentError(ConfigException): ...
class MissingArgumentError(ConfigException): ...
class InvalidConfigFileError(ConfigException): ...
class ConfigFileNotFoundError(ConfigException): ...


class ConfigWarning(ABC, Warning):
    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        self.message = message
        self.options = MappingProxyType(options)

    def __rich__(self):
        return _render(self, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #FFB400",  # amber fault code for warnings
            "warning-title": "bold #FFC2E0",  # softer pinky title for warnings

            # body
            "warning-message": "#D6D6DE",  # slightly lighter gray body
            "hint-arrow": "#B8EFAF dim",  # softer green arrow
            "hint": "italic #B8EFAF",  # softer green hint text
        }, "warning-title", "warning-message")

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            return warnings.warn(self, stacklevel=len(inspect.stack()))
        console.print(self)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class EmptyInlineValueWarning(ConfigWarning): ...


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into the fault via __replace__(**options) before triggering.
    - in shell mode, rendering happens via rich console; otherwise, exceptions are raised
      and warnings are emitted through the warnings machinery.

    typical options
    - prog, shell, fancy, colorful, title, code, hint, docs, and any other context
      the reporter may want to show (input, line, argument, ...).
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

    lookup
    - the host application may expose a __docs__ mapping in __main__ where keys
      are FaultCode instances and values are short documentation strings.
    - when not found, returns None (renderers treat docs as optional).
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "ConfigException",
    "UnknownOptionError",
    "NoParameterError",
    "OptionNotSpecifiedError",
    "InvalidParameterTypeError",
    "WrongTypeCastError",
    "InvalidArgumentError",
    "OptionDoesNotAcceptArgumentError",
    "MissingArgumentError",
    "InvalidConfigFileError",
    "ConfigFileNotFoundError",
    "ConfigWarning",
    "EmptyInlineValueWarning",
    "FaultCode",
    "trigger",
    "getdoc",
)
