"""
Argbox faults (errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for all user-facing issues.
  Codes are grouped by domain to keep copy consistent and make logs/searches predictable.
- CommandException: base type that carries message + options and knows how to
  render itself in a friendly, lowercased and actionable way.
- trigger(): central entry point to surface any fault (respecting shell/fancy/colorful).
- getdoc(): optional description lookup for a code from the host application.

Who raises what
- ArgParser.read_value(): MissingValueError, UnexpectedFlagError.
- Box: DuplicateArgumentError, RequiredArgumentMissingError.
- Arg: DuplicateRunnerError, UnexpectedArgumentError.
- CLI dispatch: UnknownFlagError, UnexpectedValueError.

The tokenizer itself never raises: it is total over all input strings.

Integration
- Faults are raised plainly where they happen, with no context but a message.
- The CLI catches them, merges its runtime options plus the offending token and
  position through copy.replace() and calls __trigger__.
- In non-shell mode, exceptions are raised; in shell mode, they are rendered via rich
  and the process exits with status 1.
"""
import copy
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
    canonical fault codes used across the library (stable identifiers).

    grouping (by high-level domain)
    - values (2110x)
      • MISSING_VALUE, UNEXPECTED_FLAG, UNEXPECTED_VALUE
    - boxes (2111x)
      • DUPLICATE_ARGUMENT, REQUIRED_ARGUMENT_MISSING
    - bindings and dispatch (2112x)
      • DUPLICATE_RUNNER, UNEXPECTED_ARGUMENT, UNKNOWN_FLAG

    spacing leaves room for future additions without reshuffling existing codes.
    """
    # --- value errors (2110x) ---
    MISSING_VALUE               = 21101
    UNEXPECTED_FLAG             = 21102
    UNEXPECTED_VALUE            = 21103

    # --- box errors (2111x) ---
    DUPLICATE_ARGUMENT          = 21111
    REQUIRED_ARGUMENT_MISSING   = 21112

    # --- binding/dispatch errors (2112x) ---
    DUPLICATE_RUNNER            = 21121
    UNEXPECTED_ARGUMENT         = 21122
    UNKNOWN_FLAG                = 21123

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _ordinal(number):
    """
    english ordinal for a 1-based position ("first", "second", ..., "21st").
    """
    words = ("first", "second", "third", "fourth", "fifth", "sixth", "seventh", "eighth", "ninth", "tenth")
    if 1 <= number <= len(words):
        return words[number - 1]
    if 10 <= number % 100 <= 20:
        return "%dth" % number
    return "%d%s" % (number, {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th"))


class CommandException(Exception):
    """
    base class for every fault surfaced by argbox.

    options
    - title, code, hint: copy used for rendering; subclasses provide defaults
      through __defaults__ so faults can be raised with a message only.
    - input, index: the offending token and its 0-based raw argument position,
      merged in by the dispatcher.
    - tool, shell, fancy, colorful: runtime options merged in by CLI.trigger().
    """
    __defaults__ = MappingProxyType({
        "title": "command error",
        "hint": "",
    })

    def __init__(self, message, /, **options):
        if not isinstance(message, str):
            raise TypeError("%s() message must be a string" % type(self).__name__)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType({**type(self).__defaults__, **options})

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
            "context": "dim",
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        } | getattr(main, "__styles__", {}))

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            if isinstance(fragment, Text):
                return fragment
            return Text(str(fragment), styles[style])

        tool = self.options.get("tool")
        prog = text(getattr(main, "__prog__", getattr(tool, "name", "argbox")), "prog-name")

        code = self.options.get("code")
        header = Text.assemble(
            "[ ",
            prog,
            " — ",
            text(code.normalize() if isinstance(code, FaultCode) else "-", "code"),
            " | ",
            text(self.options["title"].title(), "error-title"),
            " ]"
        )
        parts = [text(self.message, "error-message")]

        if "input" in self.options:
            where = "%r" % self.options["input"]
            if isinstance(self.options.get("index"), int):
                where += " at %s position" % _ordinal(self.options["index"] + 1)
            parts.append(text("while processing " + where, "context"))
        if self.options["hint"]:
            parts.append(Text.assemble(text(" → ", "hint-arrow"), text(self.options["hint"], "hint")))
        if docs := self.options.get("docs") or (isinstance(code, FaultCode) and getdoc(code)):
            parts.append(text(docs, "context"))

        if fancy:
            return Panel(Group(*parts), title=header, title_align="left")
        return Group(header, *parts)

    def __trigger__(self):
        if not self.options.get("shell"):
            raise self from None
        console.print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides}).with_traceback(self.__traceback__)


class MissingValueError(CommandException):
    __defaults__ = MappingProxyType({
        "title": "missing value",
        "code": FaultCode.MISSING_VALUE,
        "hint": "pass a value after the option (for example: --name value or --name=value)",
    })


class UnexpectedFlagError(CommandException):
    __defaults__ = MappingProxyType({
        "title": "expected value, not flag",
        "code": FaultCode.UNEXPECTED_FLAG,
        "hint": "values starting with '-' must be joined with '=' (for example: --name=-value)",
    })


class UnexpectedValueError(CommandException):
    __defaults__ = MappingProxyType({
        "title": "unexpected value",
        "code": FaultCode.UNEXPECTED_VALUE,
        "hint": "this flag does not take a value; remove everything from '='",
    })


class DuplicateArgumentError(CommandException):
    __defaults__ = MappingProxyType({
        "title": "duplicate argument",
        "code": FaultCode.DUPLICATE_ARGUMENT,
        "hint": "pass this argument only once",
    })


class RequiredArgumentMissingError(CommandException):
    __defaults__ = MappingProxyType({
        "title": "argument required",
        "code": FaultCode.REQUIRED_ARGUMENT_MISSING,
        "hint": "this argument has no default; pass it explicitly",
    })


class DuplicateRunnerError(CommandException):
    __defaults__ = MappingProxyType({
        "title": "duplicate runner",
        "code": FaultCode.DUPLICATE_RUNNER,
        "hint": "an argument accepts a single runner; register a new trigger instead",
    })


class UnexpectedArgumentError(CommandException):
    __defaults__ = MappingProxyType({
        "title": "unexpected argument",
        "code": FaultCode.UNEXPECTED_ARGUMENT,
        "hint": "remove this argument or check the expected usage",
    })


class UnknownFlagError(CommandException):
    __defaults__ = MappingProxyType({
        "title": "unknown flag",
        "code": FaultCode.UNKNOWN_FLAG,
        "hint": "check the spelling, or pass it after '--' to treat it as a plain argument",
    })


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see CommandException).
    - options are merged into the fault via copy.replace() before triggering.
    - in shell mode, rendering happens via rich console; otherwise, exceptions are raised.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    the host application may expose a __docs__ mapping in __main__ where keys
    are FaultCode instances and values are short documentation strings.
    when not found, returns None (renderers treat docs as optional).
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "CommandException",
    "MissingValueError",
    "UnexpectedFlagError",
    "UnexpectedValueError",
    "DuplicateArgumentError",
    "RequiredArgumentMissingError",
    "DuplicateRunnerError",
    "UnexpectedArgumentError",
    "UnknownFlagError",
    "FaultCode",
    "trigger",
    "getdoc",
)
