r"""
Argbox incremental tokenizer.

Overview
- ArgParser walks a raw argument list one logical token at a time. It is built
  from the argv sequence, immediately classifies the first token, and only moves
  when the consumer asks it to (advance() / advance_as_value()).
- Token is an immutable snapshot of the current classification.
- tokenize(argv) yields every token of an argv using plain advance.

Classification (per fresh raw argument)
- '--'        → enters the rest region for good; the next raw argument is the first
                rest token. Everything in the rest region is passed through verbatim
                (is_rest=True, is_flag=False, is_value=False), '--' included.
- '--name'    → flag. '--name=value' emits '--name' (flag) then 'value' (value).
- '-abc'      → short-flag cluster. Emits '-a', then each advance() peels '-b', '-c'.
                An '=' inside the cluster ends it: '-abc=def' → '-a', '-b', '-c', 'def'.
- '-'         → plain token (the usual "stdin" spelling, there is no letter to peel).
- anything else → plain token (is_flag=False, is_value=False).

is_value is only ever True for tokens that can *only* be a value: the tail of an
'=' split, or the remainder of a short-flag cluster read with advance_as_value().

Cursor states
- State.DEFAULT: the next advance reads a fresh raw argument.
- State.DASH:    the short-flag buffer still holds unpeeled characters.
- State.VALUE:   an '=' tail is staged and becomes the next token.

Quick example:
    >>> parser = ArgParser(["-abcdef"])
    >>> parser.current
    '-a'
    >>> parser.advance(); parser.advance(); parser.current
    '-c'
    >>> parser.advance_as_value(); parser.current, parser.is_value
    ('def', True)
"""
import enum
import functools
import operator
from collections.abc import Iterable
from typing import NamedTuple

from .faults import MissingValueError, UnexpectedFlagError
from .utils import mirror


class State(enum.Enum):
    """
    explicit cursor state of an ArgParser.
    """
    DEFAULT = "default"
    DASH = "dash"
    VALUE = "value"


class Token(NamedTuple):
    """
    snapshot of one classified token.
    """
    text: str
    is_flag: bool
    is_value: bool
    is_rest: bool

    def __rich_repr__(self):
        yield self.text
        yield "is_flag", self.is_flag, False
        yield "is_value", self.is_value, False
        yield "is_rest", self.is_rest, False


class ArgParser:
    """
    Incremental cursor over a raw argument list.

    Read-only views
    - current: text of the current token, None once the input is exhausted.
    - is_flag / is_value / is_rest: classification of the current token.
    - index: 0-based position of the raw argument the cursor is on.
    - state: the cursor State (see module docs).

    The parser never rejects input. Only read_value() can fail, and only because
    of what the caller asked for.
    """
    current = mirror("current")
    index = mirror("index")
    state = mirror("state")
    is_flag = mirror("is_flag")
    is_value = mirror("is_value")
    is_rest = mirror("is_rest")

    def __init__(self, argv):
        if isinstance(argv, str) or not isinstance(argv, Iterable):
            raise TypeError("ArgParser() argument must be an iterable of strings")
        self._argv = tuple(argv)
        if not all(isinstance(item, str) for item in self._argv):
            raise TypeError("ArgParser() argument must be an iterable of strings")

        self._index = 0
        self._current = None
        self._state = State.DEFAULT
        self._buffer = ""
        self._is_rest = False
        self._is_flag = False
        self._is_value = False

        self._process(self._fetch(self._index))

    @property
    def is_done(self):
        """
        True when there is no current token.
        """
        return self._current is None

    @property
    def token(self):
        """
        Token snapshot of the current classification (None when done).
        """
        if self._current is None:
            return None
        return Token(self._current, self._is_flag, self._is_value, self._is_rest)

    def advance(self):
        """
        Move onto the next token (plain advance).
        """
        match self._state:
            case State.DEFAULT:
                self._index += 1
                self._process(self._fetch(self._index))
            case State.DASH:
                self._handle_dash()
            case State.VALUE:
                self._is_flag = False
                self._is_value = True
                self._current = self._buffer
                self._clear_buffer()

    def advance_as_value(self):
        """
        Same as advance(), but with the goal of reading a value.

        This only differs while a short-flag cluster still has unpeeled letters:
        on '-abc' positioned at '-a', advance() yields '-b' while
        advance_as_value() yields the value 'bc'. In every other state it
        falls back to advance().
        """
        if self._state is State.DASH and not self._buffer.startswith("="):
            self._current = self._buffer
            self._is_flag = False
            self._is_value = True
            self._clear_buffer()
            return

        self.advance()

    def read_value(self):
        """
        Return the current token as a value and advance (plain advance).

        This does not imply is_value is True: a plain positional token is also
        accepted. Only flags and the end of input are refused.

        Raises
        - MissingValueError: there is no current token.
        - UnexpectedFlagError: the current token is a flag.
        """
        current = self._current

        if current is None:
            raise MissingValueError("expected value")
        if self._is_flag:
            raise UnexpectedFlagError("expected value, not flag %r" % current, input=current, index=self._index)

        self.advance()
        return current

    def read_optional_value(self):
        """
        Return the current token and advance only when it can *only* be a value.

        Otherwise returns None and leaves the cursor untouched.
        """
        return self.read_value() if self._is_value else None

    def _fetch(self, index):
        return self._argv[index] if index < len(self._argv) else None

    def _clear_buffer(self):
        self._state = State.DEFAULT
        self._buffer = ""

    def _process(self, string):
        if string is None or self._is_rest:
            self._current = string
            self._is_flag = False
            self._is_value = False
            return

        if string == "--":
            self._is_rest = True
            self._is_flag = False
            self._is_value = False
            self.advance()
            return

        self._is_value = False

        if string.startswith("--"):
            self._is_flag = True

            name, eq, value = string.partition("=")
            self._current = name
            if eq:
                self._state = State.VALUE
                self._buffer = value
            return

        if string.startswith("-") and len(string) > 1:
            self._is_flag = True
            self._state = State.DASH
            self._buffer = string[1:]
            self._handle_dash()
            return

        self._is_flag = False
        self._current = string

    def _handle_dash(self):
        if self._buffer.startswith("="):
            self._is_flag = False
            self._is_value = True
            self._current = self._buffer[1:]
            self._clear_buffer()
        else:
            self._current = "-" + self._buffer[0]

            if len(self._buffer) > 1:
                self._buffer = self._buffer[1:]
            else:
                self._clear_buffer()

    def __rich_repr__(self):
        yield "current", self._current
        yield "is_flag", self._is_flag
        yield "is_value", self._is_value
        yield "is_rest", self._is_rest
        yield "state", self._state

    def __repr__(self):
        return f"arg-parser({
            ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
        })"


def tokenize(argv, /):
    """
    Yield every Token of argv using plain advance.

    Example
    - list(tokenize(["--env=production"])) →
      [Token('--env', True, False, False), Token('production', False, True, False)]
    """
    parser = ArgParser(argv)
    while not parser.is_done:
        yield parser.token
        parser.advance()


__all__ = (
    "State",
    "Token",
    "ArgParser",
    "tokenize",
)
