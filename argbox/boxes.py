"""
Argbox boxes: single-slot accumulators for parsed arguments.

A Box stores the value bound to one argument. It starts *pending* and ends up
either *filled* (it holds a value) or *empty* (the argument is absent and has no
default). The transition happens once, either through a direct write or lazily,
on first read, through the default handler given at construction.

Lazy resolution lets a program declare every box before parsing starts, without
knowing whether the corresponding trigger will ever be matched.

Derived boxes
- box.map(fn): a new box holding fn(value), empty when the source is empty.
- box.or_(fallback) / box | fallback: a new box holding fallback when the source is empty.
Derived boxes resolve when first read, so they always observe the final state of
their source.

Errors
- DuplicateArgumentError: set_content() on a filled box.
- RequiredArgumentMissingError: get() on an empty box.
"""
import enum
import functools
import operator

from .faults import DuplicateArgumentError, RequiredArgumentMissingError
from .logger import logger
from .utils import mirror


class State(enum.Enum):
    PENDING = "pending"
    FILLED = "filled"
    EMPTY = "empty"


class Box:
    """
    Single-slot container with lazy default resolution.

    Parameters
    - handler: callable receiving the box; must leave it filled or empty.
      It runs at most once, the first time a pending box is read.
    """
    state = mirror("state")

    def __init__(self, handler, /):
        if not callable(handler):
            raise TypeError("Box() argument must be callable")
        self._handler = handler
        self._state = State.PENDING
        self._content = None

    @classmethod
    def empty(cls):
        """
        Create a box which resolves to empty when never written.
        """
        return cls(lambda box: box.set_empty())

    @classmethod
    def with_default(cls, content, /):
        """
        Create a box which resolves to content when never written.
        """
        return cls(lambda box: box.set_content(content))

    def set_content(self, content, /):
        if self._state is State.FILLED:
            raise DuplicateArgumentError("duplicate argument")
        self._state = State.FILLED
        self._content = content

    def set_empty(self):
        self._state = State.EMPTY
        self._content = None

    def get(self):
        self._resolve()
        if self._state is State.EMPTY:
            raise RequiredArgumentMissingError("argument required")
        return self._content

    @property
    def is_empty(self):
        self._resolve()
        return self._state is State.EMPTY

    def update(self, reducer, /):
        """
        Replace the content with reducer(content).
        """
        self._content = reducer(self.get())

    def mutate(self, mutator, /):
        """
        Call mutator(content) for in-place changes (e.g. appending to a list).
        """
        mutator(self.get())

    def map(self, mapper, /):
        """
        Derive a box holding mapper(content), empty when this box is empty.
        """
        def handler(box):
            if self.is_empty:
                box.set_empty()
            else:
                box.set_content(mapper(self.get()))
        return type(self)(handler)

    def or_(self, content, /):
        """
        Derive a box holding content when this box is empty.
        """
        return type(self)(lambda box: box.set_content(content if self.is_empty else self.get()))

    def __or__(self, content, /):
        return self.or_(content)

    def _resolve(self):
        if self._state is State.PENDING:
            self._handler(self)
            if self._state is State.PENDING:
                raise TypeError("box default handler did not resolve the box")
            logger.debug("Resolved pending box to %s", self._state.value)

    def __rich_repr__(self):
        yield "state", self._state.value
        if self._state is State.FILLED:
            yield "content", self._content

    def __repr__(self):
        return f"box({
            ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
        })"


__all__ = (
    "Box",
)
