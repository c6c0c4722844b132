r"""
Argbox arguments: bindings between a trigger and what happens when it matches.

Overview
- Arg represents the parsing of a single *argument*, in the widest sense: a flag
  (-f), an option taking a value (--env production), a command word, or the
  positional/rest slot of a CLI.
- Every Arg holds exactly one *runner*: a callable (or coroutine function)
  invoked as runner(cli, parser) each time the argument matches. The runner pulls
  any extra tokens it needs from the parser.
- expects_value tells the dispatcher to advance with advance_as_value() after a
  match, so that '-ovalue' hands 'value' to '-o' instead of peeling '-v', '-a', ...

Runner registration
- set_runner(runner): raw form, runner(cli, parser).
- accept(runner): runner(cli), immediately.
- do(runner): runner(cli), deferred until every argument was parsed.
- accept_value(runner): runner(value, cli) with a required value.
- accept_optional_value(runner): runner(value | None, cli) with an '='-joined value.
- command(callback): callback(cli), immediately.

Builders (each returns the Box the runner writes into)
- string():       required single value             → Box[str] (empty when absent)
- maybe_string(): optional '='-joined value         → Box[str | bool] (False / True / value)
- strings():      repeatable value                  → Box[list[str]] (defaults to [])
- boolean():      presence-only flag                → Box[bool] (defaults to False)
- count():        repeatable presence-only flag     → Box[int] (defaults to 0)

Quick example:
    >>> cli = CLI()
    >>> env = cli.on("--env", "-e").string()
    >>> verbose = cli.on("-v").count()
    >>> invoke(cli, ["-vv", "--env=production"])
    >>> env.get(), verbose.get()
    ('production', 2)
"""
import functools
import inspect
import operator

from .boxes import Box
from .faults import DuplicateRunnerError, UnexpectedArgumentError
from .utils import Unset, rename


class Arg:
    """
    A single argument binding: one runner, an expects_value marker and,
    when built through a builder, the Box it fills.
    """

    def __init__(self):
        self.expects_value = False
        self._runner = Unset

    @property
    def runner(self):
        """
        The registered runner, or None when nothing was registered yet.
        """
        return None if self._runner is Unset else self._runner

    def set_runner(self, runner, /):
        """
        Define the runner for the argument. Only a single runner can be defined.
        """
        if not callable(runner):
            raise TypeError("set_runner() argument must be callable")
        if self._runner is not Unset:
            raise DuplicateRunnerError("duplicate runner configured")
        self._runner = runner

    def accept(self, runner, /):
        """
        Invoke runner(cli) immediately when the argument is given. This can be
        used to tweak the CLI object while parsing is still going on.
        """
        self.set_runner(rename(lambda cli, parser: runner(cli), "accept"))

    def do(self, runner, /):
        """
        Invoke runner(cli) deferred: after all argument parsing has occurred.
        """
        self.set_runner(rename(lambda cli, parser: cli.do(runner), "do"))

    def accept_value(self, runner, /):
        """
        Invoke runner(value, cli) immediately when the argument is given a value.
        """
        self.expects_value = True

        @rename("accept_value")
        def wrapper(cli, parser):
            value = parser.read_value()
            return runner(value, cli)

        self.set_runner(wrapper)

    def accept_optional_value(self, runner, /):
        """
        Invoke runner(value, cli) where value is None unless an explicit
        '=' value was given (e.g. -d=5).
        """
        self.expects_value = True

        @rename("accept_optional_value")
        def wrapper(cli, parser):
            value = parser.read_optional_value()
            return runner(value, cli)

        self.set_runner(wrapper)

    def command(self, callback, /):
        """
        Declare the argument as a command: callback(cli) runs when matched.
        """
        @rename("command")
        def wrapper(cli, parser):
            return callback(cli)

        self.set_runner(wrapper)

    async def process(self, cli, parser, /):
        """
        Run the registered runner once, awaiting it when it is asynchronous.

        Raises
        - UnexpectedArgumentError: no runner was registered.
        """
        if self._runner is Unset:
            raise UnexpectedArgumentError("unexpected argument")

        result = self._runner(cli, parser)
        if inspect.isawaitable(result):
            await result

    def string(self):
        """
        Declare an option which takes a value. The box is empty when the
        argument is absent, and passing it twice is a duplicate.
        """
        box = Box.empty()
        self.accept_value(lambda value, cli: box.set_content(value))
        return box

    def maybe_string(self):
        """
        Declare an option which takes an optional value. The box holds:

        - False, when the argument was not present
        - True, when the argument was present (e.g. `-d`)
        - str, when the argument was present with a value (e.g. `-d=5`)

        Only an explicit '=' counts as a value: in `-d foo` the `foo` is parsed
        separately.
        """
        box = Box.with_default(False)
        self.accept_optional_value(lambda value, cli: box.set_content(True if value is None else value))
        return box

    def strings(self):
        """
        Declare an option which can be passed multiple times. The box holds the
        list of all values, in order.
        """
        box = Box.with_default([])
        self.accept_value(lambda value, cli: box.mutate(lambda values: values.append(value)))
        return box

    def boolean(self):
        """
        Declare a flag which can be passed once. The box holds True when it was
        present and False otherwise.
        """
        box = Box.with_default(False)
        self.set_runner(rename(lambda cli, parser: box.set_content(True), "boolean"))
        return box

    def count(self):
        """
        Declare a flag which can be passed multiple times. The box holds how many
        times it was present (defaulting to 0).
        """
        box = Box.with_default(0)
        self.set_runner(rename(lambda cli, parser: box.update(lambda count: count + 1), "count"))
        return box

    def __rich_repr__(self):
        yield "expects_value", self.expects_value
        yield "runner", getattr(self.runner, "__name__", None)

    def __repr__(self):
        return f"arg({
            ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
        })"


__all__ = (
    "Arg",
)
