r"""
Argbox commands: trigger registration and token dispatch.

Overview
- CLI maps trigger names ('--env', '-e', 'build', ...) to Arg bindings, drives an
  ArgParser token by token and hands every match to its binding.
- cli.rest receives positional arguments and everything after '--'.
- cli.do(task) queues deferred tasks, run in order once parsing is complete.
- invoke(cli, argv) is the synchronous entry point.

Dispatch (per current token)
- rest region, or a non-flag that is not a trigger → cli.rest. The cursor is left
  on the token so the rest runner can read it; when the runner consumes nothing the
  dispatcher advances past it.
- unknown flag → UnknownFlagError.
- known trigger → advance_as_value() when the binding expects a value, otherwise
  advance(); a presence-only binding followed by an '=' value is an
  UnexpectedValueError (e.g. '--force=yes').

Runners may be coroutine functions. The cursor is shared mutable state, so every
runner is awaited before the next token is looked at.

Faults
- Every fault aborts the parse. CLI.trigger() merges the runtime options (shell,
  fancy, colorful) and the offending token/position, then raises (shell=False) or
  prints and exits with status 1 (shell=True).

Quick example:
    >>> def setup(cli):
    ...     cli.on("--name", "-n").string()
    ...
    >>> cli = CLI(setup)
    >>> invoke(cli, ["-n", "world"])
"""
import asyncio
import functools
import inspect
import operator
import os
import sys
from collections.abc import Iterable

from .arguments import Arg
from .faults import CommandException, UnknownFlagError, UnexpectedValueError, trigger
from .logger import logger
from .tokens import ArgParser
from .utils import Unset, coalesce


class CLI:
    """
    Registration and dispatch object.

    Parameters
    - setup: optional callable receiving the CLI right after construction.
    - name: program name used when rendering faults (defaults to basename of sys.argv[0]).
    - shell: when True, faults are printed and the process exits with status 1;
      otherwise they are raised.
    - fancy: render faults inside a panel.
    - colorful: colorize rendered faults.
    """

    def __init__(self, setup=None, /, *, name=Unset, shell=False, fancy=False, colorful=True):
        if setup is not None and not callable(setup):
            raise TypeError("CLI() setup must be callable")
        if name is not Unset and (not isinstance(name, str) or not name.strip()):
            raise ValueError("CLI() name must be a non-empty string")

        self.name = coalesce(name, os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else "argbox")
        self.shell = bool(shell)
        self.fancy = bool(fancy)
        self.colorful = bool(colorful)

        self.triggers = {}
        self.rest = Arg()
        self.tasks = []

        if setup is not None:
            setup(self)

    def on(self, *triggers):
        """
        Register one Arg under every given trigger name and return it.
        """
        if not triggers:
            raise TypeError("on() takes at least one trigger")
        for name in triggers:
            if not isinstance(name, str) or not name:
                raise ValueError("on() triggers must be non-empty strings")

        arg = Arg()
        for name in triggers:
            if name in self.triggers:
                logger.debug("Rebinding trigger %r", name)
            self.triggers[name] = arg
        return arg

    def do(self, task, /):
        """
        Queue task(cli) to run after all arguments were parsed.
        """
        if not callable(task):
            raise TypeError("do() argument must be callable")
        self.tasks.append(task)

    async def run(self, argv, /):
        """
        Parse argv, then run the deferred tasks.
        """
        await self.process_args(argv)
        await self.process_tasks()

    async def process_args(self, argv, /):
        parser = ArgParser(argv)
        while not parser.is_done:
            index, current = parser.index, parser.current
            try:
                arg = self._resolve_arg(parser, current)
                if arg is self.rest:
                    cursor = (parser.index, parser.state, parser.current)
                    await arg.process(self, parser)
                    if (parser.index, parser.state, parser.current) == cursor and not parser.is_done:
                        parser.advance()
                else:
                    await arg.process(self, parser)
            except CommandException as fault:
                options = {"input": current, "index": index}
                self.trigger(fault, **{name: value for name, value in options.items() if name not in fault.options})
                raise

    async def process_tasks(self):
        for task in self.tasks:
            logger.debug("Running deferred task %r", getattr(task, "__name__", task))
            try:
                result = task(self)
                if inspect.isawaitable(result):
                    await result
            except CommandException as fault:
                self.trigger(fault)
                raise

    def trigger(self, fault, /, **options):
        """
        Surface a fault with this CLI's runtime options merged in.
        """
        trigger(fault, **options, tool=self, shell=self.shell, fancy=self.fancy, colorful=self.colorful)

    def _resolve_arg(self, parser, current):
        if parser.is_rest:
            logger.debug("Dispatching rest token %r", current)
            return self.rest

        try:
            arg = self.triggers[current]
        except KeyError:
            if parser.is_flag:
                raise UnknownFlagError("unexpected flag %r" % current) from None
            logger.debug("Dispatching positional token %r", current)
            return self.rest

        logger.debug("Dispatching trigger %r", current)
        if arg.expects_value:
            parser.advance_as_value()
        else:
            parser.advance()
            if parser.is_value:
                raise UnexpectedValueError("unexpected value %r for %r" % (parser.current, current))

        return arg

    def __rich_repr__(self):
        yield "name", self.name
        yield "triggers", sorted(self.triggers)
        yield "tasks", len(self.tasks)
        yield "shell", self.shell

    def __repr__(self):
        return f"cli({
            ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
        })"


def invoke(cli, argv=Unset, /):
    """
    Synchronously run a CLI over argv.

    Parameters
    - cli: the CLI to run.
    - argv:
      • Unset: read sys.argv[1:].
      • Iterable[str]: the raw arguments, used verbatim (no shell splitting).

    Raises
    - TypeError: when cli is not a CLI, or argv is not an iterable of strings.
    - CommandException subclasses, when cli.shell is False.
    """
    if not isinstance(cli, CLI):
        raise TypeError("invoke() first argument must be a CLI")
    if argv is Unset:
        argv = sys.argv[1:]
    elif isinstance(argv, str) or not isinstance(argv, Iterable):
        raise TypeError("invoke() argument must be an iterable of strings")
    argv = list(argv)
    if not all(isinstance(item, str) for item in argv):
        raise TypeError("invoke() argument must be an iterable of strings")

    asyncio.run(cli.run(argv))


__all__ = (
    "CLI",
    "invoke",
)
