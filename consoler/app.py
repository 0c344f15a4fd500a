# Consoler project, MIT license.
#
# You're free to copy this file to your project and edit it for your needs,
# just keep this copyright line please :3

"""
This module provides a tiny framework to build CLI applications.

Creating and running an app
---------------------------

Create an :class:`Application`, register commands with their definitions,
then run it::

    app = Application(description="a simple app")

    # `target` and `clean` are filled from the match result by name.
    @app.command("build", "<target> [--clean]")
    def build(target, clean):
        if clean:
            clean_up()
        build_project(target)

    if __name__ == "__main__":
        app.run()

The first command line argument selects a command. Its definition is then
matched against the rest of the arguments with :class:`~consoler.Matcher`;
if matching succeeds, the command's action is called, and its result is
returned from :meth:`Application.run`. Otherwise, the next command with
the same name is tried. If nothing matches, a usage message is printed::

    >>> import io
    >>> app = Application(description="Consoler app", prog="app")
    >>> app.command("remove", "--force|-f -- remove everything", lambda force: force)
    >>> app.run(["remove", "--force"])
    True
    >>> out = io.StringIO()
    >>> app.run(["add"], file=out)
    >>> print(out.getvalue(), end="")
    Consoler app
    <BLANKLINE>
    Usage:
      app remove --force|-f  -- remove everything

Options with dashes are passed to parameters with underscores,
i.e. ``--clear-cache`` becomes ``clear_cache``. Unmatched positional values
are passed to a parameter called ``remaining``.


Sub-applications
----------------

An application can be registered as a command of another application;
the rest of the arguments are then handled by the sub-application::

    >>> jobs = Application()
    >>> jobs.command("start", "[--force]", lambda force: f"start, force={force}")
    >>> app = Application()
    >>> app.command("jobs", jobs)
    >>> app.run(["jobs", "start"])
    'start, force=False'


Shortcuts
---------

When no command has the exact name that was given, a unique prefix
of a command name can be used instead. This can be disabled by passing
``allow_abbrev=False``::

    >>> app.run(["j", "st", "--force"])
    'start, force=True'

.. autoclass:: Application
   :members:

.. autoclass:: Command
   :members:

"""

from __future__ import annotations

import inspect
import os
import sys
from dataclasses import dataclass

import consoler
from consoler.matcher import Matcher, MatchResult
from consoler.options import Options

from consoler import _typing as _t

__all__ = [
    "Application",
    "Command",
]

C = _t.TypeVar("C", bound=_t.Callable[..., _t.Any])


@dataclass(frozen=True)
class Command:
    """
    A registered command.

    """

    name: str
    """
    Name of the command, i.e. the first command line argument.

    """

    options: Options
    """
    Options of the command. Empty for sub-applications.

    """

    action: _t.Callable[..., _t.Any] | Application
    """
    A callable that's invoked when the command matches,
    or a sub-application.

    """


class Application:
    """
    A CLI application.

    :param description:
        description of the application, printed at the top of the usage message.
    :param prog:
        program name used in the usage message. By default, inferred
        from :data:`sys.argv`.
    :param allow_abbrev:
        allow selecting commands by a unique prefix of their name.

    """

    def __init__(
        self,
        description: str | None = None,
        *,
        prog: str | None = None,
        allow_abbrev: bool = True,
    ):
        #: Description of the application.
        self.description: str | None = description

        #: Program name used in the usage message.
        self.prog: str | None = prog

        #: Allow selecting commands by a unique prefix of their name.
        self.allow_abbrev: bool = allow_abbrev

        self._commands: list[Command] = []

    @property
    def commands(self) -> list[Command]:
        """
        All registered commands, in order of registration.

        """

        return list(self._commands)

    @_t.overload
    def command(
        self, name: str, definition: str | None = None, /
    ) -> _t.Callable[[C], C]: ...

    @_t.overload
    def command(
        self, name: str, definition: str | None, action: _t.Callable[..., _t.Any], /
    ) -> None: ...

    @_t.overload
    def command(self, name: str, subapp: Application, /) -> None: ...

    def command(self, name, definition=None, action=None, /):
        """
        Register a command.

        Can be used as a decorator, or called with an action directly.
        Instead of a definition, a sub-application can be given.

        :param name:
            name of the command.
        :param definition:
            definition of the command's options, see :mod:`consoler.option`,
            or a sub-application.
        :param action:
            a callable that will be invoked when the command matches.
        :raises:
            :class:`TypeError` if definition is not a string or an application,
            or if action is not callable.
            :class:`~consoler.DefinitionError` if definition is malformed.

        """

        if isinstance(definition, Application):
            if action is not None:
                raise TypeError("Invalid subapp/block")
            self._add_command(name, None, definition)
            return None

        if definition is not None and not isinstance(definition, str):
            raise TypeError("Invalid options")

        if action is None:

            def decorator(action: C, /) -> C:
                self._add_command(name, definition, action)
                return action

            return decorator

        self._add_command(name, definition, action)
        return None

    def run(
        self,
        args: _t.Sequence[str] | None = None,
        /,
        *,
        disable_usage_message: bool = False,
        file: _t.TextIO | None = None,
    ) -> _t.Any:
        """
        Find a command that matches the given arguments, and run it.

        :param args:
            command line arguments, not including the program name.
            If :data:`None`, use :data:`sys.argv` instead.
        :param disable_usage_message:
            don't print the usage message when nothing matches.
        :param file:
            where to print the usage message, default is :data:`sys.stdout`.
        :returns:
            result of the command's action, or :data:`None` if nothing matched.

        """

        if args is None:
            args = sys.argv[1:]

        result, matched = self._run(list(args))

        if not matched and not disable_usage_message:
            self.usage(file=file)

        return result

    def usage(self, file: _t.TextIO | None = None):
        """
        Print the usage message with all commands, including
        commands of sub-applications.

        :param file:
            where to print the message, default is :data:`sys.stdout`.

        """

        file = file or sys.stdout

        if self.description is not None:
            print(f"{self.description}\n", file=file)
        print("Usage:", file=file)

        prog = self.prog or os.path.basename(sys.argv[0])
        self._commands_usage(prog, file)

    def _add_command(
        self,
        name: str,
        definition: str | None,
        action: _t.Callable[..., _t.Any] | Application,
    ):
        if not isinstance(action, Application) and not callable(action):
            raise TypeError("Invalid subapp/block")

        self._commands.append(Command(name, Options(definition), action))
        consoler._logger.debug("registered command %r: %r", name, definition)

    def _run(self, args: list[str]) -> tuple[_t.Any, bool]:
        if not args:
            return None, False

        name, args = args[0], args[1:]

        exact = [command for command in self._commands if command.name == name]
        result, matched = self._run_commands(exact, args)
        if matched:
            return result, True

        if self.allow_abbrev:
            names = {
                command.name
                for command in self._commands
                if command.name != name and command.name.startswith(name)
            }
            if len(names) == 1:
                [full_name] = names
                consoler._logger.debug("expanding %r to %r", name, full_name)
                partial = [c for c in self._commands if c.name == full_name]
                return self._run_commands(partial, args)

        return None, False

    def _run_commands(
        self, commands: list[Command], args: list[str]
    ) -> tuple[_t.Any, bool]:
        for command in commands:
            if isinstance(command.action, Application):
                result, matched = command.action._run(args)
                if matched:
                    return result, True
            else:
                match = Matcher(command.options).match(args)
                if match is None:
                    continue
                consoler._logger.debug("dispatching command %r", command.name)
                return _dispatch(command.action, match), True

        return None, False

    def _commands_usage(self, prefix: str, file: _t.TextIO):
        for command in self._commands:
            if isinstance(command.action, Application):
                command.action._commands_usage(f"{prefix} {command.name}", file)
                continue

            line = f"  {prefix} {command.name}"
            if definition := command.options.to_definition():
                line += f" {definition}"
            if command.options.description is not None:
                line += f"  -- {command.options.description}"
            print(line, file=file)


def _dispatch(action: _t.Callable[..., _t.Any], match: MatchResult) -> _t.Any:
    values = {name.replace("-", "_"): value for name, value in match.items()}

    args = []
    kwargs = {}
    for param in inspect.signature(action).parameters.values():
        if param.kind in (param.VAR_POSITIONAL, param.VAR_KEYWORD):
            continue

        if param.name in values:
            value = values[param.name]
        elif param.default is not param.empty:
            value = param.default
        else:
            value = None

        if param.kind is param.KEYWORD_ONLY:
            kwargs[param.name] = value
        else:
            args.append(value)

    return action(*args, **kwargs)
