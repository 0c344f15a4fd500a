# Consoler project, MIT license.
#
# You're free to copy this file to your project and edit it for your needs,
# just keep this copyright line please :3

"""
This module matches command line arguments against a list of options.

Matching either binds every option, or fails as a whole::

    >>> from consoler import Options
    >>> matcher = Matcher(Options("--reason= filename"))
    >>> result = matcher.match(["--reason", "no more", "hello.rb"])
    >>> result["reason"], result["filename"]
    ('no more', 'hello.rb')
    >>> matcher.match(["--reason"]) is None
    True

Flags are matched first, in a single pass over the arguments. Everything that
is not a flag is a positional value; after a literal ``--`` all arguments
are positional values.

Positional values are then distributed between argument options. Mandatory
arguments are always filled first. The rest of the values go to optional
groups: larger groups are filled first; between groups of the same size,
groups that come first in the definition win. A group is either filled
completely, or not at all::

    >>> matcher = Matcher(Options("[first] [second third] fourth"))
    >>> result = matcher.match(["1", "2", "3"])
    >>> result["first"], result["second"], result["third"], result["fourth"]
    (None, '1', '2', '3')

Values that didn't fit anywhere are available under the ``remaining`` key::

    >>> Matcher(Options("name")).match(["a", "b"])["remaining"]
    ['b']

A flag keeps the kind it was declared with, whichever alias was used.
A long flag with a short alias binds :data:`True` even when given
as ``-f``, while a short flag with a long alias always counts::

    >>> Matcher(Options("--force|-f")).match(["-f"])["force"]
    True
    >>> Matcher(Options("-v|--verbose")).match(["--verbose", "-v"])["v"]
    2

A value flag inside a group of short flags is counted when it is not
the last one; only the last flag of a group takes a value::

    >>> result = Matcher(Options("-n= [-v]")).match(["-nv", "-n", "10"])
    >>> result["n"], result["v"]
    ('10', 1)

.. autoclass:: Matcher
   :members:

.. autoclass:: MatchResult
   :members:


Bindings
--------

Each matched option is stored as a binding, which tells what kind
of value it holds.

.. autoclass:: Flag

.. autoclass:: Count

.. autoclass:: Value

.. autoclass:: Positional

.. autodata:: Binding

"""

from __future__ import annotations

import types
from dataclasses import dataclass

import consoler
from consoler import _typing as _t
from consoler.option import Option
from consoler.options import Options

__all__ = [
    "Binding",
    "Count",
    "Flag",
    "MatchResult",
    "Matcher",
    "Positional",
    "Value",
]


@dataclass(frozen=True)
class Flag:
    """
    Long flag, :data:`True` if it was given.

    """

    value: bool


@dataclass(frozen=True)
class Count:
    """
    Short flag, number of times it was given.

    """

    value: int


@dataclass(frozen=True)
class Value:
    """
    Flag with a value, :data:`None` if it wasn't given.

    """

    value: str | None


@dataclass(frozen=True)
class Positional:
    """
    Positional argument, :data:`None` if an optional argument wasn't filled.

    """

    value: str | None


Binding: _t.TypeAlias = "Flag | Count | Value | Positional"
"""
Any of the bindings.

"""


class MatchResult(_t.Mapping[str, _t.Any]):
    """
    Result of a successful match.

    Maps names of options, as well as names of their aliases, to matched
    values. The ``remaining`` key holds a list of positional values
    that weren't consumed by any option; if there is an option called
    ``remaining``, its value takes precedence, and leftover values are only
    available through the :attr:`~MatchResult.remaining` attribute.

    """

    def __init__(self, bindings: dict[str, Binding], remaining: list[str]):
        self.__bindings = dict(bindings)
        self.__remaining = list(remaining)

    @property
    def bindings(self) -> _t.Mapping[str, Binding]:
        """
        Matched options, as tagged bindings.

        """

        return types.MappingProxyType(self.__bindings)

    @property
    def remaining(self) -> list[str]:
        """
        Positional values that weren't consumed by any option.

        """

        return list(self.__remaining)

    def __getitem__(self, key: str) -> _t.Any:
        if key in self.__bindings:
            return self.__bindings[key].value
        if key == "remaining":
            return list(self.__remaining)
        raise KeyError(key)

    def __iter__(self) -> _t.Iterator[str]:
        yield from self.__bindings
        if "remaining" not in self.__bindings:
            yield "remaining"

    def __len__(self) -> int:
        return len(self.__bindings) + ("remaining" not in self.__bindings)

    def __repr__(self):
        return f"{self.__class__.__name__}({dict(self)!r})"


class Matcher:
    """
    Matches command line arguments against options.

    Matcher doesn't keep any state between calls to :meth:`~Matcher.match`,
    so it can be reused.

    :param options:
        options to match against.

    """

    def __init__(self, options: Options):
        self.options: Options = options

    def match(self, args: _t.Sequence[str], /) -> MatchResult | None:
        """
        Match arguments against options.

        :param args:
            command line arguments, already split.
        :returns:
            match result, or :data:`None` if arguments don't match the options.

        """

        bindings: dict[str, Binding] = {}

        values = self._match_flags(args, bindings)
        if values is None:
            return None

        remaining = self._match_arguments(values, bindings)
        if remaining is None:
            return None

        self._fill_defaults(bindings)

        if len(bindings) != len(self.options):
            missing = [o.name for o in self.options if o.name not in bindings]
            consoler._logger.debug("no match: missing options %s", missing)
            return None

        for option in self.options:
            for alias in option.aliases:
                bindings[alias.name] = bindings[option.name]

        return MatchResult(bindings, remaining)

    def _match_flags(
        self, args: _t.Sequence[str], bindings: dict[str, Binding]
    ) -> list[str] | None:
        values: list[str] = []
        parse_flags = True

        i = 0
        while i < len(args):
            arg = args[i]
            i += 1

            if not parse_flags:
                values.append(arg)
                continue

            # Everything after `--` is treated as positional values.
            if arg == "--":
                parse_flags = False
                continue

            if arg.startswith("--"):
                is_long = True
                names = [arg[2:]]
            elif arg.startswith("-") and arg != "-":
                is_long = False
                names = list(arg[1:])
            else:
                values.append(arg)
                continue

            for j, name in enumerate(names):
                option, form = self.options.get_with_alias(name)
                if option is None or form is None:
                    consoler._logger.debug("no match: unknown option %r", arg)
                    return None
                if (is_long and not form.is_long) or (not is_long and not form.is_short):
                    consoler._logger.debug("no match: wrong option type %r", arg)
                    return None

                if option.is_value and j == len(names) - 1:
                    if i >= len(args):
                        consoler._logger.debug("no match: %r needs a value", arg)
                        return None
                    bindings[option.name] = Value(args[i])
                    i += 1
                elif option.is_short or option.is_value:
                    # Value options inside a cluster are counted: `-fv` is `-f -v`.
                    count = bindings.get(option.name)
                    if isinstance(count, Count):
                        bindings[option.name] = Count(count.value + 1)
                    else:
                        bindings[option.name] = Count(1)
                else:
                    bindings[option.name] = Flag(True)

        return values

    def _match_arguments(
        self, values: list[str], bindings: dict[str, Binding]
    ) -> list[str] | None:
        # Every mandatory argument gets optional groups that precede it.
        # Optional groups after the last mandatory argument are paired with `None`.
        buckets: list[tuple[Option | None, dict[int, list[Option]]]] = []
        groups: dict[int, list[Option]] = {}
        for option in self.options:
            if not option.is_argument:
                continue
            if option.optional is None:
                buckets.append((option, groups))
                groups = {}
            else:
                groups.setdefault(option.optional, []).append(option)
        if groups:
            buckets.append((None, groups))

        n_mandatory = sum(1 for mandatory, _ in buckets if mandatory is not None)

        # Sort is stable, so groups of the same size keep definition order.
        candidates = sorted(
            (group for _, groups in buckets for group in groups.items()),
            key=lambda item: -len(item[1]),
        )
        included: set[int] = set()
        total = 0
        for group_id, group in candidates:
            if total + len(group) + n_mandatory <= len(values):
                total += len(group)
                included.add(group_id)

        index = 0
        for mandatory, groups in buckets:
            for group_id, group in groups.items():
                if group_id not in included:
                    continue
                for option in group:
                    bindings[option.name] = Positional(values[index])
                    index += 1
            if mandatory is not None:
                if index >= len(values):
                    consoler._logger.debug(
                        "no match: no value for argument %r", mandatory.name
                    )
                    return None
                bindings[mandatory.name] = Positional(values[index])
                index += 1

        return values[index:]

    def _fill_defaults(self, bindings: dict[str, Binding]):
        for option in self.options:
            if option.optional is None or option.name in bindings:
                continue
            if option.is_value:
                bindings[option.name] = Value(None)
            elif option.is_short:
                bindings[option.name] = Count(0)
            elif option.is_long:
                bindings[option.name] = Flag(False)
            else:
                bindings[option.name] = Positional(None)
