# Consoler project, MIT license.
#
# You're free to copy this file to your project and edit it for your needs,
# just keep this copyright line please :3

"""
This module implements the definition grammar for a single option.

A definition string is a whitespace-separated list of options. Each option
is one of:

``--name``
    a long flag. Matches ``--name`` on the command line and binds :data:`True`.

``-n``
    a short flag. Matches ``-n``, counts how many times it was given.
    Several short flags can be declared at once: ``-vf`` is the same
    as ``-v -f``.

``name`` or ``<name>``
    a positional argument.

A trailing ``=`` on a flag (``--name=``, ``-n=``) means that the flag
takes a value from the next command line token. Flags can have aliases,
separated by ``|``: ``--force|-f``. Options wrapped in square brackets
are optional; ``[a b]`` is a single optional group, ``[a] [b]`` are two.

Parsing a single option::

    >>> tracker = OptionalsTracker()
    >>> [force] = parse_option("[--force|-f]", tracker)
    >>> force.names, force.optional
    (['force', 'f'], 1)
    >>> [option.to_definition() for option in parse_option("-vn=", tracker)]
    ['-v', '-n=']

Invalid definitions raise :class:`DefinitionError`::

    >>> try:
    ...     parse_option("name=", tracker)
    ... except DefinitionError as e:
    ...     print(f"{e.kind.name}: {e}")
    ARGUMENT_VALUE: Arguments can't have a value

.. autoclass:: Option
   :members:

.. autoclass:: OptionalsTracker
   :members:

.. autofunction:: parse_option

.. autoclass:: ErrorKind
   :members:

.. autoclass:: DefinitionError
   :members:

"""

from __future__ import annotations

import enum
from dataclasses import dataclass

from consoler import _typing as _t

__all__ = [
    "DefinitionError",
    "ErrorKind",
    "Option",
    "OptionalsTracker",
    "parse_option",
]


class ErrorKind(enum.Enum):
    """
    Every way a definition string can be malformed.

    Enumerator values are message templates; use :meth:`render`
    to get the final text.

    """

    EMPTY_NAME = "Option must have a name"
    LONG_AND_SHORT = "Option can not be a long and a short option"
    ARGUMENT_VALUE = "Arguments can't have a value"
    UNOPENED_OPTIONAL = "Unopened optional"
    NESTED_OPTIONALS = "Nested optionals are not allowed"
    UNCLOSED_OPTIONAL = "Unclosed optional"
    MISSING_CLOSING_BRACKET = "Missing closing > for argument: {name}"
    MISSING_OPENING_BRACKET = "Missing opening < for argument: {name}"
    DUPLICATE_NAME = "Duplicate option name: {name}"
    DUPLICATE_ALIAS = "Duplicate alias name: {name}"
    ALIAS_ON_ARGUMENT = "Arguments can't have aliases"
    ALIAS_IS_ARGUMENT = "Aliases must be long or short options: {name}"
    ALIAS_VALUE_MISMATCH = "Alias must match the option's value: {name}"
    ALIAS_ON_CLUSTER = "Multiple short options can't have aliases"

    def render(self, name: str | None = None) -> str:
        """
        Format error message for the given option name.

        """

        return self.value.format(name=name)


class DefinitionError(ValueError):
    """
    Raised when a definition string can't be parsed.

    :param kind:
        what went wrong.
    :param name:
        name or definition of the offending option, if there is one.

    """

    def __init__(self, kind: ErrorKind, name: str | None = None):
        super().__init__(kind.render(name))

        #: What went wrong.
        self.kind: ErrorKind = kind

        #: Name or definition of the offending option.
        self.name: str | None = name


@dataclass(frozen=True)
class Option:
    """
    A single declared flag or positional argument.

    Options are created by :func:`parse_option`, you shouldn't need
    to create them by hand.

    """

    name: str
    """
    Name of the option, without dashes or brackets.

    """

    is_long: bool = False
    """
    Option is a long flag (``--option``).

    """

    is_short: bool = False
    """
    Option is a short flag (``-o``).

    """

    is_value: bool = False
    """
    Option takes a value from the next token (``--option=``).

    """

    optional: int | None = None
    """
    Index of the optional group this option belongs to,
    or :data:`None` if the option is mandatory.

    """

    aliases: tuple[Option, ...] = ()
    """
    Alternate names for this option.

    """

    @property
    def is_argument(self) -> bool:
        """
        Option is a positional argument.

        """

        return not self.is_long and not self.is_short

    @property
    def names(self) -> list[str]:
        """
        Name of this option, followed by names of all its aliases.

        """

        return [self.name] + [alias.name for alias in self.aliases]

    @property
    def default_value(self) -> _t.Literal[0, False] | None:
        """
        Value that's used when an optional option wasn't given.

        """

        if self.is_value:
            return None
        elif self.is_short:
            return 0
        elif self.is_long:
            return False
        else:
            return None

    def to_definition(self) -> str:
        """
        Render this option back to the definition syntax.

        Optional brackets are not included, as they are shared
        with neighbouring options; see :meth:`consoler.Options.to_definition`.

        """

        if self.is_long:
            definition = f"--{self.name}"
        elif self.is_short:
            definition = f"-{self.name}"
        else:
            definition = f"<{self.name}>"

        if self.is_value:
            definition += "="

        for alias in self.aliases:
            definition += "|" + alias.to_definition()

        return definition


@dataclass
class OptionalsTracker:
    """
    Parsing state that's shared between all options of a single definition.

    """

    is_tracking: bool = False
    """
    Parser is inside of an optional group.

    """

    index: int = 0
    """
    Index of the last opened optional group.

    """


def parse_option(definition: str, tracker: OptionalsTracker) -> list[Option]:
    """
    Parse a single option definition.

    A definition of several short flags (``-abc``) results in a separate
    option for every flag, hence the list.

    :param definition:
        option definition, without whitespaces.
    :param tracker:
        tracker for optional groups, updated in place.
    :returns:
        a list of parsed options.
    :raises:
        :class:`DefinitionError`.

    """

    definition, optional = _parse_optional(definition, tracker)
    primary, *alias_definitions = definition.split("|")

    name, is_long, is_short, is_value = _parse_body(primary)
    is_multi_short = is_short and len(name) > 1

    aliases: list[Option] = []
    if alias_definitions:
        if not is_long and not is_short:
            raise DefinitionError(ErrorKind.ALIAS_ON_ARGUMENT, name)
        if is_multi_short:
            raise DefinitionError(ErrorKind.ALIAS_ON_CLUSTER, name)

        seen = {name}
        for alias_definition in alias_definitions:
            alias_name, alias_long, alias_short, alias_value = _parse_body(
                alias_definition
            )
            if not alias_long and not alias_short:
                raise DefinitionError(ErrorKind.ALIAS_IS_ARGUMENT, alias_name)
            if alias_short and len(alias_name) > 1:
                raise DefinitionError(ErrorKind.ALIAS_ON_CLUSTER, alias_name)
            if alias_value != is_value:
                raise DefinitionError(ErrorKind.ALIAS_VALUE_MISMATCH, alias_name)
            if alias_name in seen:
                raise DefinitionError(ErrorKind.DUPLICATE_ALIAS, alias_name)
            seen.add(alias_name)
            aliases.append(
                Option(
                    alias_name,
                    is_long=alias_long,
                    is_short=alias_short,
                    is_value=alias_value,
                    optional=optional,
                )
            )

    if is_multi_short:
        # Only the last flag in a group takes a value: `-ab=` is `-a -b=`.
        last = len(name) - 1
        return [
            Option(
                ch,
                is_short=True,
                is_value=is_value and i == last,
                optional=optional,
            )
            for i, ch in enumerate(name)
        ]

    return [
        Option(
            name,
            is_long=is_long,
            is_short=is_short,
            is_value=is_value,
            optional=optional,
            aliases=tuple(aliases),
        )
    ]


def _parse_optional(
    definition: str, tracker: OptionalsTracker
) -> tuple[str, int | None]:
    # A single token can both open and close a group: `[name]`.
    if definition.startswith("["):
        if tracker.is_tracking:
            raise DefinitionError(ErrorKind.NESTED_OPTIONALS, definition)
        tracker.is_tracking = True
        tracker.index += 1
        definition = definition[1:]

    optional = tracker.index if tracker.is_tracking else None

    if definition.endswith("]"):
        if not tracker.is_tracking:
            raise DefinitionError(ErrorKind.UNOPENED_OPTIONAL, definition)
        tracker.is_tracking = False
        definition = definition[:-1]

    return definition, optional


def _parse_body(definition: str) -> tuple[str, bool, bool, bool]:
    is_long = definition.startswith("--")
    if is_long:
        definition = definition[2:]

    is_short = definition.startswith("-")
    if is_short:
        definition = definition[1:]

    is_argument = not is_long and not is_short

    is_value = definition.endswith("=")
    if is_value:
        if is_argument:
            raise DefinitionError(ErrorKind.ARGUMENT_VALUE, definition[:-1])
        definition = definition[:-1]

    if is_argument:
        opens, closes = definition.startswith("<"), definition.endswith(">")
        if opens and closes:
            definition = definition[1:-1]
        elif opens:
            raise DefinitionError(ErrorKind.MISSING_CLOSING_BRACKET, definition)
        elif closes:
            raise DefinitionError(ErrorKind.MISSING_OPENING_BRACKET, definition)

    if not definition:
        raise DefinitionError(ErrorKind.EMPTY_NAME)

    if is_long and is_short:
        raise DefinitionError(ErrorKind.LONG_AND_SHORT, definition)

    return definition, is_long, is_short, is_value
