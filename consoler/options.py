# Consoler project, MIT license.
#
# You're free to copy this file to your project and edit it for your needs,
# just keep this copyright line please :3

"""
This module provides a registry of all options of a single command.

:class:`Options` parses a complete definition string, including
a free-text description that follows the `` -- `` separator::

    >>> options = Options("[-v] [--lang=] <file> -- compile a file")
    >>> len(options)
    3
    >>> options.description
    'compile a file'
    >>> options.to_definition()
    '[-v] [--lang=] <file>'

Options can be looked up by name. :meth:`Options.get_with_alias` also finds
options by their aliases, and tells which form of the option was used::

    >>> options = Options("--force|-f")
    >>> options.get("f") is None
    True
    >>> option, form = options.get_with_alias("f")
    >>> option.name, form.is_short
    ('force', True)

.. autoclass:: Options
   :members:

"""

from __future__ import annotations

import re

from consoler.option import (
    DefinitionError,
    ErrorKind,
    Option,
    OptionalsTracker,
    parse_option,
)

from consoler import _typing as _t

__all__ = [
    "Options",
]

_DESCRIPTION_RE = re.compile(r"(^|\s+)-- (?P<description>.*)$")


class Options:
    """
    An ordered list of options, built from a definition string.

    The list is immutable once created.

    :param definition:
        a definition string, see :mod:`consoler.option` for syntax.
    :raises:
        :class:`~consoler.DefinitionError` if definition is malformed.

    """

    def __init__(self, definition: str | None = None):
        self._options: list[Option] = []
        self._by_name: dict[str, tuple[Option, Option]] = {}

        #: Description of the command, if any.
        self.description: str | None = None

        if not definition:
            return

        if match := _DESCRIPTION_RE.search(definition):
            self.description = match.group("description")
            definition = definition[: match.start()]

        tracker = OptionalsTracker()
        for option_definition in definition.split():
            for option in parse_option(option_definition, tracker):
                self._add(option)

        if tracker.is_tracking:
            raise DefinitionError(ErrorKind.UNCLOSED_OPTIONAL)

    def _add(self, option: Option):
        forms = [option, *option.aliases]
        for form in forms:
            if form.name in self._by_name:
                raise DefinitionError(ErrorKind.DUPLICATE_NAME, form.name)
        for form in forms:
            self._by_name[form.name] = option, form
        self._options.append(option)

    def get(self, name: str, /) -> Option | None:
        """
        Get an option by its name. Aliases are not considered.

        """

        for option in self._options:
            if option.name == name:
                return option
        return None

    def get_with_alias(self, name: str, /) -> tuple[Option | None, Option | None]:
        """
        Get an option by its name or by any of its aliases.

        :param name:
            name to look up.
        :returns:
            a pair of an option that owns the name, and the exact form
            (the option itself or one of its aliases) that has this name.
            If nothing is found, returns a pair of :data:`None`.

        """

        return self._by_name.get(name, (None, None))

    def to_definition(self) -> str:
        """
        Render options back to the definition syntax.

        Rendered definition is canonical: short flag groups are expanded,
        arguments are wrapped in angle brackets. The description is not included.

        """

        parts: list[str] = []
        group: int | None = None

        for i, option in enumerate(self._options):
            definition = option.to_definition()

            if option.optional is not None and option.optional != group:
                definition = "[" + definition
                group = option.optional

            if option.optional is not None:
                following = self._options[i + 1] if i + 1 < len(self._options) else None
                if following is None or following.optional != group:
                    definition += "]"
                    group = None

            parts.append(definition)

        return " ".join(parts)

    def __len__(self) -> int:
        return len(self._options)

    def __iter__(self) -> _t.Iterator[Option]:
        return iter(self._options)

    def __getitem__(self, index: int, /) -> Option:
        return self._options[index]

    def __repr__(self):
        return f"{self.__class__.__name__}({self.to_definition()!r})"
