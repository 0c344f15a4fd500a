# Consoler project, MIT license.
#
# You're free to copy this file to your project and edit it for your needs,
# just keep this copyright line please :3

"""
Consoler, a tiny grammar for command line options.

A command is described by a single definition string::

    >>> import consoler
    >>> options = consoler.Options("[-v] [--lang=] <file> -- build a file")
    >>> consoler.Matcher(options).match(["-vv", "main.c"])["v"]
    2

See :mod:`consoler.option` for the definition syntax, :mod:`consoler.matcher`
for the matching rules, and :mod:`consoler.app` for building applications.

"""

from __future__ import annotations

import logging as _logging
import os as _os
import sys as _sys

from consoler.app import Application, Command
from consoler.matcher import Count, Flag, Matcher, MatchResult, Positional, Value
from consoler.option import DefinitionError, ErrorKind, Option, OptionalsTracker
from consoler.options import Options

__version__ = "1.2.0"

__all__ = [
    "Application",
    "Command",
    "Count",
    "DefinitionError",
    "ErrorKind",
    "Flag",
    "MatchResult",
    "Matcher",
    "Option",
    "OptionalsTracker",
    "Options",
    "Positional",
    "Value",
    "enable_internal_logging",
]


_logger = _logging.getLogger("consoler.internal")
_logger.propagate = False

__stderr_handler = _logging.StreamHandler(_sys.__stderr__)
__stderr_handler.setLevel("CRITICAL")
_logger.addHandler(__stderr_handler)


def enable_internal_logging(
    path: str | None = None, level: str | int | None = None, propagate=None
):  # pragma: no cover
    """
    Enable Consoler's internal logging.

    Internal messages explain why a definition was rejected, why a match
    failed, and which command was dispatched. They are sent to the
    ``consoler.internal`` channel.

    :param path:
        if given, adds a handler that outputs internal log messages
        to the given file.
    :param level:
        configures logging level for the file handler. Default is ``DEBUG``.
    :param propagate:
        if given, enables or disables log message propagation
        from ``consoler.internal`` to the root logger.

    """

    if level is None:
        level = _os.environ.get("CONSOLER_DEBUG", "").strip().upper() or "DEBUG"
    if level in ["1", "Y", "YES", "TRUE"]:
        level = "DEBUG"
    _logger.setLevel(level)

    if path:
        file_handler = _logging.FileHandler(path, delay=True)
        file_handler.setFormatter(
            _logging.Formatter("%(filename)s:%(lineno)d: %(levelname)s: %(message)s")
        )
        file_handler.setLevel(level)
        _logger.addHandler(file_handler)

    if propagate is not None:
        _logger.propagate = propagate


_debug = "CONSOLER_DEBUG" in _os.environ or "CONSOLER_DEBUG_FILE" in _os.environ
if _debug:  # pragma: no cover
    enable_internal_logging(
        path=_os.environ.get("CONSOLER_DEBUG_FILE") or "consoler.log", propagate=False
    )
