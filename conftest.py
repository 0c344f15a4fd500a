from __future__ import annotations

import logging

import consoler

from sybil import Sybil
from sybil.parsers.codeblock import PythonCodeBlockParser
from sybil.parsers.doctest import DocTestParser
from sybil.parsers.rest import SkipParser

_ORIG_LEVEL = consoler._logger.level


def _setup(*_args, **_kwargs):
    consoler._logger.setLevel(logging.DEBUG)


def _teardown(*_args, **_kwargs):
    consoler._logger.setLevel(_ORIG_LEVEL)


pytest_collect_file = Sybil(
    parsers=[
        DocTestParser(),
        PythonCodeBlockParser(),
        SkipParser(),
    ],
    patterns=["*.rst", "*.py"],
    excludes=["docs/source/conf.py", "setup.py", "conftest.py", "test/*"],
    setup=_setup,
    teardown=_teardown,
).pytest()
