import logging

import pytest

import consoler


@pytest.fixture
def internal_log(caplog: pytest.LogCaptureFixture):
    level = consoler._logger.level
    consoler._logger.addHandler(caplog.handler)
    consoler._logger.setLevel(logging.DEBUG)
    caplog.handler.setLevel(logging.DEBUG)
    try:
        yield caplog
    finally:
        consoler._logger.removeHandler(caplog.handler)
        consoler._logger.setLevel(level)
