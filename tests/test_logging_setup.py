import logging

import pytest

from logging_setup import _ThirdPartyFilter


def make_record(name, level):
    return logging.LogRecord(name, level, __file__, 1, "message", None, None)


@pytest.mark.parametrize("name", ["app", "crud", "seed", "__main__", "reports", "uvicorn.error"])
def test_project_and_server_info_logs_pass(name):
    assert _ThirdPartyFilter().filter(make_record(name, logging.INFO))


@pytest.mark.parametrize("name", ["sqlalchemy.engine.Engine", "httpx", "asyncio"])
def test_library_info_logs_are_dropped(name):
    f = _ThirdPartyFilter()
    assert not f.filter(make_record(name, logging.INFO))
    assert f.filter(make_record(name, logging.WARNING))
