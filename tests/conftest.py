import logging

import pytest

from hydrim import Hydrator
from hydrim.registry import TypeRegistry


@pytest.fixture(autouse=True)
def reset_registry():
    TypeRegistry().reset()


@pytest.fixture
def hydrator():
    return Hydrator()


@pytest.fixture
def debug_logs(caplog):
    caplog.set_level(logging.DEBUG, logger="hydrim")
    return caplog
