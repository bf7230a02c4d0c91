import logging

import pytest

from c4engine.debug import debug, DebugLevel, LOGGER_NAME
from c4engine.utils import Player
from c4engine.game.rules import create_game


@pytest.fixture(autouse=True)
def quiet_debug():
    debug.configure(level=DebugLevel.WARNING, enabled=True, components=[])
    yield
    debug.configure(level=DebugLevel.WARNING, enabled=True, components=[], log_file="")


@pytest.fixture
def propagate():
    # The package logger does not propagate and caplog listens on the root logger
    logger = logging.getLogger(LOGGER_NAME)
    logger.propagate = True
    yield
    logger.propagate = False


@pytest.fixture
def red():
    return Player("red")


@pytest.fixture
def yellow():
    return Player("yellow")


@pytest.fixture
def game(red, yellow):
    return create_game(red, yellow)
