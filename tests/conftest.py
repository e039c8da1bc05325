"""Shared fixtures for the tododep test suite."""

import logging

import pytest

from tododep.data import TodoStore
from tododep.models import TaskNode


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers installed by setup_logging so tests never share streams."""
    yield
    logger = logging.getLogger("tododep")
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.propagate = True


@pytest.fixture
def store_path(tmp_path):
    return tmp_path / "todo.json"


@pytest.fixture
def store(store_path):
    """An open store backed by a fresh file."""
    with TodoStore(store_path) as opened:
        yield opened


@pytest.fixture
def make_chain():
    """Factory building ``depth`` nested single-child tasks; returns the root."""
    def build(depth):
        root = TaskNode.new("level 0")
        node = root
        for level in range(1, depth):
            child = TaskNode.new(f"level {level}")
            node.children.append(child)
            node = child
        return root
    return build
