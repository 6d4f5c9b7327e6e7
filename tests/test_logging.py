"""Test the package logging helpers."""

from __future__ import annotations

import logging
from io import StringIO

import pytest

from gstack import GraphStack
from gstack import logging as gstack_logging
from gstack.logging import (
    PACKAGE_LOGGER,
    enable_debug_logging,
    get_logger,
    set_global_log_level,
)


@pytest.fixture(autouse=True)
def restore_package_logger(monkeypatch):
    monkeypatch.setattr(gstack_logging, "_debug_handler", None)
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    handlers = list(package_logger.handlers)
    level = package_logger.level
    yield
    package_logger.handlers[:] = handlers
    package_logger.setLevel(level)


def test_import_installs_only_null_handler():
    """Test that importing the package does not print anywhere."""
    handlers = logging.getLogger(PACKAGE_LOGGER).handlers
    assert handlers
    assert all(isinstance(h, logging.NullHandler) for h in handlers)


def test_logger_naming():
    """Test that module loggers sit under the package logger."""
    logger = get_logger("gstack.stacks")
    assert logger.name == "gstack.stacks"
    assert logger.parent is logging.getLogger(PACKAGE_LOGGER)
    assert get_logger("gstack") is logging.getLogger(PACKAGE_LOGGER)


def test_logger_outside_package_rejected():
    """Test that foreign logger names are refused."""
    with pytest.raises(ValueError):
        get_logger("gstackish")
    with pytest.raises(ValueError):
        get_logger("other.module")


def test_global_level_inherited():
    """Test that module loggers follow the package level."""
    logger = get_logger("gstack.graph_stack")
    set_global_log_level(logging.WARNING)
    assert logger.getEffectiveLevel() == logging.WARNING
    set_global_log_level(logging.DEBUG)
    assert logger.getEffectiveLevel() == logging.DEBUG


def test_enable_debug_logging_traces_operations():
    """Test that debug output covers pushes and enumeration."""
    stream = StringIO()
    handler = enable_debug_logging(stream)
    assert handler in logging.getLogger(PACKAGE_LOGGER).handlers

    gs: GraphStack = GraphStack()
    a = gs.push("a")
    list(gs.stacks(a))

    output = stream.getvalue()
    assert "gstack.graph_stack - DEBUG - Pushed item 0 with ancestors []" in output
    assert "gstack.stacks - DEBUG - Stacks from item 0 exhausted after 1 stack(s)" in output


def test_enable_debug_logging_reuses_handler():
    """Test that repeated calls do not stack handlers."""
    first = enable_debug_logging(StringIO())
    second_stream = StringIO()
    second = enable_debug_logging(second_stream)
    assert first is second
    assert logging.getLogger(PACKAGE_LOGGER).handlers.count(first) == 1

    get_logger("gstack.test").debug("after switch")
    assert "after switch" in second_stream.getvalue()
