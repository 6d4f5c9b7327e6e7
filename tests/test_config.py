"""Test the configuration module functionality."""

import dataclasses

import pytest

from gstack import GraphStack
from gstack.config import DEFAULT_CONFIG, GraphStackConfig


def test_graph_stack_config_defaults():
    """Test that the default configuration values are correct."""
    config = GraphStackConfig()

    assert config.validate_added_ancestors is True
    assert config.detect_cycles is True


def test_global_config_instance():
    """Test that stores without an explicit config share DEFAULT_CONFIG."""
    assert DEFAULT_CONFIG == GraphStackConfig()
    assert GraphStack().config is DEFAULT_CONFIG


def test_config_is_frozen():
    """Test that the shared default cannot be changed in place."""
    with pytest.raises(dataclasses.FrozenInstanceError):
        DEFAULT_CONFIG.detect_cycles = False  # type: ignore[misc]


def test_with_overrides():
    """Test copying a configuration with some fields replaced."""
    relaxed = DEFAULT_CONFIG.with_overrides(validate_added_ancestors=False)

    assert relaxed.validate_added_ancestors is False
    assert relaxed.detect_cycles is True
    assert DEFAULT_CONFIG.validate_added_ancestors is True

    with pytest.raises(TypeError):
        DEFAULT_CONFIG.with_overrides(no_such_field=True)


def test_custom_config_used_by_store():
    """Test that a store keeps the config it was built with."""
    config = GraphStackConfig(validate_added_ancestors=False, detect_cycles=False)
    gs: GraphStack = GraphStack(config)
    assert gs.config is config
