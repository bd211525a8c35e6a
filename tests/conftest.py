"""Pytest configuration and shared fixtures."""
import logging

import pytest

import objectmapper.construction as construction_module


@pytest.fixture(autouse=True)
def reset_factory_registry():
    """Restore the factory registry after each test."""
    original_factories = dict(construction_module._factory_registry)

    yield

    construction_module._factory_registry.clear()
    construction_module._factory_registry.update(original_factories)


@pytest.fixture
def debug_log(caplog):
    """Capture objectmapper DEBUG records."""
    caplog.set_level(logging.DEBUG, logger="objectmapper")
    return caplog
