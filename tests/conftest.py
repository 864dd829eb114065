"""Pytest configuration and shared fixtures for object_migrations tests.

This module provides fixtures for:
- Prebuilt synchronous and asynchronous migrators
- A migrator whose steps always fail
- Reloading the configuration module under a patched environment
"""

from importlib import reload
from typing import Callable
from unittest.mock import patch

import pytest

from object_migrations import Migrator
from tests.helpers import StepFailure, make_async_migrator, make_sync_migrator


# ============================================================================
# Migrator Fixtures
# ============================================================================

@pytest.fixture(scope="function")
def sync_migrator() -> Migrator:
    """Provide a migrator with synchronous steps 1 -> 5 (numbers and classes)."""
    return make_sync_migrator()


@pytest.fixture(scope="function")
def async_migrator() -> Migrator:
    """Provide a migrator with coroutine steps 1 -> 5 (numbers and classes)."""
    return make_async_migrator()


@pytest.fixture(scope="function")
def failing_migrator() -> Migrator:
    """Provide a migrator whose 1 <-> 2 steps raise StepFailure.

    Payloads are 'forward' and 'backward' for the sync steps,
    'forward/async' and 'backward/async' for the 10 <-> 20 coroutine steps.
    """
    m = Migrator()

    def fail(payload):
        def migrate(obj):
            raise StepFailure(payload)

        return migrate

    def fail_async(payload):
        async def migrate(obj):
            raise StepFailure(payload)

        return migrate

    m.register(1, 2, fail("forward"), fail("backward"))
    m.register(10, 20, fail_async("forward/async"), fail_async("backward/async"))
    return m


@pytest.fixture(scope="function")
def resolution_spy() -> Callable:
    """Wrap a migrator's compute_steps in a mock that counts calls.

    Returns:
        Function taking a migrator and returning the started patcher's mock
    """
    patchers = []

    def spy(migrator: Migrator):
        patcher = patch.object(
            migrator.resolver,
            "compute_steps",
            wraps=migrator.resolver.compute_steps,
        )
        patchers.append(patcher)
        return patcher.start()

    yield spy

    for patcher in patchers:
        patcher.stop()


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture(scope="function")
def reload_config(monkeypatch):
    """Reload object_migrations.config after setting environment variables.

    The module is reloaded again with the original environment on teardown.
    """
    import object_migrations.config as config_module

    def _reload(**env):
        for key, value in env.items():
            if value is None:
                monkeypatch.delenv(key, raising=False)
            else:
                monkeypatch.setenv(key, value)
        return reload(config_module)

    yield _reload

    monkeypatch.undo()
    reload(config_module)
