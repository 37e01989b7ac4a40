"""Pytest fixtures for the clause test-suite.

The OpenTelemetry API is a hard dependency; without an SDK configured its
meters and tracers are no-ops, so tests run against the real package.
"""
from __future__ import annotations

import pytest

from clause.runtime.settings import reload_settings, set_enabled


# ---------------------------------------------------------------------------
# 1. Global, reusable fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _silence_logging(caplog):  # noqa: D401
    """Keep test output readable; individual tests may lower the level."""
    caplog.set_level("WARNING")


@pytest.fixture(autouse=True)
def _reset_runtime_switches(monkeypatch):  # noqa: D401
    """Every test starts with contracts enabled and the raising failure mode."""

    monkeypatch.delenv("CLAUSE_DISABLED", raising=False)
    monkeypatch.delenv("CLAUSE_FAILURE_MODE", raising=False)
    set_enabled(None)
    reload_settings()
    yield
    set_enabled(None)
    reload_settings()


@pytest.fixture()
def recorder():
    """Collect callback events; returns ``(callbacks_kwargs, successes, failures)``."""

    successes = []
    failures = []

    def on_success(event):
        successes.append(event)
        return True

    def on_failure(event):
        failures.append(event)
        return True

    return {"on_success": on_success, "on_failure": on_failure}, successes, failures


# ---------------------------------------------------------------------------
# 2. anyio backend selection – ensure tests run only with asyncio backend
# ---------------------------------------------------------------------------


@pytest.fixture()
def anyio_backend():  # noqa: D401
    """Force *anyio* tests to use the standard asyncio backend only."""
    return "asyncio"
