"""Shared fixtures for unit and integration tests."""
from __future__ import annotations

import pytest

from infra.mocking import UnittestMockFakeEngine
from test.mocks import InMemoryLogger


@pytest.fixture()
def logger() -> InMemoryLogger:
    return InMemoryLogger()


@pytest.fixture()
def engine(logger: InMemoryLogger) -> UnittestMockFakeEngine:
    return UnittestMockFakeEngine(logger=logger)
