"""Shared fixtures and context for BDD step definitions."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import pytest

from app import FakesContext
from domain.services import Registrar
from infra.container import AutoMockingContainer
from infra.mocking import UnittestMockFakeEngine
from test.fixtures import InMemoryRepository, OrderService
from test.mocks import InMemoryLogger


@dataclass
class ScenarioState:
    """Holds mutable state shared across BDD steps."""

    logger: InMemoryLogger
    engine: UnittestMockFakeEngine
    registrar: Registrar | None = None
    container: AutoMockingContainer | None = None
    registered: list[InMemoryRepository] = field(default_factory=list)
    fake: Any = None
    result: Any = None
    fakes: FakesContext[OrderService] | None = None


@pytest.fixture()
def state() -> ScenarioState:
    logger = InMemoryLogger()
    return ScenarioState(logger=logger, engine=UnittestMockFakeEngine(logger=logger))
