"""Fake engine adapters and the catalogue used to pick one by name."""

from __future__ import annotations

from typing import Callable

from domain.errors import UnknownFakeEngineError
from domain.ports import FakeEnginePort, LoggerPort

from .fake_handle import FakeHandle
from .options import CallOccurrence, CommandOptions, QueryOptions
from .rewriter import UnittestMockSelectorRewriter
from .unittest_mock_engine import UnittestMockFakeEngine

FAKE_ENGINES: dict[str, Callable[[LoggerPort | None], FakeEnginePort]] = {
    "unittest_mock": UnittestMockFakeEngine,
}


def create_fake_engine(name: str = "unittest_mock", *, logger: LoggerPort | None = None) -> FakeEnginePort:
    try:
        factory = FAKE_ENGINES[name]
    except KeyError:
        raise UnknownFakeEngineError(
            f"no fake engine named '{name}', available: {', '.join(sorted(FAKE_ENGINES))}"
        ) from None
    return factory(logger)


__all__ = [
    "FAKE_ENGINES",
    "create_fake_engine",
    "UnittestMockFakeEngine",
    "UnittestMockSelectorRewriter",
    "FakeHandle",
    "QueryOptions",
    "CommandOptions",
    "CallOccurrence",
]
