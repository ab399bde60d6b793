"""Infrastructure adapters – concrete implementations of domain ports."""

from .config import FileSystemConfigProvider
from .container import AutoMockingContainer
from .mocking import (
    FAKE_ENGINES,
    UnittestMockFakeEngine,
    UnittestMockSelectorRewriter,
    create_fake_engine,
)
from .runtime import StructuredLogger

__all__ = [
    "FileSystemConfigProvider",
    "AutoMockingContainer",
    "FAKE_ENGINES",
    "UnittestMockFakeEngine",
    "UnittestMockSelectorRewriter",
    "create_fake_engine",
    "StructuredLogger",
]
