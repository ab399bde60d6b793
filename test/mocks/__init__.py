"""
Reusable fakes and in-memory implementations for tests.
"""

from .fake_config_provider import InMemoryConfigProvider
from .fake_runtime import InMemoryLogger
from .recording_container import RecordingContainer

__all__ = [
    "InMemoryConfigProvider",
    "InMemoryLogger",
    "RecordingContainer",
]
