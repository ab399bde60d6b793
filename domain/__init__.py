"""
Domain layer package.

This package contains the fake engine contract, the registration model and
the selector model. Nothing here depends on a specific mocking library or
dependency container.
"""

from .errors import (  # noqa: F401
    BehaviorVerificationError,
    FakeConstructionError,
    FakesError,
    InvalidArgumentError,
    InvalidSelectorError,
    NotAFakeError,
    ResolutionError,
    UnknownFakeEngineError,
)
from .models import (  # noqa: F401
    FactoryMapping,
    FakesConfig,
    Mapping,
    ObjectMapping,
    Selector,
    SelectorKind,
    TypeMapping,
)
from .params import ArgumentMatcher, Param  # noqa: F401
from .ports import (  # noqa: F401
    CallOccurrencePort,
    CommandOptionsPort,
    ConfigProviderPort,
    ContainerPort,
    FakeEnginePort,
    LoggerPort,
    QueryOptionsPort,
    SelectorRewriterPort,
)

__all__ = [
    # Errors
    "FakesError",
    "InvalidArgumentError",
    "InvalidSelectorError",
    "FakeConstructionError",
    "NotAFakeError",
    "BehaviorVerificationError",
    "ResolutionError",
    "UnknownFakeEngineError",
    # Models
    "Selector",
    "SelectorKind",
    "Mapping",
    "ObjectMapping",
    "TypeMapping",
    "FactoryMapping",
    "FakesConfig",
    # Matchers
    "ArgumentMatcher",
    "Param",
    # Ports
    "ContainerPort",
    "FakeEnginePort",
    "SelectorRewriterPort",
    "QueryOptionsPort",
    "CommandOptionsPort",
    "CallOccurrencePort",
    "LoggerPort",
    "ConfigProviderPort",
]
