from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Callable, Mapping as MappingType

from domain.errors import InvalidArgumentError, require

if TYPE_CHECKING:
    from domain.ports import ContainerPort


class SelectorKind(str, Enum):
    """Which kind of member a selector points at."""

    METHOD = "method"
    PROPERTY = "property"


@dataclass(frozen=True)
class Selector:
    """
    A quoted call against a fake: the member plus the arguments it was
    called with inside the selector callable.

    Arguments may contain ``ArgumentMatcher`` placeholders.
    """

    member: str
    kind: SelectorKind
    args: tuple[Any, ...] = ()
    kwargs: MappingType[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "kwargs", MappingProxyType(dict(self.kwargs)))

    def describe(self) -> str:
        if self.kind is SelectorKind.PROPERTY:
            return self.member
        parts = [repr(a) for a in self.args]
        parts.extend(f"{k}={v!r}" for k, v in self.kwargs.items())
        return f"{self.member}({', '.join(parts)})"


def _is_instance(instance: Any, abstraction: type) -> bool:
    # Protocols without @runtime_checkable cannot be checked at runtime.
    try:
        return isinstance(instance, abstraction)
    except TypeError:
        return True


def _is_subclass(implementation: type, abstraction: type) -> bool:
    try:
        return issubclass(implementation, abstraction)
    except TypeError:
        return True


class Mapping(ABC):
    """A binding from an abstraction to the strategy used to resolve it."""

    abstraction: type

    @abstractmethod
    def configure(self, container: ContainerPort) -> None:
        ...


@dataclass(frozen=True)
class ObjectMapping(Mapping):
    """Resolve the abstraction to one pre-built instance."""

    abstraction: type
    instance: Any

    def __post_init__(self) -> None:
        require(self.abstraction, "abstraction")
        require(self.instance, "instance")
        if not _is_instance(self.instance, self.abstraction):
            raise InvalidArgumentError(
                f"{self.instance!r} is not an instance of {self.abstraction.__name__}"
            )

    def configure(self, container: ContainerPort) -> None:
        container.bind_instance(self.abstraction, self.instance)


@dataclass(frozen=True)
class TypeMapping(Mapping):
    """Resolve the abstraction by letting the container build ``implementation``."""

    abstraction: type
    implementation: type

    def __post_init__(self) -> None:
        require(self.abstraction, "abstraction")
        require(self.implementation, "implementation")
        if not isinstance(self.implementation, type):
            raise InvalidArgumentError(f"{self.implementation!r} is not a class")
        if not _is_subclass(self.implementation, self.abstraction):
            raise InvalidArgumentError(
                f"{self.implementation.__name__} does not implement {self.abstraction.__name__}"
            )

    def configure(self, container: ContainerPort) -> None:
        container.bind_type(self.abstraction, self.implementation)


@dataclass(frozen=True)
class FactoryMapping(Mapping):
    """Resolve the abstraction by calling ``factory`` each time it is requested."""

    abstraction: type
    factory: Callable[[], Any]

    def __post_init__(self) -> None:
        require(self.abstraction, "abstraction")
        require(self.factory, "factory")
        if not callable(self.factory):
            raise InvalidArgumentError(f"{self.factory!r} is not callable")

    def configure(self, container: ContainerPort) -> None:
        container.bind_factory(self.abstraction, self.factory)


@dataclass(frozen=True)
class FakesConfig:
    """Runtime settings for building a fake engine."""

    engine: str = "unittest_mock"
    log_level: str = "warning"
