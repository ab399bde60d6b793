from __future__ import annotations

from abc import abstractmethod
from typing import Any, Callable, Protocol, TypeVar, runtime_checkable

from domain.models import FakesConfig, Selector

T = TypeVar("T")


@runtime_checkable
class ContainerPort(Protocol):
    """Binding surface a dependency container exposes to ``Registrar.configure``."""

    @abstractmethod
    def bind_instance(self, abstraction: type, instance: Any) -> None:
        ...

    @abstractmethod
    def bind_type(self, abstraction: type, implementation: type) -> None:
        ...

    @abstractmethod
    def bind_factory(self, abstraction: type, factory: Callable[[], Any]) -> None:
        ...


@runtime_checkable
class QueryOptionsPort(Protocol):
    """Fluent configuration for a member that returns a value."""

    def returns(self, value: Any) -> None:
        ...

    def returns_from(self, fn: Callable[..., Any]) -> None:
        ...

    def throws(self, error: BaseException | type[BaseException]) -> None:
        ...

    def calls_original(self) -> None:
        ...


@runtime_checkable
class CommandOptionsPort(Protocol):
    """Fluent configuration for a member called for its side effects."""

    def callback(self, fn: Callable[..., Any]) -> None:
        ...

    def throws(self, error: BaseException | type[BaseException]) -> None:
        ...

    def calls_original(self) -> None:
        ...


@runtime_checkable
class CallOccurrencePort(Protocol):
    """Further assertions about how often a verified call happened."""

    @property
    def call_count(self) -> int:
        ...

    def times(self, expected: int) -> None:
        ...

    def only_once(self) -> None:
        ...

    def twice(self) -> None:
        ...

    def at_least(self, minimum: int) -> None:
        ...

    def at_most(self, maximum: int) -> None:
        ...


@runtime_checkable
class SelectorRewriterPort(Protocol):
    """
    Translates a captured selector into the shape one mocking technology
    compares against its recorded calls.
    """

    @abstractmethod
    def rewrite(self, selector: Selector) -> Selector:
        ...


@runtime_checkable
class FakeEnginePort(Protocol):
    """
    The single seam through which fakes are created, configured and verified.

    Each mocking technology provides one implementation.
    """

    @abstractmethod
    def create_fake(self, abstraction_type: type, *args: Any) -> Any:
        ...

    @abstractmethod
    def partial_mock(self, concrete_type: type[T], *args: Any) -> T:
        ...

    @abstractmethod
    def set_up_query_behavior_for(
        self,
        fake: Any,
        selector: Callable[[Any], Any],
    ) -> QueryOptionsPort:
        ...

    @abstractmethod
    def set_up_command_behavior_for(
        self,
        fake: Any,
        selector: Callable[[Any], Any],
    ) -> CommandOptionsPort:
        ...

    @abstractmethod
    def verify_behavior_was_executed(
        self,
        fake: Any,
        selector: Callable[[Any], Any],
    ) -> CallOccurrencePort:
        ...

    @abstractmethod
    def verify_behavior_was_not_executed(
        self,
        fake: Any,
        selector: Callable[[Any], Any],
    ) -> None:
        ...


@runtime_checkable
class LoggerPort(Protocol):
    """Structured logging abstraction."""

    def info(self, message: str, **fields: Any) -> None:
        ...

    def warning(self, message: str, **fields: Any) -> None:
        ...

    def error(self, message: str, **fields: Any) -> None:
        ...


@runtime_checkable
class ConfigProviderPort(Protocol):
    """Read-only access to fakekit settings."""

    def get_config(self) -> FakesConfig:
        ...

    def validate(self) -> list[str]:
        ...
