from __future__ import annotations

from typing import Any, Callable, Generic, TypeVar

from domain.errors import InvalidArgumentError, require
from domain.ports import (
    CallOccurrencePort,
    CommandOptionsPort,
    ConfigProviderPort,
    FakeEnginePort,
    LoggerPort,
    QueryOptionsPort,
)
from domain.services import Registrar
from infra.container import AutoMockingContainer
from infra.mocking import create_fake_engine
from infra.runtime import StructuredLogger

T = TypeVar("T")
S = TypeVar("S")


class FakesContext(Generic[S]):
    """
    Test-facing facade over one fake engine and one auto-mocking container.

    Typical use inside a test::

        ctx = FakesContext(subject_type=OrderService)
        ctx.when_told_to(ctx.the(OrderRepository), lambda r: r.get(1)).returns(order)
        ctx.subject.ship(1)
        ctx.was_told_to(ctx.the(Mailer), lambda m: m.send(Param.is_any(str), Param.is_any(str)))
    """

    def __init__(
        self,
        *,
        engine: FakeEnginePort | None = None,
        subject_type: type[S] | None = None,
        logger: LoggerPort | None = None,
    ) -> None:
        self._engine = engine or create_fake_engine(logger=logger)
        self._container = AutoMockingContainer(self._engine, logger=logger)
        self._subject_type = subject_type
        self._subject: S | None = None

    @classmethod
    def from_config(
        cls,
        provider: ConfigProviderPort,
        *,
        subject_type: type[S] | None = None,
    ) -> "FakesContext[S]":
        errors = provider.validate()
        if errors:
            raise InvalidArgumentError("invalid fakekit configuration: " + "; ".join(errors))
        config = provider.get_config()
        logger = StructuredLogger(min_level=config.log_level)
        engine = create_fake_engine(config.engine, logger=logger)
        return cls(engine=engine, subject_type=subject_type, logger=logger)

    @property
    def engine(self) -> FakeEnginePort:
        return self._engine

    @property
    def container(self) -> AutoMockingContainer:
        return self._container

    # -- fakes --------------------------------------------------------------

    def an(self, abstraction: type[T], *args: Any) -> T:
        """A new fake that is not shared with the container."""
        return self._engine.create_fake(abstraction, *args)

    def some(self, abstraction: type[T], count: int = 3) -> list[T]:
        if count < 0:
            raise InvalidArgumentError("count must not be negative")
        return [self._engine.create_fake(abstraction) for _ in range(count)]

    def the(self, abstraction: type[T]) -> T:
        """The instance the container injects for ``abstraction``."""
        return self._container.resolve(abstraction)

    def partial(self, concrete_type: type[T], *args: Any) -> T:
        return self._engine.partial_mock(concrete_type, *args)

    def configure(self, registrations: Registrar | Callable[[Registrar], Any]) -> Registrar:
        """Apply a registrar, or a callable that fills one, to the container."""
        require(registrations, "registrations")
        registrar = registrations if isinstance(registrations, Registrar) else Registrar.new(registrations)
        registrar.configure(self._container)
        return registrar

    # -- subject ------------------------------------------------------------

    @property
    def subject(self) -> S:
        if self._subject is None:
            if self._subject_type is None:
                raise InvalidArgumentError("no subject_type was given to this context")
            self._subject = self._container.build(self._subject_type)
        return self._subject

    @subject.setter
    def subject(self, value: S) -> None:
        self._subject = value

    # -- behavior -----------------------------------------------------------

    def when_told_to(self, fake: Any, selector: Callable[[Any], Any]) -> QueryOptionsPort:
        return self._engine.set_up_query_behavior_for(fake, selector)

    def when_told_to_do(self, fake: Any, selector: Callable[[Any], Any]) -> CommandOptionsPort:
        return self._engine.set_up_command_behavior_for(fake, selector)

    def was_told_to(self, fake: Any, selector: Callable[[Any], Any]) -> CallOccurrencePort:
        return self._engine.verify_behavior_was_executed(fake, selector)

    def was_not_told_to(self, fake: Any, selector: Callable[[Any], Any]) -> None:
        self._engine.verify_behavior_was_not_executed(fake, selector)
