from __future__ import annotations

from typing import Any, Callable, Generic, TypeVar

from domain.errors import require
from domain.models import FactoryMapping, Mapping, ObjectMapping, TypeMapping
from domain.ports import ContainerPort, LoggerPort

T = TypeVar("T")


class Registrar:
    """
    Collects abstraction-to-implementation bindings and replays them onto a
    container. Anything not registered here is left for the auto-mocking
    container to fake.

    The first registration for an abstraction wins; later ones are ignored.
    """

    def __init__(self, *, logger: LoggerPort | None = None) -> None:
        self._mappings: dict[type, Mapping] = {}
        self._logger = logger

    @classmethod
    def new(
        cls,
        configure: Callable[["Registrar"], Any],
        *,
        logger: LoggerPort | None = None,
    ) -> "Registrar":
        """Build a registrar and populate it through ``configure``."""
        require(configure, "configure")
        registrar = cls(logger=logger)
        configure(registrar)
        return registrar

    def for_type(self, abstraction: type[T]) -> "RegistrationExpression[T]":
        require(abstraction, "abstraction")
        return RegistrationExpression(abstraction, self)

    def store(self, mapping: Mapping) -> None:
        require(mapping, "mapping")
        # setdefault is atomic on dict, so concurrent stores keep exactly one winner.
        stored = self._mappings.setdefault(mapping.abstraction, mapping)
        if stored is not mapping and self._logger is not None:
            self._logger.info(
                "registration ignored",
                abstraction=mapping.abstraction.__name__,
                kept=type(stored).__name__,
                ignored=type(mapping).__name__,
            )

    def configure(self, container: ContainerPort) -> None:
        require(container, "container")
        for mapping in list(self._mappings.values()):
            mapping.configure(container)

    @property
    def mappings(self) -> tuple[Mapping, ...]:
        return tuple(self._mappings.values())


class RegistrationExpression(Generic[T]):
    """Completes a registration started with ``Registrar.for_type``."""

    def __init__(self, abstraction: type[T], registrar: Registrar) -> None:
        self._abstraction = abstraction
        self._registrar = registrar

    def use(self, instance: T) -> None:
        """Resolve the abstraction to ``instance`` every time."""
        require(instance, "instance")
        self._registrar.store(ObjectMapping(self._abstraction, instance))

    def use_type(self, implementation: type[T]) -> None:
        """Let the container build ``implementation`` for the abstraction."""
        require(implementation, "implementation")
        self._registrar.store(TypeMapping(self._abstraction, implementation))

    def use_factory(self, factory: Callable[[], T]) -> None:
        """Call ``factory`` whenever the container needs an instance."""
        require(factory, "factory")
        self._registrar.store(FactoryMapping(self._abstraction, factory))
