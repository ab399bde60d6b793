from __future__ import annotations

import inspect
from contextlib import contextmanager
from typing import Any, Callable, Iterator, TypeVar

from domain.errors import ResolutionError, require
from domain.ports import FakeEnginePort, LoggerPort
from infra.mocking.defaults import default_value_for, type_hints

T = TypeVar("T")


class AutoMockingContainer:
    """
    Dependency container that fakes every abstraction it has no binding for.

    Bindings come from ``Registrar.configure``. Binding the same abstraction
    twice keeps the later binding. Fakes handed out for unbound
    abstractions are cached, so every resolution of one abstraction sees
    the same fake.
    """

    def __init__(self, engine: FakeEnginePort, *, logger: LoggerPort | None = None) -> None:
        self._engine = engine
        self._logger = logger
        self._bindings: dict[type, Callable[[], Any]] = {}
        self._fakes: dict[type, Any] = {}
        self._resolving: list[type] = []

    # -- ContainerPort ------------------------------------------------------

    def bind_instance(self, abstraction: type, instance: Any) -> None:
        require(abstraction, "abstraction")
        require(instance, "instance")
        self._bindings[abstraction] = lambda: instance

    def bind_type(self, abstraction: type, implementation: type) -> None:
        require(abstraction, "abstraction")
        require(implementation, "implementation")
        self._bindings[abstraction] = lambda: self.build(implementation)

    def bind_factory(self, abstraction: type, factory: Callable[[], Any]) -> None:
        require(abstraction, "abstraction")
        require(factory, "factory")
        self._bindings[abstraction] = lambda: self._call_factory(abstraction, factory)

    # -- resolution ---------------------------------------------------------

    def is_bound(self, abstraction: type) -> bool:
        return abstraction in self._bindings

    def resolve(self, abstraction: type[T]) -> T:
        require(abstraction, "abstraction")
        binding = self._bindings.get(abstraction)
        if binding is not None:
            return binding()
        return self.fake_for(abstraction)

    def fake_for(self, abstraction: type[T]) -> T:
        """
        Return the container-wide fake for ``abstraction``, creating it on first use.

        A fake never runs its constructor, but the engine still checks that
        the arguments fit it. Parameters typed with a resolvable class are
        resolved through the container. Other parameters get the typed
        default of their annotation.
        """
        if abstraction not in self._fakes:
            with self._resolution_of(abstraction):
                args = self._fake_constructor_arguments(abstraction)
            if self._logger is not None:
                self._logger.info("auto-faking dependency", abstraction=abstraction.__name__)
            self._fakes[abstraction] = self._engine.create_fake(abstraction, *args)
        return self._fakes[abstraction]

    def build(self, implementation: type[T]) -> T:
        """Instantiate ``implementation``, resolving constructor parameters by annotation."""
        with self._resolution_of(implementation):
            args, kwargs = self._constructor_arguments(implementation)
            return implementation(*args, **kwargs)

    # -- internal helpers ---------------------------------------------------

    @contextmanager
    def _resolution_of(self, target: type) -> Iterator[None]:
        if target in self._resolving:
            chain = " -> ".join(t.__name__ for t in (*self._resolving, target))
            raise ResolutionError(f"circular dependency: {chain}")
        self._resolving.append(target)
        try:
            yield
        finally:
            self._resolving.pop()

    def _constructor_arguments(self, implementation: type) -> tuple[list[Any], dict[str, Any]]:
        signature = _constructor_signature(implementation)
        if signature is None:
            return [], {}
        hints = self._constructor_hints(implementation)
        args: list[Any] = []
        kwargs: dict[str, Any] = {}
        for parameter in signature.parameters.values():
            if parameter.kind in (parameter.VAR_POSITIONAL, parameter.VAR_KEYWORD):
                continue
            annotation = hints.get(parameter.name)
            if not self._resolvable(annotation):
                if parameter.default is not parameter.empty:
                    continue
                raise ResolutionError(
                    f"cannot resolve parameter '{parameter.name}' of {implementation.__name__}: "
                    f"annotation {annotation!r} is not a resolvable class"
                )
            value = self.resolve(annotation)
            if parameter.kind is parameter.POSITIONAL_ONLY:
                args.append(value)
            else:
                kwargs[parameter.name] = value
        return args, kwargs

    def _fake_constructor_arguments(self, abstraction: type) -> list[Any]:
        # Protocols take no constructor arguments.
        if getattr(abstraction, "_is_protocol", False):
            return []
        signature = _constructor_signature(abstraction)
        if signature is None:
            return []
        hints = self._constructor_hints(abstraction)
        args: list[Any] = []
        for parameter in signature.parameters.values():
            if parameter.kind not in (parameter.POSITIONAL_ONLY, parameter.POSITIONAL_OR_KEYWORD):
                continue
            # Everything after the first optional parameter may be left out.
            if parameter.default is not parameter.empty:
                break
            annotation = hints.get(parameter.name)
            if self._resolvable(annotation):
                args.append(self.resolve(annotation))
            else:
                args.append(default_value_for(annotation))
        return args

    @staticmethod
    def _constructor_hints(implementation: type) -> dict[str, Any]:
        hints = type_hints(implementation)
        hints.update(
            (name, hint)
            for name, hint in type_hints(implementation.__init__).items()
            if not isinstance(hint, str)
        )
        return hints

    @staticmethod
    def _resolvable(annotation: Any) -> bool:
        return isinstance(annotation, type) and annotation.__module__ != "builtins"

    @staticmethod
    def _call_factory(abstraction: type, factory: Callable[[], Any]) -> Any:
        instance = factory()
        try:
            matches = isinstance(instance, abstraction)
        except TypeError:
            matches = True
        if not matches:
            raise ResolutionError(
                f"factory for {abstraction.__name__} returned {type(instance).__name__}"
            )
        return instance


def _constructor_signature(implementation: type) -> inspect.Signature | None:
    try:
        return inspect.signature(implementation)
    except (TypeError, ValueError):
        return None
