from __future__ import annotations

import functools
import inspect
import types
import typing
from typing import Any, Callable, Iterator, TypeVar
from unittest import mock

from domain.errors import FakeConstructionError
from domain.models import Selector, SelectorKind
from domain.ports import LoggerPort
from domain.services import RewritingFakeEngine
from infra.mocking.defaults import default_value_for, return_annotation, type_hints
from infra.mocking.fake_handle import FakeHandle, FakeMember
from infra.mocking.options import CallOccurrence, CommandOptions, QueryOptions, fail_verification
from infra.mocking.rewriter import UnittestMockSelectorRewriter
from infra.runtime import StructuredLogger

T = TypeVar("T")

# Py_TPFLAGS_BASETYPE: the type may be subclassed.
_BASETYPE_FLAG = 1 << 10
_MISSING = object()


class UnittestMockFakeEngine(RewritingFakeEngine):
    """
    Fake engine backed by ``unittest.mock``.

    Full fakes are ``create_autospec`` instances whose methods dispatch
    through the fake's handle and whose properties are ``PropertyMock``
    auto-properties. Partial fakes are real instances of a per-fake
    subclass whose members are replaced by recording mocks that call
    through to the base class unless a setup matches.
    """

    def __init__(self, logger: LoggerPort | None = None) -> None:
        super().__init__(UnittestMockSelectorRewriter(), logger or StructuredLogger())

    # -- construction -------------------------------------------------------

    def _on_create_fake(self, abstraction_type: type, args: tuple[Any, ...]) -> Any:
        _ensure_fakeable(abstraction_type)
        if args and getattr(abstraction_type, "_is_protocol", False):
            raise FakeConstructionError(
                f"{abstraction_type.__name__} is a protocol and takes no constructor arguments"
            )
        _check_constructor_arguments(abstraction_type, args)
        try:
            fake = mock.create_autospec(abstraction_type, instance=True)
        except (TypeError, AttributeError) as exc:
            raise FakeConstructionError(f"cannot fake {abstraction_type.__name__}: {exc}") from exc

        handle = FakeHandle(abstraction_type)
        for name, static in _public_members(abstraction_type):
            if isinstance(static, property):
                self._install_auto_property(
                    fake, handle, name, return_annotation(static), _MISSING,
                )
            elif _is_method(static):
                self._install_faked_method(fake, handle, name, static)
        for name, annotation in _annotated_attributes(abstraction_type):
            if name not in handle.members:
                initial = inspect.getattr_static(abstraction_type, name, _MISSING)
                self._install_auto_property(fake, handle, name, annotation, initial)
        handle.attach(fake)
        return fake

    def _on_partial_mock(self, concrete_type: type[T], args: tuple[Any, ...]) -> T:
        _ensure_fakeable(concrete_type)
        if getattr(concrete_type, "_is_protocol", False) or inspect.isabstract(concrete_type):
            raise FakeConstructionError(
                f"{concrete_type.__name__} has abstract members, there is no implementation to call through to"
            )
        _check_constructor_arguments(concrete_type, args)
        try:
            proxy_type = types.new_class(f"{concrete_type.__name__}Fake", (concrete_type,))
        except TypeError as exc:
            raise FakeConstructionError(f"cannot subclass {concrete_type.__name__}: {exc}") from exc
        proxy_type.__module__ = concrete_type.__module__

        if concrete_type.__new__ is object.__new__:
            fake = object.__new__(proxy_type)
        else:
            fake = proxy_type.__new__(proxy_type, *args)

        handle = FakeHandle(concrete_type, call_base=True)
        for name, static in _public_members(concrete_type):
            if isinstance(static, property):
                self._install_call_through_property(proxy_type, fake, handle, name, static)
            elif _is_method(static):
                self._install_call_through_method(proxy_type, fake, handle, name, static)
        handle.attach(fake)

        try:
            fake.__init__(*args)
        except Exception as exc:
            raise FakeConstructionError(
                f"constructing {concrete_type.__name__} failed: {exc}"
            ) from exc
        return fake

    @staticmethod
    def _install_faked_method(fake: Any, handle: FakeHandle, name: str, static: Any) -> None:
        returns = return_annotation(static)
        member = FakeMember(
            name=name,
            kind=SelectorKind.METHOD,
            recorder=getattr(fake, name),
            fallback=_default_returner(returns),
            returns=returns,
            signature=_method_signature(static),
            is_async=inspect.iscoroutinefunction(_unwrap(static)),
        )
        member.recorder.side_effect = handle.method_dispatcher(member)
        handle.members[name] = member

    @staticmethod
    def _install_auto_property(
        fake: Any,
        handle: FakeHandle,
        name: str,
        annotation: Any,
        initial: Any,
    ) -> None:
        handle.values[name] = default_value_for(annotation) if initial is _MISSING else initial
        recorder = mock.PropertyMock()
        member = FakeMember(
            name=name,
            kind=SelectorKind.PROPERTY,
            recorder=recorder,
            fallback=lambda: handle.values[name],
            returns=annotation,
        )
        recorder.side_effect = handle.property_accessor(
            member, lambda value: handle.values.__setitem__(name, value),
        )
        # Every mock instance has its own class, so this does not leak to other fakes.
        setattr(type(fake), name, recorder)
        handle.members[name] = member

    @staticmethod
    def _install_call_through_method(
        proxy_type: type,
        fake: Any,
        handle: FakeHandle,
        name: str,
        base: Any,
    ) -> None:
        func = _unwrap(base)
        if isinstance(base, classmethod):
            fallback = functools.partial(func, proxy_type)
        elif isinstance(base, staticmethod):
            fallback = func
        else:
            fallback = functools.partial(func, fake)
        is_async = inspect.iscoroutinefunction(func)
        label = f"{handle.target_type.__name__}.{name}"
        recorder = mock.AsyncMock(name=label) if is_async else mock.MagicMock(name=label)
        member = FakeMember(
            name=name,
            kind=SelectorKind.METHOD,
            recorder=recorder,
            fallback=fallback,
            returns=return_annotation(base),
            signature=_method_signature(base),
            is_async=is_async,
        )
        recorder.side_effect = handle.method_dispatcher(member)
        setattr(proxy_type, name, recorder)
        handle.members[name] = member

    @staticmethod
    def _install_call_through_property(
        proxy_type: type,
        fake: Any,
        handle: FakeHandle,
        name: str,
        base: property,
    ) -> None:
        def set_value(value: Any) -> None:
            if base.fset is None:
                raise AttributeError(
                    f"property '{name}' of {handle.target_type.__name__} has no setter"
                )
            base.fset(fake, value)

        recorder = mock.PropertyMock()
        member = FakeMember(
            name=name,
            kind=SelectorKind.PROPERTY,
            recorder=recorder,
            fallback=lambda: base.__get__(fake, proxy_type),
            returns=return_annotation(base),
        )
        recorder.side_effect = handle.property_accessor(member, set_value)
        setattr(proxy_type, name, recorder)
        handle.members[name] = member

    # -- behavior -----------------------------------------------------------

    def _on_set_up_query_behavior_for(self, fake: Any, selector: Selector) -> QueryOptions:
        handle = FakeHandle.of(fake)
        behavior = handle.add_behavior(selector)
        return QueryOptions(behavior, handle.member_for(selector))

    def _on_set_up_command_behavior_for(self, fake: Any, selector: Selector) -> CommandOptions:
        handle = FakeHandle.of(fake)
        behavior = handle.add_behavior(selector)
        return CommandOptions(behavior, handle.member_for(selector))

    def _on_verify_behavior_was_executed(self, fake: Any, selector: Selector) -> CallOccurrence:
        handle = FakeHandle.of(fake)
        occurrence = CallOccurrence(
            matching_calls=lambda: handle.matching_calls(selector),
            recorded_calls=lambda: handle.recorded_calls(selector),
            description=handle.describe(selector),
            logger=self._logger,
        )
        occurrence.at_least(1)
        return occurrence

    def _on_verify_behavior_was_not_executed(self, fake: Any, selector: Selector) -> None:
        handle = FakeHandle.of(fake)
        matches = handle.matching_calls(selector)
        if matches:
            fail_verification(
                self._logger,
                description=handle.describe(selector),
                expectation="exactly 0 time(s)",
                actual=len(matches),
                recorded=handle.recorded_calls(selector),
            )


def _ensure_fakeable(target: Any) -> None:
    if not isinstance(target, type):
        raise FakeConstructionError(f"{target!r} is not a class and cannot be faked")
    if getattr(target, "__final__", False):
        raise FakeConstructionError(f"{target.__name__} is marked final and cannot be faked")
    if not target.__flags__ & _BASETYPE_FLAG:
        raise FakeConstructionError(f"{target.__name__} does not allow subclassing and cannot be faked")


def _check_constructor_arguments(target: type, args: tuple[Any, ...]) -> None:
    try:
        signature = inspect.signature(target)
    except (TypeError, ValueError):
        # Builtin constructors without introspectable signatures.
        return
    try:
        signature.bind(*args)
    except TypeError as exc:
        raise FakeConstructionError(
            f"no constructor of {target.__name__} accepts {len(args)} argument(s): {exc}"
        ) from exc


def _public_members(target: type) -> Iterator[tuple[str, Any]]:
    for name in dir(target):
        if name.startswith("_"):
            continue
        yield name, inspect.getattr_static(target, name)


def _annotated_attributes(target: type) -> Iterator[tuple[str, Any]]:
    for name, annotation in type_hints(target).items():
        if name.startswith("_"):
            continue
        if annotation is typing.ClassVar or typing.get_origin(annotation) is typing.ClassVar:
            continue
        if isinstance(annotation, str) and annotation.startswith(("ClassVar", "typing.ClassVar")):
            continue
        yield name, annotation


def _is_method(static: Any) -> bool:
    return inspect.isfunction(static) or isinstance(static, (staticmethod, classmethod))


def _unwrap(static: Any) -> Any:
    if isinstance(static, (staticmethod, classmethod)):
        return static.__func__
    return static


def _method_signature(static: Any) -> inspect.Signature | None:
    try:
        signature = inspect.signature(_unwrap(static))
    except (TypeError, ValueError):
        return None
    parameters = list(signature.parameters.values())
    if not isinstance(static, staticmethod) and parameters:
        parameters = parameters[1:]
    return signature.replace(parameters=parameters)


def _default_returner(annotation: Any) -> Callable[..., Any]:
    def default(*args: Any, **kwargs: Any) -> Any:
        return default_value_for(annotation)

    return default
