from __future__ import annotations

import inspect
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Callable
from unittest import mock

from domain.errors import InvalidSelectorError, NotAFakeError
from domain.models import Selector, SelectorKind
from infra.mocking.defaults import default_value_for

_HANDLE_ATTRIBUTE = "__fakekit_handle__"

Action = Callable[[tuple, dict], Any]


@dataclass
class FakeMember:
    """One interceptable member of a fake and the mock recording its calls."""

    name: str
    kind: SelectorKind
    recorder: mock.Mock
    fallback: Callable[..., Any]
    returns: Any = None
    signature: inspect.Signature | None = None
    is_async: bool = False

    def canonical_call(self, args: tuple, kwargs: dict) -> Any:
        """Bind arguments to the signature so positional and keyword forms compare equal."""
        if self.signature is None:
            return mock.call(*args, **kwargs)
        bound = self.signature.bind(*args, **kwargs)
        bound.apply_defaults()
        return mock.call(*bound.args, **bound.kwargs)


@dataclass
class Behavior:
    expected: Any
    action: Action | None = None

    def matches(self, actual: Any) -> bool:
        return calls_match(self.expected, actual)


@dataclass
class FakeHandle:
    """
    Controls one fake: which members it intercepts, what each configured
    call does and where the call history lives.

    The handle is stored on the fake itself so it can be looked up again
    from the fake without the engine holding on to either.
    """

    target_type: type
    call_base: bool = False
    members: dict[str, FakeMember] = field(default_factory=dict)
    values: dict[str, Any] = field(default_factory=dict)
    _behaviors: dict[str, list[Behavior]] = field(
        default_factory=lambda: defaultdict(list), init=False, repr=False,
    )

    @staticmethod
    def of(fake: Any) -> "FakeHandle":
        handle = getattr(fake, _HANDLE_ATTRIBUTE, None)
        if not isinstance(handle, FakeHandle):
            raise NotAFakeError(f"{fake!r} was not created by a fake engine")
        return handle

    def attach(self, fake: Any) -> None:
        object.__setattr__(fake, _HANDLE_ATTRIBUTE, self)

    # -- interception -------------------------------------------------------

    def method_dispatcher(self, member: FakeMember) -> Callable[..., Any]:
        def resolve(args: tuple, kwargs: dict) -> Any:
            behavior = self._find_behavior(member, self._actual_call(member, args, kwargs))
            if behavior is None:
                return member.fallback(*args, **kwargs)
            return self._invoke(member, behavior, args, kwargs)

        if member.is_async:
            async def dispatch_async(*args: Any, **kwargs: Any) -> Any:
                result = resolve(args, kwargs)
                if inspect.isawaitable(result):
                    result = await result
                return result

            return dispatch_async

        def dispatch(*args: Any, **kwargs: Any) -> Any:
            return resolve(args, kwargs)

        return dispatch

    def property_accessor(
        self,
        member: FakeMember,
        setter: Callable[[Any], None],
    ) -> Callable[..., Any]:
        # PropertyMock calls its side effect with no arguments on get and
        # with the new value on set.
        def access(*args: Any) -> Any:
            if args:
                setter(args[0])
                return None
            behavior = self._find_behavior(member, mock.call())
            if behavior is None:
                return member.fallback()
            return self._invoke(member, behavior, (), {})

        return access

    # -- configuration and verification ------------------------------------

    def member_for(self, selector: Selector) -> FakeMember:
        member = self.members.get(selector.member)
        if member is None:
            raise InvalidSelectorError(
                f"'{selector.member}' is not an interceptable member of {self.target_type.__name__}"
            )
        if member.kind is not selector.kind:
            raise InvalidSelectorError(
                f"'{selector.member}' is a {member.kind.value} of {self.target_type.__name__}, "
                f"but the selector uses it as a {selector.kind.value}"
            )
        return member

    def expected_call(self, selector: Selector) -> Any:
        member = self.member_for(selector)
        try:
            return member.canonical_call(selector.args, dict(selector.kwargs))
        except TypeError as exc:
            raise InvalidSelectorError(
                f"selector arguments do not fit {self.describe(selector)}: {exc}"
            ) from exc

    def add_behavior(self, selector: Selector) -> Behavior:
        behavior = Behavior(self.expected_call(selector))
        self._behaviors[selector.member].append(behavior)
        return behavior

    def recorded_calls(self, selector: Selector) -> list[Any]:
        member = self.member_for(selector)
        calls = list(member.recorder.call_args_list)
        if member.kind is SelectorKind.PROPERTY:
            # Property sets are recorded with the assigned value.
            calls = [c for c in calls if not c.args and not c.kwargs]
        return calls

    def matching_calls(self, selector: Selector) -> list[Any]:
        expected = self.expected_call(selector)
        member = self.members[selector.member]
        return [
            c for c in self.recorded_calls(selector)
            if calls_match(expected, self._actual_call(member, c.args, c.kwargs))
        ]

    def describe(self, selector: Selector) -> str:
        return f"{self.target_type.__name__}.{selector.describe()}"

    # -- internal helpers ---------------------------------------------------

    def _find_behavior(self, member: FakeMember, actual: Any) -> Behavior | None:
        for behavior in reversed(self._behaviors.get(member.name, ())):
            if behavior.matches(actual):
                return behavior
        return None

    @staticmethod
    def _actual_call(member: FakeMember, args: tuple, kwargs: dict) -> Any:
        try:
            return member.canonical_call(args, kwargs)
        except TypeError:
            return mock.call(*args, **kwargs)

    @staticmethod
    def _invoke(member: FakeMember, behavior: Behavior, args: tuple, kwargs: dict) -> Any:
        if behavior.action is None:
            return default_value_for(member.returns)
        return behavior.action(args, kwargs)


def calls_match(expected: Any, actual: Any) -> bool:
    """Compare with the expected value on the left so matchers see the actual argument."""
    if len(expected.args) != len(actual.args):
        return False
    if expected.kwargs.keys() != actual.kwargs.keys():
        return False
    if not all(bool(e == a) for e, a in zip(expected.args, actual.args)):
        return False
    return all(bool(expected.kwargs[k] == actual.kwargs[k]) for k in expected.kwargs)
