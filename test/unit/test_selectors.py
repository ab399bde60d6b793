from __future__ import annotations

from unittest import mock

import pytest

from domain import InvalidArgumentError, InvalidSelectorError, Param, Selector, SelectorKind
from domain.params import AnyOf
from domain.services import capture_selector
from infra.mocking import UnittestMockSelectorRewriter
from infra.mocking.rewriter import MatcherArgument


def test_captures_method_call_with_arguments() -> None:
    selector = capture_selector(lambda c: c.add(2, b=3))

    assert selector == Selector("add", SelectorKind.METHOD, (2,), {"b": 3})
    assert selector.describe() == "add(2, b=3)"


def test_captures_property_access() -> None:
    selector = capture_selector(lambda s: s.timeout)

    assert selector.kind is SelectorKind.PROPERTY
    assert selector.member == "timeout"
    assert selector.args == ()


def test_capturing_never_touches_a_real_object() -> None:
    side_effects: list[str] = []

    class Real:
        def run(self) -> None:
            side_effects.append("ran")

    capture_selector(lambda r: r.run())

    assert side_effects == []


def test_argument_expressions_are_evaluated_once() -> None:
    evaluated: list[int] = []

    def arg() -> int:
        evaluated.append(1)
        return 7

    selector = capture_selector(lambda c: c.add(arg(), 1))

    assert selector.args == (7, 1)
    assert evaluated == [1]


def test_matchers_are_kept_as_placeholders() -> None:
    selector = capture_selector(lambda c: c.add(Param.is_any(int), 1))

    assert isinstance(selector.args[0], AnyOf)
    assert selector.args[0].type_ is int


@pytest.mark.parametrize(
    "fn",
    [
        lambda c: None,
        lambda c: (c.add(1, 2), c.divide(1, 2)),
        lambda c: c.add(1, 2)(3),
    ],
)
def test_selector_must_touch_exactly_one_member(fn) -> None:
    with pytest.raises(InvalidSelectorError):
        capture_selector(fn)


def test_chained_access_is_rejected() -> None:
    with pytest.raises(InvalidSelectorError, match="chained"):
        capture_selector(lambda c: c.repository.get("a"))


def test_assignment_is_rejected() -> None:
    with pytest.raises(InvalidSelectorError):
        capture_selector(lambda s: setattr(s, "timeout", 5))


def test_missing_and_non_callable_selectors() -> None:
    with pytest.raises(InvalidArgumentError):
        capture_selector(None)
    with pytest.raises(InvalidSelectorError):
        capture_selector("add")


def test_param_matchers() -> None:
    assert Param.is_any(int).matches(3)
    assert not Param.is_any(int).matches("3")
    assert Param.is_any().matches(None)
    assert Param.matches(lambda v: v > 2).matches(3)
    assert not Param.matches(lambda v: v > 2).matches(1)
    assert Param.is_not_none().matches(0)
    assert not Param.is_not_none().matches(None)


def test_matcher_descriptions() -> None:
    assert repr(Param.is_any(int)) == "Param.is_any(int)"
    assert repr(Param.matches(lambda v: True, "positive")) == "Param.matches(positive)"
    assert repr(Param.is_not_none()) == "Param.is_not_none()"


def test_rewriter_translates_matchers_for_unittest_mock() -> None:
    selector = capture_selector(
        lambda c: c.describe(Param.is_any(), verbose=Param.is_any(bool))
    )

    rewritten = UnittestMockSelectorRewriter().rewrite(selector)

    assert rewritten.args[0] is mock.ANY
    assert isinstance(rewritten.kwargs["verbose"], MatcherArgument)
    assert mock.call(5, verbose=True) == mock.call(*rewritten.args, **rewritten.kwargs)
    assert mock.call(5, verbose="yes") != mock.call(*rewritten.args, **rewritten.kwargs)


def test_rewriter_keeps_plain_values() -> None:
    selector = capture_selector(lambda c: c.add(2, 3))

    assert UnittestMockSelectorRewriter().rewrite(selector) == selector
