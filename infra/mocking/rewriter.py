from __future__ import annotations

from dataclasses import replace
from typing import Any
from unittest import mock

from domain.models import Selector
from domain.params import AnyOf, ArgumentMatcher


class MatcherArgument:
    """Adapts an ``ArgumentMatcher`` to the ``==`` comparison ``unittest.mock`` uses."""

    def __init__(self, matcher: ArgumentMatcher) -> None:
        self.matcher = matcher

    def __eq__(self, other: object) -> bool:
        return self.matcher.matches(other)

    def __ne__(self, other: object) -> bool:
        return not self.matcher.matches(other)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return self.matcher.describe()


class UnittestMockSelectorRewriter:
    """Rewrites selector arguments into values ``unittest.mock`` can compare."""

    def rewrite(self, selector: Selector) -> Selector:
        return replace(
            selector,
            args=tuple(self._rewrite_argument(a) for a in selector.args),
            kwargs={k: self._rewrite_argument(v) for k, v in selector.kwargs.items()},
        )

    @staticmethod
    def _rewrite_argument(value: Any) -> Any:
        if isinstance(value, AnyOf) and value.type_ is object:
            return mock.ANY
        if isinstance(value, ArgumentMatcher):
            return MatcherArgument(value)
        return value
