from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable


class ArgumentMatcher(ABC):
    """Placeholder used inside a selector to match a range of argument values."""

    @abstractmethod
    def matches(self, value: Any) -> bool:
        ...

    @abstractmethod
    def describe(self) -> str:
        ...

    def __repr__(self) -> str:
        return self.describe()


class AnyOf(ArgumentMatcher):
    def __init__(self, type_: type) -> None:
        self.type_ = type_

    def matches(self, value: Any) -> bool:
        return isinstance(value, self.type_)

    def describe(self) -> str:
        return f"Param.is_any({self.type_.__name__})"


class Satisfies(ArgumentMatcher):
    def __init__(self, predicate: Callable[[Any], bool], description: str | None = None) -> None:
        self.predicate = predicate
        self.description = description

    def matches(self, value: Any) -> bool:
        return bool(self.predicate(value))

    def describe(self) -> str:
        label = self.description or getattr(self.predicate, "__name__", "predicate")
        return f"Param.matches({label})"


class NotNone(ArgumentMatcher):
    def matches(self, value: Any) -> bool:
        return value is not None

    def describe(self) -> str:
        return "Param.is_not_none()"


class Param:
    """
    Factory for argument matchers used in selectors.

    Example::

        engine.set_up_query_behavior_for(
            fake, lambda x: x.find(Param.is_any(int))
        ).returns(item)
    """

    @staticmethod
    def is_any(type_: type = object) -> Any:
        return AnyOf(type_)

    @staticmethod
    def matches(predicate: Callable[[Any], bool], description: str | None = None) -> Any:
        return Satisfies(predicate, description)

    @staticmethod
    def is_not_none() -> Any:
        return NotNone()
