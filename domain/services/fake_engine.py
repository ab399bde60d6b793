from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, TypeVar

from domain.errors import require
from domain.models import Selector
from domain.ports import (
    CallOccurrencePort,
    CommandOptionsPort,
    LoggerPort,
    QueryOptionsPort,
    SelectorRewriterPort,
)
from domain.services.selectors import capture_selector

T = TypeVar("T")


class RewritingFakeEngine(ABC):
    """
    Technology-neutral part of a fake engine.

    Guards arguments, captures selectors as data, lets the adapter's
    rewriter translate them and then hands off to the ``_on_*`` template
    methods implemented per mocking technology.
    """

    def __init__(self, rewriter: SelectorRewriterPort, logger: LoggerPort) -> None:
        self._rewriter = rewriter
        self._logger = logger

    def create_fake(self, abstraction_type: type, *args: Any) -> Any:
        require(abstraction_type, "abstraction_type")
        fake = self._on_create_fake(abstraction_type, args)
        self._logger.info("fake created", abstraction=_type_name(abstraction_type))
        return fake

    def partial_mock(self, concrete_type: type[T], *args: Any) -> T:
        require(concrete_type, "concrete_type")
        fake = self._on_partial_mock(concrete_type, args)
        self._logger.info("partial mock created", abstraction=_type_name(concrete_type))
        return fake

    def set_up_query_behavior_for(
        self,
        fake: Any,
        selector: Callable[[Any], Any],
    ) -> QueryOptionsPort:
        require(fake, "fake")
        rewritten = self._rewrite(selector)
        options = self._on_set_up_query_behavior_for(fake, rewritten)
        self._logger.info("query behavior set up", member=rewritten.describe())
        return options

    def set_up_command_behavior_for(
        self,
        fake: Any,
        selector: Callable[[Any], Any],
    ) -> CommandOptionsPort:
        require(fake, "fake")
        rewritten = self._rewrite(selector)
        options = self._on_set_up_command_behavior_for(fake, rewritten)
        self._logger.info("command behavior set up", member=rewritten.describe())
        return options

    def verify_behavior_was_executed(
        self,
        fake: Any,
        selector: Callable[[Any], Any],
    ) -> CallOccurrencePort:
        require(fake, "fake")
        return self._on_verify_behavior_was_executed(fake, self._rewrite(selector))

    def verify_behavior_was_not_executed(
        self,
        fake: Any,
        selector: Callable[[Any], Any],
    ) -> None:
        require(fake, "fake")
        self._on_verify_behavior_was_not_executed(fake, self._rewrite(selector))

    def _rewrite(self, selector: Callable[[Any], Any]) -> Selector:
        return self._rewriter.rewrite(capture_selector(selector))

    @abstractmethod
    def _on_create_fake(self, abstraction_type: type, args: tuple[Any, ...]) -> Any:
        ...

    @abstractmethod
    def _on_partial_mock(self, concrete_type: type[T], args: tuple[Any, ...]) -> T:
        ...

    @abstractmethod
    def _on_set_up_query_behavior_for(self, fake: Any, selector: Selector) -> QueryOptionsPort:
        ...

    @abstractmethod
    def _on_set_up_command_behavior_for(self, fake: Any, selector: Selector) -> CommandOptionsPort:
        ...

    @abstractmethod
    def _on_verify_behavior_was_executed(self, fake: Any, selector: Selector) -> CallOccurrencePort:
        ...

    @abstractmethod
    def _on_verify_behavior_was_not_executed(self, fake: Any, selector: Selector) -> None:
        ...


def _type_name(value: Any) -> str:
    return getattr(value, "__qualname__", repr(value))
