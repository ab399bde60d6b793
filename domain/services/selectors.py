from __future__ import annotations

from typing import Any, Callable

from domain.errors import InvalidSelectorError, require
from domain.models import Selector, SelectorKind


class _MemberAccess:
    def __init__(self, name: str) -> None:
        self.name = name
        self.called = False
        self.args: tuple[Any, ...] = ()
        self.kwargs: dict[str, Any] = {}

    def __call__(self, *args: Any, **kwargs: Any) -> "_MemberAccess":
        if self.called:
            raise InvalidSelectorError(f"'{self.name}' is called more than once in the selector")
        self.called = True
        self.args = args
        self.kwargs = kwargs
        return self

    def __getattr__(self, name: str) -> Any:
        if name.startswith("__"):
            raise AttributeError(name)
        raise InvalidSelectorError(
            f"chained access '{self.name}...{name}' is not supported in a selector"
        )


class _SelectorRecorder:
    """Stands in for the fake while a selector runs and records what it touches."""

    def __init__(self) -> None:
        object.__setattr__(self, "_accesses", [])

    def __getattr__(self, name: str) -> Any:
        if name.startswith("__"):
            raise AttributeError(name)
        access = _MemberAccess(name)
        self._accesses.append(access)
        return access

    def __setattr__(self, name: str, value: Any) -> None:
        raise InvalidSelectorError(f"assigning '{name}' is not supported in a selector")


def capture_selector(selector: Callable[[Any], Any]) -> Selector:
    """
    Run ``selector`` against a recording stand-in and return the member it
    names together with the arguments it passed.

    The real fake is never touched, so capturing has no side effects beyond
    evaluating the selector's own argument expressions.
    """
    require(selector, "selector")
    if not callable(selector):
        raise InvalidSelectorError(f"{selector!r} is not callable")

    recorder = _SelectorRecorder()
    selector(recorder)
    accesses: list[_MemberAccess] = recorder._accesses

    if len(accesses) != 1:
        names = ", ".join(a.name for a in accesses) or "nothing"
        raise InvalidSelectorError(
            f"a selector must access exactly one member, got: {names}"
        )
    access = accesses[0]
    if access.called:
        return Selector(access.name, SelectorKind.METHOD, access.args, access.kwargs)
    return Selector(access.name, SelectorKind.PROPERTY)
