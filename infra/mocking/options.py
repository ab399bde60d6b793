from __future__ import annotations

from typing import Any, Callable

from domain.errors import BehaviorVerificationError
from domain.ports import LoggerPort
from infra.mocking.fake_handle import Behavior, FakeMember


def _raiser(error: BaseException | type[BaseException]) -> Callable[[tuple, dict], Any]:
    def raise_error(args: tuple, kwargs: dict) -> Any:
        raise error

    return raise_error


class QueryOptions:
    """Configures what a matching call to a value-returning member produces."""

    def __init__(self, behavior: Behavior, member: FakeMember) -> None:
        self._behavior = behavior
        self._member = member

    def returns(self, value: Any) -> None:
        self._behavior.action = lambda args, kwargs: value

    def returns_from(self, fn: Callable[..., Any]) -> None:
        """Compute the return value from the arguments of the actual call."""
        self._behavior.action = lambda args, kwargs: fn(*args, **kwargs)

    def throws(self, error: BaseException | type[BaseException]) -> None:
        self._behavior.action = _raiser(error)

    def calls_original(self) -> None:
        fallback = self._member.fallback
        self._behavior.action = lambda args, kwargs: fallback(*args, **kwargs)


class CommandOptions:
    """Configures what a matching call to a side-effecting member does."""

    def __init__(self, behavior: Behavior, member: FakeMember) -> None:
        self._behavior = behavior
        self._member = member

    def callback(self, fn: Callable[..., Any]) -> None:
        def run(args: tuple, kwargs: dict) -> None:
            fn(*args, **kwargs)

        self._behavior.action = run

    def throws(self, error: BaseException | type[BaseException]) -> None:
        self._behavior.action = _raiser(error)

    def calls_original(self) -> None:
        fallback = self._member.fallback
        self._behavior.action = lambda args, kwargs: fallback(*args, **kwargs)


class CallOccurrence:
    """
    Result of a successful "was executed" verification.

    Each assertion recounts the fake's call history, so calls made after
    the verification are taken into account.
    """

    def __init__(
        self,
        *,
        matching_calls: Callable[[], list[Any]],
        recorded_calls: Callable[[], list[Any]],
        description: str,
        logger: LoggerPort,
    ) -> None:
        self._matching_calls = matching_calls
        self._recorded_calls = recorded_calls
        self._description = description
        self._logger = logger

    @property
    def call_count(self) -> int:
        return len(self._matching_calls())

    def times(self, expected: int) -> None:
        self._check(lambda n: n == expected, f"exactly {expected} time(s)")

    def only_once(self) -> None:
        self.times(1)

    def twice(self) -> None:
        self.times(2)

    def at_least(self, minimum: int) -> None:
        self._check(lambda n: n >= minimum, f"at least {minimum} time(s)")

    def at_most(self, maximum: int) -> None:
        self._check(lambda n: n <= maximum, f"at most {maximum} time(s)")

    def _check(self, holds: Callable[[int], bool], expectation: str) -> None:
        actual = self.call_count
        if not holds(actual):
            fail_verification(
                self._logger,
                description=self._description,
                expectation=expectation,
                actual=actual,
                recorded=self._recorded_calls(),
            )


def fail_verification(
    logger: LoggerPort,
    *,
    description: str,
    expectation: str,
    actual: int,
    recorded: list[Any],
) -> None:
    logger.warning(
        "verification failed",
        member=description,
        expected=expectation,
        actual=actual,
    )
    lines = [
        f"Expected {description} to be called {expectation}, "
        f"but it was called {actual} time(s).",
    ]
    if recorded:
        lines.append("Performed calls:")
        lines.extend(f"  {c!r}" for c in recorded)
    else:
        lines.append("No calls were performed.")
    raise BehaviorVerificationError("\n".join(lines))

