from __future__ import annotations


class FakesError(Exception):
    """Base class for every error raised by fakekit."""


class InvalidArgumentError(FakesError, ValueError):
    """A required argument was missing or violates a mapping invariant."""


class InvalidSelectorError(FakesError, ValueError):
    """A selector does not describe exactly one member of the fake."""


class FakeConstructionError(FakesError, TypeError):
    """The requested type cannot be faked with the given arguments."""


class NotAFakeError(FakesError, TypeError):
    """A setup or verification targeted an object that is not a fake."""


class BehaviorVerificationError(FakesError, AssertionError):
    """
    A call occurrence assertion did not hold.

    Derives from ``AssertionError`` so test runners report it as a
    failed test rather than an error.
    """


class ResolutionError(FakesError, LookupError):
    """The container could not build the requested type."""


class UnknownFakeEngineError(FakesError, LookupError):
    """No fake engine adapter is registered under the requested name."""


def require(value: object, name: str) -> None:
    if value is None:
        raise InvalidArgumentError(f"{name} must not be None")
