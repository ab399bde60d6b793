from __future__ import annotations

import collections.abc
import inspect
import sys
import typing
from typing import Any

_EMPTY_BY_ORIGIN: dict[Any, Any] = {
    list: list,
    dict: dict,
    set: set,
    frozenset: frozenset,
    tuple: tuple,
    collections.abc.Sequence: tuple,
    collections.abc.MutableSequence: list,
    collections.abc.Mapping: dict,
    collections.abc.MutableMapping: dict,
    collections.abc.Set: frozenset,
    collections.abc.MutableSet: set,
    collections.abc.Iterable: tuple,
    collections.abc.Collection: tuple,
}

_ZERO_TYPES = (bool, int, float, complex, str, bytes)

# Builtins recognised when an annotation could only be kept as a string.
_BUILTINS_BY_NAME: dict[str, type] = {
    t.__name__: t for t in (*_ZERO_TYPES, list, dict, set, frozenset, tuple)
}


def default_value_for(annotation: Any) -> Any:
    """
    Value an unconfigured member returns for its annotated type.

    Scalars give their zero value, containers an empty one and everything
    else (including ``Optional`` and unannotated members) gives ``None``.
    """
    if annotation is None or annotation is inspect.Parameter.empty:
        return None
    if isinstance(annotation, str):
        annotation = _builtin_from_string(annotation)
        if annotation is None:
            return None
    if annotation in _ZERO_TYPES:
        return annotation()
    origin = typing.get_origin(annotation) or annotation
    factory = _EMPTY_BY_ORIGIN.get(origin)
    if factory is not None:
        return factory()
    return None


def type_hints(owner: Any) -> dict[str, Any]:
    """
    Resolved annotations of ``owner``.

    ``typing.get_type_hints`` fails as a whole when one name cannot be
    resolved (typically an import guarded by ``TYPE_CHECKING``). In that
    case every annotation is resolved on its own and only the failing ones
    stay strings.
    """
    try:
        return typing.get_type_hints(owner)
    except (NameError, TypeError, AttributeError):
        raw = dict(getattr(owner, "__annotations__", {}) or {})
        globalns = _globals_of(owner)
        return {name: _resolve_one(name, annotation, globalns) for name, annotation in raw.items()}


def return_annotation(member: Any) -> Any:
    if isinstance(member, property):
        member = member.fget
    if isinstance(member, (staticmethod, classmethod)):
        member = member.__func__
    if member is None:
        return None
    return type_hints(member).get("return")


def _resolve_one(name: str, annotation: Any, globalns: dict[str, Any]) -> Any:
    if not isinstance(annotation, str):
        return annotation

    def holder() -> None:
        ...

    holder.__annotations__ = {name: annotation}
    try:
        return typing.get_type_hints(holder, globalns=globalns)[name]
    except (NameError, TypeError, AttributeError, SyntaxError):
        return annotation


def _globals_of(owner: Any) -> dict[str, Any]:
    if isinstance(owner, type):
        module = sys.modules.get(owner.__module__)
        return dict(vars(module)) if module is not None else {}
    return getattr(inspect.unwrap(owner), "__globals__", {})


def _builtin_from_string(annotation: str) -> Any:
    if "|" in annotation or annotation.startswith(("Optional[", "typing.Optional[")):
        return None
    head = annotation.split("[", 1)[0].strip()
    return _BUILTINS_BY_NAME.get(head)
