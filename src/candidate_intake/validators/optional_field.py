"""
Present/absent view over optional payload keys.

JSON payloads say "not provided" in two ways: the key is missing, or it is
sent as null. The validator must treat both the same, so it never reads
optional keys directly; it reads them through `optional(payload, key)`.
"""

from dataclasses import dataclass
from typing import Any, Generic, Iterable, Mapping, TypeVar

T = TypeVar("T")

_MISSING = object()


@dataclass(frozen=True)
class OptionalField(Generic[T]):
    """
    An optional payload value with an explicit discriminant.

    `present` is False when the key was missing or its value was None;
    `value` is only meaningful when `present` is True.
    """
    key: str
    present: bool
    value: T | None = None

    @classmethod
    def absent(cls, key: str) -> "OptionalField[T]":
        return cls(key=key, present=False)

    @classmethod
    def of(cls, key: str, value: T) -> "OptionalField[T]":
        return cls(key=key, present=True, value=value)

    def __bool__(self) -> bool:
        return self.present


def optional(payload: Mapping[str, Any], key: str) -> OptionalField[Any]:
    """Read `key` from `payload`; missing keys and None both collapse to absent."""
    value = payload.get(key, _MISSING) if isinstance(payload, Mapping) else _MISSING
    if value is _MISSING or value is None:
        return OptionalField.absent(key)
    return OptionalField.of(key, value)


def has_key(payload: Mapping[str, Any], key: str) -> bool:
    """
    True when `key` was sent at all, even as null.

    Only the CV rules care about this distinction: an explicit null file path
    is an error, a missing one is not.
    """
    return isinstance(payload, Mapping) and key in payload


def entries(payload: Mapping[str, Any], key: str) -> Iterable[Any]:
    """Iterate an optional sequence; absent reads as empty, a lone value as one entry."""
    field = optional(payload, key)
    if not field:
        return ()
    if isinstance(field.value, (list, tuple)):
        return field.value
    return (field.value,)
