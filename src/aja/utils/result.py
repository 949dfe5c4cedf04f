"""Explicit success/failure values for best-effort helpers."""

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E", bound=Exception)


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful result carrying a value."""

    value: T

    @property
    def is_ok(self) -> bool:
        return True

    def unwrap_or(self, default: T) -> T:
        return self.value


@dataclass(frozen=True)
class Err(Generic[E]):
    """Failed result carrying the error that caused it."""

    error: E

    @property
    def is_ok(self) -> bool:
        return False

    def unwrap_or(self, default):
        return default


Result = Union[Ok[T], Err[E]]
