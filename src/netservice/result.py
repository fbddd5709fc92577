"""Two-variant outcome type delivered by NetworkService."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, NoReturn, TypeVar, Union

from .errors import NetworkError, _equal_errors

T = TypeVar("T")


@dataclass(frozen=True)
class Success(Generic[T]):
    """A successfully produced value (decoded object or raw bytes)."""

    value: T

    @property
    def is_success(self) -> bool:
        return True

    @property
    def is_failure(self) -> bool:
        return False

    def unwrap(self) -> T:
        """Return the carried value."""
        return self.value

    def unwrap_or(self, default: T) -> T:
        return self.value


@dataclass(frozen=True, eq=False)
class Failure:
    """
    A classified error.

    Two failures compare equal when they carry the same error kind with
    the same arguments, so results from repeated calls can be compared.
    """

    error: NetworkError

    @property
    def is_success(self) -> bool:
        return False

    @property
    def is_failure(self) -> bool:
        return True

    def unwrap(self) -> NoReturn:
        """Raise the carried error."""
        raise self.error

    def unwrap_or(self, default: T) -> T:
        return default

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Failure):
            return NotImplemented
        return _equal_errors(self.error, other.error)

    def __hash__(self) -> int:
        return hash((type(self.error), self.error.args))


Result = Union[Success[T], Failure]
