"""
Result type for reporting failures as data.

The engine never raises for bad user input. Validators and element
lookups return a Result instead, so callers decide what to render:

    from core.result import Ok, Err

    def not_blank(value: str) -> Result[str, str]:
        if value.strip():
            return Ok(value)
        return Err("This field is required")

    result = not_blank("")
    if result.is_err():
        field.show_error(result.error)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, NoReturn, TypeVar, Union

T = TypeVar("T")  # Success type
E = TypeVar("E")  # Error type
U = TypeVar("U")  # Mapped success type


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """A successful result containing a value.

    Example:
        >>> Ok(42).unwrap()
        42
    """

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value

    def unwrap_or(self, default: T) -> T:
        return self.value

    def map(self, func: Callable[[T], U]) -> Ok[U]:
        """Transform the success value.

        Example:
            >>> Ok(5).map(lambda x: x * 2)
            Ok(10)
        """
        return Ok(func(self.value))

    def and_then(self, func: Callable[[T], "Result[U, Any]"]) -> "Result[U, Any]":
        """Chain another Result-returning operation (e.g. the next validator)."""
        return func(self.value)

    @property
    def error(self) -> None:
        """Ok has no error."""
        return None

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """A failed result containing an error (usually a message string).

    Example:
        >>> Err("Enter a valid email").error
        'Enter a valid email'
    """

    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> NoReturn:
        """Raises ValueError, since Err has no success value."""
        raise ValueError(f"Called unwrap on Err: {self.error}")

    def unwrap_or(self, default: T) -> T:
        return default

    def map(self, func: Callable[[Any], U]) -> "Err[E]":
        return self

    def and_then(self, func: Callable[[Any], "Result[U, E]"]) -> "Err[E]":
        """Short-circuit: the chained operation is skipped."""
        return self

    @property
    def value(self) -> None:
        """Err has no value."""
        return None

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


Result = Union[Ok[T], Err[E]]


def try_result(func: Callable[[], T]) -> Result[T, str]:
    """Run a callable and wrap its return value or exception message.

    Used at the presentation-layer boundary, where element queries into a
    foreign toolkit may fail (e.g. a widget deleted underneath us).

    Example:
        >>> try_result(lambda: int("x")).is_err()
        True
    """
    try:
        return Ok(func())
    except Exception as e:
        return Err(str(e))
