"""
Result type for functional error handling.

File-touching functions in ngsmatch return ``Ok(value)`` or ``Err(error)``
instead of raising, so callers decide whether a failure aborts the run.
The error payload is normally an ``NgsMatchError`` subclass.

Usage:
    >>> result = load_panel(path)
    >>> if result.is_err():
    ...     echo_error(str(result.unwrap_err()))
    >>> panel = result.unwrap()
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TypeVar, Generic, Callable, Union, Any

from ngsmatch.core.errors import NgsMatchError

T = TypeVar("T")  # Success type
E = TypeVar("E")  # Error type
U = TypeVar("U")  # Transformed type


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Represents a successful result containing a value."""
    
    value: T
    
    def is_ok(self) -> bool:
        return True
    
    def is_err(self) -> bool:
        return False
    
    def unwrap(self) -> T:
        """Returns the contained value."""
        return self.value
    
    def unwrap_or(self, default: T) -> T:
        return self.value
    
    def unwrap_err(self) -> Any:
        """Raises ValueError since this is Ok."""
        raise ValueError("Called unwrap_err on Ok value")
    
    def map(self, fn: Callable[[T], U]) -> Ok[U]:
        return Ok(fn(self.value))
    
    def and_then(self, fn: Callable[[T], Result[U, Any]]) -> Result[U, Any]:
        """Chains another Result-returning function."""
        return fn(self.value)
    
    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Represents a failed result containing an error."""
    
    error: E
    
    def is_ok(self) -> bool:
        return False
    
    def is_err(self) -> bool:
        return True
    
    def unwrap(self) -> Any:
        """
        Raises the contained error.
        
        Typed ngsmatch errors are re-raised as-is; any other payload is
        wrapped in ValueError.
        """
        if isinstance(self.error, NgsMatchError):
            raise self.error
        raise ValueError(f"Called unwrap on Err: {self.error}")
    
    def unwrap_or(self, default: T) -> T:
        return default
    
    def unwrap_err(self) -> E:
        """Returns the contained error."""
        return self.error
    
    def map(self, fn: Callable[[Any], Any]) -> Err[E]:
        return self
    
    def and_then(self, fn: Callable[[Any], Any]) -> Err[E]:
        """Returns self (short-circuits on error)."""
        return self
    
    def __repr__(self) -> str:
        return f"Err({self.error!r})"


# Type alias for Result
Result = Union[Ok[T], Err[E]]


def collect_results(results: list[Result[T, E]]) -> Result[list[T], E]:
    """
    Collects a list of Results into a Result of list.
    
    Returns Err on first error encountered, otherwise Ok with all values
    in input order.
    """
    values = []
    for result in results:
        if result.is_err():
            return result  # type: ignore
        values.append(result.unwrap())
    return Ok(values)
