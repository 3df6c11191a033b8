"""
Result type for service operations that can be refused.

Spin requests and wheel edits are rejected without raising: the caller gets
a failed Result carrying a message and an error code, and nothing changes.

Usage:
    result = controller.request_spin(5)
    if result:
        session = result.value
    elif result.error_code == error_codes.SPIN_IN_PROGRESS:
        ...  # Button should already have been disabled
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True)
class Result(Generic[T]):
    """
    Outcome of a service call.

    Attributes:
        success: Whether the operation was accepted
        value: Payload when accepted (None for void operations)
        error: Human readable reason when refused
        error_code: Constant from services.error_codes when refused
    """

    success: bool
    value: T | None = None
    error: str | None = None
    error_code: str | None = None

    @classmethod
    def ok(cls, value: T | None = None) -> "Result[T]":
        return cls(success=True, value=value)

    @classmethod
    def fail(cls, error: str, code: str | None = None) -> "Result[T]":
        return cls(success=False, error=error, error_code=code)

    def __bool__(self) -> bool:
        return self.success

    def unwrap(self) -> T:
        """
        Return the payload of an accepted result.

        Raises:
            ValueError: If the operation was refused
        """
        if not self.success:
            raise ValueError(f"Cannot unwrap failed result: {self.error}")
        return self.value  # type: ignore

    def unwrap_or(self, default: T) -> T:
        return self.value if self.success else default  # type: ignore

    def map(self, fn: Callable[[T], "Result[U]"]) -> "Result[U]":
        """Chain another refusable step onto an accepted result."""
        if not self.success:
            return self  # type: ignore
        return fn(self.value)  # type: ignore
