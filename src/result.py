"""Result type for attempt outcomes without exception-based control flow.

Each request attempt returns a Result: either the transport response or
the fault that ended the attempt. The retry loop inspects the fault
instead of catching and re-dispatching exceptions.
"""

from typing import TypedDict, Optional, TypeVar, Callable, Any

T = TypeVar("T")


class Result(TypedDict):
    """Result type for operations that can succeed or fail.

    Attributes:
        ok: True if operation succeeded, False if it failed
        value: The successful result value (None if failed)
        error: The failure payload, a Fault or an exception (None if succeeded)
    """

    ok: bool
    value: Optional[Any]
    error: Optional[Any]


def success(value: T) -> Result:
    """Create a successful result."""
    return Result(ok=True, value=value, error=None)


def failure(error: Any) -> Result:
    """Create a failed result.

    Args:
        error: Fault or exception describing the failure

    Returns:
        Result with ok=False and the error payload
    """
    if error is None:
        raise ValueError("failure() requires an error payload")
    return Result(ok=False, value=None, error=error)


def from_exception(exc: Exception) -> Result:
    """Create a failed result carrying the exception itself."""
    return failure(exc)


def try_operation(operation: Callable[[], T], *catch: type) -> Result:
    """Execute an operation and return a Result.

    Args:
        operation: Function to execute
        *catch: Exception types to capture (defaults to Exception)

    Returns:
        Result with either the return value or the captured exception
    """
    catch_types = catch or (Exception,)
    try:
        value = operation()
        return success(value)
    except catch_types as exc:
        return from_exception(exc)
