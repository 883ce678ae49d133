"""
Failure taxonomy for the mock registry.

Every error is raised at the offending call and none of them is meant to be
recovered from inside a test: the fix is always in the test setup.
"""

from __future__ import annotations

from typing import Any, Hashable, Optional, Sequence


class UnderstudyError(Exception):
    """Base class for all registry errors."""


class NoBehaviorError(UnderstudyError, RuntimeError):
    """A mocked method was called with nothing registered for its call site.

    Raised both when no behavior was ever registered and when the budget of
    a registered one has run out.
    """

    def __init__(self, site: Hashable, armed: Sequence[Hashable] = ()) -> None:
        self.site = site
        self.armed = tuple(armed)
        message = f"no mock configured for {site}"
        if self.armed:
            listed = ", ".join(str(item) for item in self.armed)
            message += f" (armed: {listed})"
        super().__init__(message)


class BehaviorTypeError(UnderstudyError, TypeError):
    """A checked-lane value did not match the type it was registered with."""

    def __init__(self, expected: Any, actual: Any, detail: Optional[str] = None) -> None:
        self.expected = expected
        self.actual = actual
        message = f"mock type mismatch: expected {_type_name(expected)}, got {_type_name(actual)}"
        if detail:
            message += f": {detail}"
        super().__init__(message)


class BorrowError(UnderstudyError, RuntimeError):
    """The mock context was accessed while already borrowed."""


class RegistrationError(UnderstudyError, RuntimeError):
    """A registration handle was misused."""


class InvalidBudgetError(UnderstudyError, ValueError):
    """A call budget that is not a positive count."""


def _type_name(tp: Any) -> str:
    if isinstance(tp, type):
        return tp.__qualname__
    return repr(tp)


__all__ = [
    "UnderstudyError",
    "NoBehaviorError",
    "BehaviorTypeError",
    "BorrowError",
    "RegistrationError",
    "InvalidBudgetError",
]
