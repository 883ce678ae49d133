"""
Kernel: the machinery of the mock registry.

- errors: failure taxonomy
- schema: call sites, lanes, checked boxes
- store: erased behavior store (unchecked and checked lanes)
- budget: call-count wrapper
- context: per-instance mock context with a runtime-checked borrow
- when: registration handle

The kernel is distinct from glue (how classes plug into it).
"""
from .errors import (
    BehaviorTypeError,
    BorrowError,
    InvalidBudgetError,
    NoBehaviorError,
    RegistrationError,
    UnderstudyError,
)
from .schema import CallSite, CheckedBox, Lane, Produced
from .store import BehaviorStore
from .budget import BudgetState, CallBudget, CountedBehavior, register_counted
from .context import MockContext
from .when import WhenHolder

__all__ = [
    # Errors
    "UnderstudyError",
    "NoBehaviorError",
    "BehaviorTypeError",
    "BorrowError",
    "RegistrationError",
    "InvalidBudgetError",
    # Schema
    "CallSite",
    "CheckedBox",
    "Lane",
    "Produced",
    # Store
    "BehaviorStore",
    # Budget
    "BudgetState",
    "CallBudget",
    "CountedBehavior",
    "register_counted",
    # Context
    "MockContext",
    # Registration
    "WhenHolder",
]
