"""
understudy: a runtime mock-call registry.

Test code arms substitute behaviors per call site; mock-mode instances route
their intercepted methods through the registry instead of their real bodies.

Public API re-exports from kernel/ (machinery) and glue (class integration).
"""
from .kernel import (
    BehaviorStore,
    BehaviorTypeError,
    BorrowError,
    BudgetState,
    CallBudget,
    CallSite,
    CheckedBox,
    InvalidBudgetError,
    Lane,
    MockContext,
    NoBehaviorError,
    Produced,
    RegistrationError,
    UnderstudyError,
    WhenHolder,
)
from .glue import MaybeFaux, Mockable, dispatch, intercept, when
from .logging_setup import configure_logging
from .settings import UnderstudySettings, load_settings

__all__ = [
    # Errors
    "UnderstudyError",
    "NoBehaviorError",
    "BehaviorTypeError",
    "BorrowError",
    "RegistrationError",
    "InvalidBudgetError",
    # Kernel
    "BehaviorStore",
    "BudgetState",
    "CallBudget",
    "CallSite",
    "CheckedBox",
    "Lane",
    "MockContext",
    "Produced",
    "WhenHolder",
    # Glue
    "MaybeFaux",
    "Mockable",
    "dispatch",
    "intercept",
    "when",
    # Ambient
    "configure_logging",
    "UnderstudySettings",
    "load_settings",
]
