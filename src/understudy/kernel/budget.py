"""
Call-count wrapper: turns one registered behavior into N allowed calls.

The store consumes an entry on every invocation, so a behavior that must
survive its own call is put back by the wrapper. The budget is an explicit
state machine:

    PENDING(n)   --call--> output, then EXHAUSTED      if n == 1
    PENDING(n)   --call--> output, then PENDING(n - 1) if n > 1
    PENDING(inf) --call--> output, then PENDING(inf)
    EXHAUSTED    (no transition; the slot stays empty and the next call misses)
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Callable, Hashable, Optional

from pydantic import BaseModel, ConfigDict, PositiveInt, ValidationError

from .errors import InvalidBudgetError
from .schema import Lane
from .store import BehaviorStore, ErasedBehavior

logger = logging.getLogger(__name__)


class BudgetState(str, Enum):
    PENDING = "pending"
    EXHAUSTED = "exhausted"


class CallBudget(BaseModel):
    """Remaining allowed calls; None means unbounded."""

    model_config = ConfigDict(strict=True)

    remaining: Optional[PositiveInt] = 1
    state: BudgetState = BudgetState.PENDING

    @classmethod
    def once(cls) -> "CallBudget":
        return cls(remaining=1)

    @classmethod
    def times(cls, count: Any) -> "CallBudget":
        if count is None:
            raise InvalidBudgetError("call budget must be a positive count, got None")
        try:
            return cls(remaining=count)
        except ValidationError as exc:
            raise InvalidBudgetError(
                f"call budget must be a positive count, got {count!r}"
            ) from exc

    @classmethod
    def always(cls) -> "CallBudget":
        return cls(remaining=None)

    @property
    def unbounded(self) -> bool:
        return self.remaining is None

    def consume(self) -> BudgetState:
        """Spend one call and return the state the budget moves to."""
        if self.state == BudgetState.EXHAUSTED:
            return self.state
        if self.remaining is None:
            return self.state
        if self.remaining == 1:
            self.state = BudgetState.EXHAUSTED
        else:
            self.remaining -= 1
        return self.state


class CountedBehavior:
    """An erased behavior that puts itself back in the store until spent.

    Sits in front of the lane's erased callable, so the same wrapper works for
    both lanes: it never looks at the value it forwards.
    """

    def __init__(
        self,
        erased: ErasedBehavior,
        budget: CallBudget,
        rearm: Callable[["CountedBehavior"], None],
    ) -> None:
        self._erased = erased
        self.budget = budget
        self._rearm = rearm

    def __call__(self, value: Any) -> Any:
        output = self._erased(value)
        if self.budget.consume() == BudgetState.PENDING:
            self._rearm(self)
        return output


def register_counted(
    store: BehaviorStore,
    lane: Lane,
    site: Hashable,
    erased: ErasedBehavior,
    budget: CallBudget,
) -> CountedBehavior:
    """Put erased into store under site so it can be invoked per budget."""

    def _rearm(counted: CountedBehavior) -> None:
        logger.debug(
            "re-arming %s behavior for %s (remaining=%s)",
            lane.value,
            site,
            "unbounded" if counted.budget.unbounded else counted.budget.remaining,
        )
        store.put(lane, site, counted)

    counted = CountedBehavior(erased, budget, _rearm)
    store.put(lane, site, counted)
    return counted
