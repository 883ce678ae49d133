"""
Registration handle: the two-step builder test code uses to arm a mock.

    when(foo, Foo.GET).times(3).then(lambda _: 3)

Obtaining the handle binds the call site and the context; a terminal then*
call supplies the behavior and finalizes it into the store. A handle is
good for exactly one registration.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from .budget import CallBudget, register_counted
from .context import MockContext
from .errors import RegistrationError
from .schema import CallSite, Lane
from .store import erase_checked

logger = logging.getLogger(__name__)


class WhenHolder:
    def __init__(
        self,
        site: CallSite,
        context: MockContext,
        budget: Optional[CallBudget] = None,
    ) -> None:
        self.site = site
        self._context = context
        self.budget = budget or CallBudget.once()
        self._consumed = False

    def once(self) -> "WhenHolder":
        return self._with_budget(CallBudget.once())

    def times(self, count: int) -> "WhenHolder":
        return self._with_budget(CallBudget.times(count))

    def always(self) -> "WhenHolder":
        return self._with_budget(CallBudget.always())

    def then(self, behavior: Callable[[Any], Any]) -> None:
        """Arm behavior in the checked lane.

        The input handed to behavior and the value it returns are validated
        against the call site's declared types on every call.
        """
        site = self.site
        self._finalize(
            Lane.CHECKED,
            erase_checked(behavior, site.input_type, site.output_type),
        )

    def then_return(self, value: Any) -> None:
        self.then(lambda _: value)

    def then_unchecked(self, behavior: Callable[[Any], Any]) -> None:
        """Arm behavior in the unchecked lane.

        Nothing about the input or output is verified. The caller must make
        sure the call site always presents the input behavior expects and
        consumes what it returns; this is the escape hatch for values the
        checked lane cannot describe.
        """
        self._finalize(Lane.UNCHECKED, behavior)

    def _with_budget(self, budget: CallBudget) -> "WhenHolder":
        self._retire()
        return WhenHolder(self.site, self._context, budget)

    def _retire(self) -> None:
        if self._consumed:
            raise RegistrationError(f"registration handle for {self.site} was already used")
        self._consumed = True

    def _finalize(self, lane: Lane, erased: Callable[[Any], Any]) -> None:
        self._retire()
        with self._context.borrow_mut(f"register {self.site}") as store:
            register_counted(store, lane, self.site, erased, self.budget)
        logger.debug(
            "registered %s behavior for %s (budget=%s)",
            lane.value,
            self.site,
            "unbounded" if self.budget.unbounded else self.budget.remaining,
        )
