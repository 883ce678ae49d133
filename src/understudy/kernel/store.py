"""
Erased behavior store: heterogeneous single-use behaviors keyed by call site.

Two lanes hold entries side by side:

- unchecked: the behavior is stored as-is. Restoring its input/output types at
  call time is an assumption the caller must uphold; a site reused with an
  incompatible signature is caller error and goes undetected.
- checked: the behavior is wrapped so its input and output travel inside a
  CheckedBox. A mismatch surfaces as BehaviorTypeError.

Both lanes consume the entry on invocation. Repeatable behaviors are layered
on top by kernel.budget, which puts the entry back after each call.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Hashable, List, Optional

from .errors import BehaviorTypeError
from .schema import UNSPECIFIED, CheckedBox, Lane, Produced, normalize_tag

logger = logging.getLogger(__name__)

ErasedBehavior = Callable[[Any], Any]


class BehaviorStore:
    def __init__(self) -> None:
        self._lanes: Dict[Lane, Dict[Hashable, ErasedBehavior]] = {
            Lane.UNCHECKED: {},
            Lane.CHECKED: {},
        }

    # Low-level slot access (shared with the call-count wrapper)

    def put(self, lane: Lane, site: Hashable, erased: ErasedBehavior) -> None:
        table = self._lanes[lane]
        if site in table:
            logger.debug("overwriting pending %s behavior for %s", lane.value, site)
        table[site] = erased

    def take(self, lane: Lane, site: Hashable) -> Optional[ErasedBehavior]:
        return self._lanes[lane].pop(site, None)

    # Unchecked lane

    def register(self, site: Hashable, behavior: Callable[[Any], Any]) -> None:
        """Store behavior for site without any type tag.

        The caller guarantees that every later invoke() for this site passes
        an input the behavior accepts and expects the output it returns.
        """
        self.put(Lane.UNCHECKED, site, behavior)

    def invoke(self, site: Hashable, value: Any) -> Optional[Produced]:
        behavior = self.take(Lane.UNCHECKED, site)
        if behavior is None:
            return None
        return Produced(behavior(value))

    # Checked lane

    def register_checked(
        self,
        site: Hashable,
        behavior: Callable[[Any], Any],
        input_type: Any = Any,
        output_type: Any = Any,
    ) -> None:
        self.put(Lane.CHECKED, site, erase_checked(behavior, input_type, output_type))

    def invoke_checked(
        self,
        site: Hashable,
        value: Any,
        input_type: Any = Any,
        output_type: Any = Any,
    ) -> Optional[Produced]:
        """Invoke the checked entry for site, restoring the requested types.

        Raises BehaviorTypeError if the requested types differ from the
        registered ones or a value does not conform. The requested output type
        travels with the input and is checked inside the entry before the
        behavior runs, so a mismatch leaves the entry consumed and not re-armed.
        """
        erased = self.take(Lane.CHECKED, site)
        if erased is None:
            return None
        boxed = erased(CheckedBox.wrap(value, input_type, output_type))
        return Produced(boxed.downcast(output_type))

    # Introspection

    def pending(self, lane: Optional[Lane] = None) -> List[Hashable]:
        lanes = [lane] if lane is not None else list(Lane)
        armed: List[Hashable] = []
        for current in lanes:
            armed.extend(self._lanes[current])
        return armed

    def clear(self) -> None:
        for table in self._lanes.values():
            table.clear()

    def __contains__(self, site: Hashable) -> bool:
        return any(site in table for table in self._lanes.values())

    def __len__(self) -> int:
        return sum(len(table) for table in self._lanes.values())


def erase_checked(
    behavior: Callable[[Any], Any], input_type: Any, output_type: Any
) -> Callable[[CheckedBox], CheckedBox]:
    """Wrap behavior so it speaks CheckedBox on both sides."""

    registered_output = normalize_tag(output_type)

    def _erased(boxed: CheckedBox) -> CheckedBox:
        value = boxed.downcast(input_type)
        if boxed.reply_tag is not UNSPECIFIED and boxed.reply_tag != registered_output:
            raise BehaviorTypeError(boxed.reply_tag, registered_output)
        return CheckedBox.wrap(behavior(value), registered_output)

    return _erased
