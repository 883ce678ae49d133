"""
MockContext: the runtime state carried by one mock-mode instance.

The instance's public surface only offers shared access, so the store is
mutated through borrow_mut(), an exclusive borrow checked at runtime. A
second borrow while the first is live (for example a behavior calling back
into the same mock) raises BorrowError.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Hashable, Iterator, List, Optional

from .errors import BorrowError
from .store import BehaviorStore

logger = logging.getLogger(__name__)


class MockContext:
    def __init__(self) -> None:
        self._store = BehaviorStore()
        self._borrowed_by: Optional[Hashable] = None

    @property
    def borrowed(self) -> bool:
        return self._borrowed_by is not None

    @contextmanager
    def borrow_mut(self, purpose: Hashable = "access") -> Iterator[BehaviorStore]:
        if self._borrowed_by is not None:
            logger.warning(
                "reentrant mock access (%s) while borrowed for %s",
                purpose,
                self._borrowed_by,
            )
            raise BorrowError(
                f"mock context already mutably borrowed for {self._borrowed_by}; "
                f"cannot borrow again for {purpose}"
            )
        self._borrowed_by = purpose
        try:
            yield self._store
        finally:
            self._borrowed_by = None

    def pending(self) -> List[Hashable]:
        """Call sites that currently have a behavior armed."""
        with self.borrow_mut("pending") as store:
            return store.pending()

    def reset(self) -> None:
        with self.borrow_mut("reset") as store:
            store.clear()
