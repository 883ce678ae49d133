"""
Data shapes shared by the kernel: lanes, call-site identifiers, invocation
results and the runtime-typed box the checked lane passes values in.
"""

from __future__ import annotations

import inspect
from dataclasses import dataclass, field
from enum import Enum
from functools import lru_cache
from typing import Any, Optional, get_origin

from pydantic import ConfigDict, TypeAdapter, ValidationError

from .errors import BehaviorTypeError


class Lane(str, Enum):
    UNCHECKED = "unchecked"
    CHECKED = "checked"


@dataclass(frozen=True)
class CallSite:
    """Identifier of one mockable method on one structure.

    The declared types ride along for the checked lane but do not take part
    in equality or hashing: two sites with the same owner and method are the
    same slot.
    """

    owner: str
    method: str
    input_type: Any = field(default=Any, compare=False)
    output_type: Any = field(default=Any, compare=False)

    def __str__(self) -> str:
        return f"{self.owner}::{self.method}"


@dataclass(frozen=True)
class Produced:
    """Output of a successful invocation (may itself be None)."""

    value: Any


UNSPECIFIED = object()


def normalize_tag(tag: Any) -> Any:
    return type(None) if tag is None else tag


@lru_cache(maxsize=None)
def _adapter(tag: Any) -> TypeAdapter:
    return TypeAdapter(tag, config=ConfigDict(arbitrary_types_allowed=True))


def conformance_error(value: Any, tag: Any) -> Optional[str]:
    """Return why value does not conform to tag, or None if it does.

    Plain classes are checked with isinstance; typing forms go through strict
    pydantic validation so nothing is ever coerced.
    """
    tag = normalize_tag(tag)
    if tag is Any:
        return None
    if inspect.isclass(tag) and get_origin(tag) is None:
        if isinstance(value, tag):
            return None
        return f"value of type {type(value).__qualname__}"
    try:
        _adapter(tag).validate_python(value, strict=True)
    except ValidationError as exc:
        return f"{exc.error_count()} validation error(s): {exc.errors()[0]['msg']}"
    return None


class CheckedBox:
    """A value that carries its own type tag and refuses bad downcasts."""

    __slots__ = ("value", "type_tag", "reply_tag")

    def __init__(self, value: Any, type_tag: Any, reply_tag: Any = UNSPECIFIED) -> None:
        self.value = value
        self.type_tag = normalize_tag(type_tag)
        # Output type the caller will downcast the reply to, if it said.
        self.reply_tag = reply_tag if reply_tag is UNSPECIFIED else normalize_tag(reply_tag)

    @classmethod
    def wrap(cls, value: Any, type_tag: Any, reply_tag: Any = UNSPECIFIED) -> "CheckedBox":
        problem = conformance_error(value, type_tag)
        if problem is not None:
            raise BehaviorTypeError(normalize_tag(type_tag), type(value), problem)
        return cls(value, type_tag, reply_tag)

    def downcast(self, type_tag: Any) -> Any:
        requested = normalize_tag(type_tag)
        if requested != self.type_tag:
            raise BehaviorTypeError(requested, self.type_tag)
        return self.value

    def __repr__(self) -> str:
        return f"CheckedBox({self.value!r}, {self.type_tag!r})"
