"""
Runtime glue between mockable classes and the registry.

A mockable structure is either real or mock. Real instances run their own
method bodies; mock instances carry a MockContext and every intercepted
method is routed through dispatch(), which runs the registered behavior or
fails with NoBehaviorError.

Example:
    class Foo(Mockable):
        GET = CallSite("Foo", "get", input_type=tuple, output_type=int)

        def __init__(self, a: int) -> None:
            self.a = a

        @intercept(GET)
        def get(self) -> int:
            return self.a

    foo = Foo.faux()
    when(foo, Foo.GET).times(3).then(lambda _: 3)
    assert foo.get() == 3
"""

from __future__ import annotations

import functools
import inspect
import logging
from typing import Any, Callable, Generic, Optional, TypeVar, Union

from .kernel.context import MockContext
from .kernel.errors import NoBehaviorError, RegistrationError
from .kernel.schema import CallSite
from .kernel.when import WhenHolder
from .settings import get_settings

logger = logging.getLogger(__name__)

T = TypeVar("T")
M = TypeVar("M", bound="Mockable")

_SITE_ATTR = "__understudy_site__"


class MaybeFaux(Generic[T]):
    """Either the real value of a structure or the mock context standing in for it."""

    __slots__ = ("_real", "_context")

    def __init__(self, real: Optional[T] = None, context: Optional[MockContext] = None) -> None:
        if (context is None) == (real is None):
            raise ValueError("MaybeFaux holds exactly one of a real value or a mock context")
        self._real = real
        self._context = context

    @classmethod
    def real(cls, value: T) -> "MaybeFaux[T]":
        return cls(real=value)

    @classmethod
    def faux(cls) -> "MaybeFaux[T]":
        return cls(context=MockContext())

    @property
    def is_faux(self) -> bool:
        return self._context is not None

    @property
    def value(self) -> T:
        if self._real is None:
            raise RegistrationError("mock instance has no real value")
        return self._real

    @property
    def context(self) -> MockContext:
        if self._context is None:
            raise RegistrationError("cannot mock methods of a real instance")
        return self._context


class Mockable:
    """Base for classes that can be constructed real or mock.

    Subclasses construct real instances through their own __init__; faux()
    builds an instance without running it and attaches a fresh mock context.
    """

    _understudy: Optional[MaybeFaux] = None

    @classmethod
    def faux(cls: type[M]) -> M:
        instance = cls.__new__(cls)
        instance._understudy = MaybeFaux.faux()
        return instance


def maybe_faux(target: Union[Mockable, MaybeFaux]) -> Optional[MaybeFaux]:
    if isinstance(target, MaybeFaux):
        return target
    return getattr(target, "_understudy", None)


def site_of(site_or_method: Union[CallSite, Callable[..., Any]]) -> CallSite:
    if isinstance(site_or_method, CallSite):
        return site_or_method
    site = getattr(site_or_method, _SITE_ATTR, None)
    if site is None:
        raise RegistrationError(f"{site_or_method!r} is not an intercepted method")
    return site


def when(
    target: Union[Mockable, MaybeFaux],
    site: Union[CallSite, Callable[..., Any]],
) -> WhenHolder:
    """Start registering a behavior for site on a mock instance."""
    holder = maybe_faux(target)
    if holder is None:
        raise RegistrationError(f"{type(target).__name__} instance is not a mock")
    return WhenHolder(site_of(site), holder.context)


def dispatch(target: MaybeFaux, site: CallSite, value: Any) -> Any:
    """Run the behavior armed for site, or fail with NoBehaviorError.

    The checked lane is consulted first, then the unchecked one. The context
    stays borrowed while the behavior runs, so a behavior that calls back
    into the same mock raises BorrowError.
    """
    context = target.context
    with context.borrow_mut(f"invoke {site}") as store:
        produced = store.invoke_checked(site, value, site.input_type, site.output_type)
        if produced is None:
            produced = store.invoke(site, value)
        armed = store.pending() if produced is None else []
    if produced is None:
        limit = get_settings().diagnostics_limit
        logger.warning("no mock configured for %s", site)
        raise NoBehaviorError(site, armed[:limit])
    return produced.value


def intercept(site: CallSite) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """Route a method through dispatch() when its instance is a mock.

    Arguments are bound against the method signature (keywords and defaults
    included) and reach the behavior as one value: the argument itself when
    the method takes exactly one parameter after self, otherwise a tuple in
    parameter order (empty for none).
    """

    def decorator(method: Callable[..., T]) -> Callable[..., T]:
        signature = inspect.signature(method)

        @functools.wraps(method)
        def _intercepted(self, *args, **kwargs):
            holder = maybe_faux(self)
            if holder is None or not holder.is_faux:
                return method(self, *args, **kwargs)
            bound = signature.bind(self, *args, **kwargs)
            bound.apply_defaults()
            values = tuple(bound.arguments.values())[1:]
            value = values[0] if len(values) == 1 else values
            return dispatch(holder, site, value)

        setattr(_intercepted, _SITE_ATTR, site)
        return _intercepted

    return decorator


__all__ = [
    "MaybeFaux",
    "Mockable",
    "maybe_faux",
    "site_of",
    "when",
    "dispatch",
    "intercept",
]
