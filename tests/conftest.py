"""
Pytest configuration and shared fixtures for registry tests.
"""
import pytest

from understudy import CallSite, Mockable, intercept


class Foo(Mockable):
    """A structure with one field, written the way generated glue would be."""

    GET = CallSite("Foo", "get", input_type=tuple, output_type=int)
    ADD = CallSite("Foo", "add", input_type=int, output_type=int)
    DESCRIBE = CallSite("Foo", "describe", input_type=tuple, output_type=str)
    SCALE = CallSite("Foo", "scale", input_type=int, output_type=int)
    CLAMP = CallSite("Foo", "clamp", input_type=tuple, output_type=int)
    SHIFT = CallSite("Foo", "shift", input_type=tuple, output_type=tuple)

    def __init__(self, a: int) -> None:
        self.a = a

    @intercept(GET)
    def get(self) -> int:
        return self.a

    @intercept(ADD)
    def add(self, b: int) -> int:
        return self.a + b

    @intercept(DESCRIBE)
    def describe(self, prefix: str, suffix: str) -> str:
        return f"{prefix}{self.a}{suffix}"

    @intercept(SCALE)
    def scale(self, k: int = 2) -> int:
        return self.a * k

    @intercept(CLAMP)
    def clamp(self, low: int, high: int = 10) -> int:
        return max(low, min(self.a, high))

    @intercept(SHIFT)
    def shift(self, offset: tuple) -> tuple:
        return tuple(self.a + item for item in offset)


@pytest.fixture
def foo_cls():
    return Foo


@pytest.fixture
def foo():
    """A fresh mock-mode Foo."""
    return Foo.faux()


@pytest.fixture
def test_context():
    """Shared context for passing data between steps."""
    return {
        "results": [],
        "error": None,
    }
