"""
Step definitions shared by the registry features.
"""
import pytest
from pytest_bdd import given, parsers, then, when

from understudy import BorrowError, NoBehaviorError, UnderstudyError
from understudy import when as arm


@pytest.fixture
def record_call(test_context):
    """Call fn, keeping its result or the registry error it raised."""

    def _call(fn, *args):
        try:
            test_context["results"].append(fn(*args))
        except UnderstudyError as exc:
            test_context["error"] = exc
            return False
        return True

    return _call


# =============================================================================
# Given Steps
# =============================================================================


@given("a mock Foo")
def mock_foo(test_context, foo):
    test_context["foo"] = foo


@given(parsers.parse("get is mocked to return {value:d} with no budget"))
def mock_get_always(test_context, foo_cls, value):
    arm(test_context["foo"], foo_cls.GET).always().then_return(value)


@given(parsers.parse("get is mocked to return {value:d} for {count:d} calls"))
def mock_get_times(test_context, foo_cls, value, count):
    arm(test_context["foo"], foo_cls.GET).times(count).then(lambda _: value)


@given(parsers.parse("get is mocked to return {value:d} once"))
def mock_get_once(test_context, foo_cls, value):
    arm(test_context["foo"], foo_cls.GET).once().then(lambda _: value)


@given(parsers.parse("get is mocked to return {value:d} with a bare then"))
def mock_get_bare(test_context, foo_cls, value):
    arm(test_context["foo"], foo_cls.GET).then(lambda _: value)


# =============================================================================
# When Steps
# =============================================================================


@when(parsers.parse("get is called {count:d} times"))
def call_get(test_context, record_call, count):
    foo = test_context["foo"]
    for _ in range(count):
        if not record_call(foo.get):
            break


# =============================================================================
# Then Steps
# =============================================================================


@then(parsers.parse("{count:d} calls succeeded"))
def calls_succeeded(test_context, count):
    assert len(test_context["results"]) == count


@then(parsers.parse("every call returned {value:d}"))
def every_call_returned(test_context, value):
    assert test_context["results"]
    assert all(result == value for result in test_context["results"])


@then(parsers.parse('the last call failed because no mock is configured for "{site}"'))
def failed_no_mock(test_context, site):
    error = test_context["error"]
    assert isinstance(error, NoBehaviorError)
    assert str(error.site) == site
    assert site in str(error)


@then("the last call failed with a borrow error")
def failed_borrow(test_context):
    assert isinstance(test_context["error"], BorrowError)
