"""
Tests for the registration handle: budgets, lanes and single use.
"""
import pytest

from understudy import (
    BehaviorTypeError,
    CallSite,
    InvalidBudgetError,
    Lane,
    MockContext,
    RegistrationError,
    WhenHolder,
)


ADD = CallSite("Foo", "add", input_type=int, output_type=int)


@pytest.fixture
def context():
    return MockContext()


def _invoke(context, value, lane=Lane.CHECKED):
    with context.borrow_mut() as store:
        if lane == Lane.CHECKED:
            return store.invoke_checked(ADD, value, ADD.input_type, ADD.output_type)
        return store.invoke(ADD, value)


def test_then_defaults_to_one_shot(context):
    WhenHolder(ADD, context).then(lambda b: b + 1)

    assert _invoke(context, 1).value == 2
    assert _invoke(context, 1) is None


def test_times_uses_budget(context):
    WhenHolder(ADD, context).times(2).then(lambda b: b * 10)

    assert [_invoke(context, n).value for n in (1, 2)] == [10, 20]
    assert _invoke(context, 3) is None


def test_always_never_runs_out(context):
    WhenHolder(ADD, context).always().then_return(5)

    assert all(_invoke(context, n).value == 5 for n in range(30))


def test_then_uses_checked_lane(context):
    WhenHolder(ADD, context).then(lambda b: str(b))

    with pytest.raises(BehaviorTypeError):
        _invoke(context, 1)


def test_then_unchecked_skips_type_checks(context):
    WhenHolder(ADD, context).then_unchecked(lambda b: str(b))

    assert _invoke(context, 1) is None
    assert _invoke(context, 1, Lane.UNCHECKED).value == "1"


def test_then_unchecked_with_budget(context):
    WhenHolder(ADD, context).times(2).then_unchecked(lambda b: b)

    assert _invoke(context, 1, Lane.UNCHECKED).value == 1
    assert _invoke(context, 2, Lane.UNCHECKED).value == 2
    assert _invoke(context, 3, Lane.UNCHECKED) is None


def test_handle_is_single_use(context):
    handle = WhenHolder(ADD, context)
    handle.then_return(1)

    with pytest.raises(RegistrationError):
        handle.then_return(2)


def test_budget_retires_first_handle(context):
    handle = WhenHolder(ADD, context)
    counted = handle.times(3)

    with pytest.raises(RegistrationError):
        handle.then_return(1)
    counted.then_return(1)


def test_invalid_times(context):
    with pytest.raises(InvalidBudgetError):
        WhenHolder(ADD, context).times(0)


def test_abandoned_handle_leaves_context_unborrowed(context):
    WhenHolder(ADD, context).times(2)

    assert not context.borrowed
    assert context.pending() == []


@pytest.mark.parametrize("arm", [lambda h: h.always(), lambda h: h.times(3)])
def test_output_type_mismatch_consumes_counted_entry(context, arm):
    calls = []
    arm(WhenHolder(ADD, context)).then(lambda b: calls.append(b) or b)

    with context.borrow_mut() as store:
        with pytest.raises(BehaviorTypeError):
            store.invoke_checked(ADD, 1, int, str)

    assert context.pending() == []
    assert calls == []


def test_input_type_mismatch_consumes_counted_entry(context):
    WhenHolder(ADD, context).always().then(lambda b: b)

    with context.borrow_mut() as store:
        with pytest.raises(BehaviorTypeError):
            store.invoke_checked(ADD, "1", str, int)

    assert context.pending() == []
