import pytest

from funcflow.kernel import InvalidStateError, RetryState


def test_start_is_attempting():
    state = RetryState.start(delay=2.0)
    assert state.kind == "attempting"
    assert state.attempt == 0
    assert state.delay == 2.0
    assert not state.done


def test_failure_with_delay_waits_then_backs_off():
    error = RuntimeError("x")
    state = RetryState.start(delay=1.0).failed(error, max_retries=3)

    assert state.kind == "waiting"
    assert state.attempt == 1
    assert state.error is error

    state = state.waited(backoff=3)
    assert state.kind == "attempting"
    assert state.delay == 3.0


def test_failure_without_delay_attempts_again():
    state = RetryState.start().failed(RuntimeError(), max_retries=2)
    assert state.kind == "attempting"
    assert state.attempt == 1


def test_bound_reached_is_terminal():
    state = RetryState.start()
    for _ in range(3):
        state = state.failed(RuntimeError(), max_retries=3)

    assert state.kind == "failed"
    assert state.attempt == 3
    assert state.done


def test_single_attempt_bound():
    state = RetryState.start(delay=5).failed(RuntimeError(), max_retries=1)
    assert state.kind == "failed"


def test_succeeded_is_terminal():
    state = RetryState.start().succeeded()
    assert state.kind == "succeeded"
    assert state.done


def test_invalid_transitions_raise():
    with pytest.raises(InvalidStateError):
        RetryState.start().waited(backoff=2)

    waiting = RetryState.start(delay=1).failed(RuntimeError(), max_retries=3)
    with pytest.raises(InvalidStateError):
        waiting.succeeded()

    with pytest.raises(InvalidStateError):
        RetryState.start().succeeded().failed(RuntimeError(), max_retries=3)
