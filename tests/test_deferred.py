"""Tests for deferred operands."""

import threading
import time
from concurrent.futures import ThreadPoolExecutor

import pytest

from factalgebra.deferred import Deferred, as_deferred


def test_thunk_not_called_on_construction():
    calls = []
    deferred = Deferred(lambda: calls.append(1))
    assert calls == []
    assert deferred.is_forced is False


def test_force_memoizes_value():
    calls = []

    def thunk():
        calls.append(1)
        return "value"

    deferred = Deferred(thunk)
    assert deferred.force() == "value"
    assert deferred.force() == "value"
    assert len(calls) == 1
    assert deferred.is_forced is True


def test_of_is_already_forced():
    deferred = Deferred.of(42)
    assert deferred.is_forced is True
    assert deferred.force() == 42


def test_memoizes_falsy_values():
    calls = []

    def thunk():
        calls.append(1)
        return None

    deferred = Deferred(thunk)
    assert deferred.force() is None
    assert deferred.force() is None
    assert len(calls) == 1


def test_exception_propagates_and_is_not_cached():
    attempts = []

    def thunk():
        attempts.append(1)
        if len(attempts) == 1:
            raise RuntimeError("boom")
        return "recovered"

    deferred = Deferred(thunk)
    with pytest.raises(RuntimeError, match="boom"):
        deferred.force()
    assert deferred.is_forced is False
    assert deferred.force() == "recovered"
    assert len(attempts) == 2


def test_concurrent_force_runs_thunk_once():
    calls = []
    lock = threading.Lock()

    def slow():
        with lock:
            calls.append(1)
        time.sleep(0.05)
        return object()

    deferred = Deferred(slow)
    with ThreadPoolExecutor(max_workers=8) as executor:
        results = list(executor.map(lambda _: deferred.force(), range(16)))

    assert len(calls) == 1
    assert all(r is results[0] for r in results)


def test_repr_does_not_force():
    deferred = Deferred(lambda: 1 / 0)
    assert repr(deferred) == "Deferred(<unforced>)"
    assert deferred.is_forced is False


# --- as_deferred ---


def test_as_deferred_wraps_callable_lazily():
    calls = []
    deferred = as_deferred(lambda: calls.append(1) or "x")
    assert calls == []
    assert deferred.force() == "x"


def test_as_deferred_wraps_value_forced():
    deferred = as_deferred("x")
    assert deferred.is_forced is True
    assert deferred.force() == "x"


def test_as_deferred_passes_deferred_through():
    deferred = Deferred(lambda: "x")
    assert as_deferred(deferred) is deferred
