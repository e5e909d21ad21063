"""Pytest configuration and fixtures."""

import logging

import pytest

from factalgebra import no, yes


@pytest.fixture(autouse=True)
def cleanup_loggers():
    """Reset factalgebra loggers after each test so handlers do not leak."""
    yield

    logger = logging.getLogger("factalgebra")
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


class CountingThunk:
    """Zero-argument callable returning *fact* and counting its calls."""

    def __init__(self, fact):
        self.fact = fact
        self.calls = 0

    def __call__(self):
        self.calls += 1
        return self.fact


def _explode():
    raise RuntimeError("right operand must not be evaluated")


@pytest.fixture
def explode():
    """A right operand that fails if it is ever evaluated."""
    return _explode


@pytest.fixture
def counting():
    """Factory wrapping a fact in a call-counting thunk."""
    return CountingThunk


@pytest.fixture
def a():
    return yes("a failed", "a held")


@pytest.fixture
def b():
    return yes("b failed", "b held")


@pytest.fixture
def c():
    return yes("c failed", "c held")


@pytest.fixture
def n():
    return no("n failed", "n held")


@pytest.fixture
def m():
    return no("m failed", "m held")
