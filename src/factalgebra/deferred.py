"""Deferred (call-by-need) operands for fact composition."""

from __future__ import annotations

import logging
import threading
from typing import Callable, Generic, TypeVar

T = TypeVar("T")

logger = logging.getLogger(__name__)

_UNSET = object()


class Deferred(Generic[T]):
    """A suspended computation whose result is computed at most once.

    The thunk runs on the first call to :meth:`force`; later calls return the
    cached value. Concurrent callers are serialized on a lock so the thunk is
    never run twice for a successful result. If the thunk raises, the
    exception reaches the caller that forced it and nothing is cached.
    """

    __slots__ = ("_thunk", "_value", "_lock")

    def __init__(self, thunk: Callable[[], T]) -> None:
        self._thunk: Callable[[], T] | None = thunk
        self._value: object = _UNSET
        self._lock = threading.Lock()

    @classmethod
    def of(cls, value: T) -> "Deferred[T]":
        """Wrap a value that is already available."""
        deferred: Deferred[T] = cls(lambda: value)
        deferred._value = value
        deferred._thunk = None
        return deferred

    @property
    def is_forced(self) -> bool:
        return self._value is not _UNSET

    def force(self) -> T:
        value = self._value
        if value is not _UNSET:
            return value  # type: ignore[return-value]
        with self._lock:
            if self._value is _UNSET:
                logger.debug("Forcing deferred operand %r", self._thunk)
                assert self._thunk is not None
                self._value = self._thunk()
                self._thunk = None
            return self._value  # type: ignore[return-value]

    def __repr__(self) -> str:
        if self.is_forced:
            return f"Deferred({self._value!r})"
        return "Deferred(<unforced>)"


def as_deferred(value: T | Callable[[], T]) -> Deferred[T]:
    """Normalize a value or a zero-argument callable into a :class:`Deferred`."""
    if isinstance(value, Deferred):
        return value
    if callable(value):
        return Deferred(value)
    return Deferred.of(value)  # type: ignore[arg-type]
