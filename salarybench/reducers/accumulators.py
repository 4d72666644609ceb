"""
Shared accumulators mutated by concurrent reducer workers.

CPython has no atomic integer type, so the "atomic" operations here are a
read-modify-write held under a `threading.Lock`.
"""

from __future__ import annotations

import threading


class AtomicCounter:
    """Integer counter with an atomic fetch-and-add."""

    def __init__(self, initial: int = 0) -> None:
        self._value = initial
        self._lock = threading.Lock()

    def get_and_add(self, delta: int) -> int:
        """Add `delta` and return the value held before the addition."""
        with self._lock:
            previous = self._value
            self._value = previous + delta
            return previous

    def get(self) -> int:
        with self._lock:
            return self._value


class MaxRegister:
    """
    Integer register that only ever grows.

    With ``guarded=True`` the lock covers both the read and the write of
    `update`. With ``guarded=False`` the check-then-act runs unlocked: two
    workers can read the same stale maximum and the larger write can be lost.
    The unguarded mode exists only to benchmark that hazard.
    """

    def __init__(self, initial: int = 0, guarded: bool = True) -> None:
        self._value = initial
        self._lock = threading.Lock()
        self.guarded = guarded

    def update(self, candidate: int) -> bool:
        """Store `candidate` if it exceeds the current value; return whether it did."""
        if self.guarded:
            with self._lock:
                return self._compare_and_set(candidate)
        return self._compare_and_set(candidate)

    def _compare_and_set(self, candidate: int) -> bool:
        current = self._value
        if candidate > current:
            self._value = candidate
            return True
        return False

    def get(self) -> int:
        return self._value


__all__ = ["AtomicCounter", "MaxRegister"]
