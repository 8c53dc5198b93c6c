# RepoSync Quota Tracker
# Best-effort admission control for resource creation

import threading
from typing import Protocol


class QuotaTracker(Protocol):
    """Quota enforcement for resource creation and deletion."""

    def try_acquire(self) -> bool:
        """Check if creating one more resource stays within the quota."""
        ...

    def release(self) -> None:
        """Give back one slot, e.g. after a successful deletion."""
        ...


class InMemoryQuotaTracker:
    """
    In-memory quota tracker.

    A limit of 0 means unlimited: acquisition always succeeds and the
    counter is not maintained. Otherwise ``0 <= current <= limit`` holds
    after every call. Safe to share between concurrent sync passes.
    """

    def __init__(self, current_usage: int = 0, limit: int = 0):
        """
        Initialize quota tracker.

        Args:
            current_usage: Resources already owned by the repository.
            limit: Maximum number of resources, 0 for unlimited.

        Raises:
            ValueError: If either value is negative.
        """
        if limit < 0:
            raise ValueError(f"quota limit must be >= 0, got {limit}")
        if current_usage < 0:
            raise ValueError(f"quota usage must be >= 0, got {current_usage}")

        self._lock = threading.Lock()
        self._current = current_usage
        self._limit = limit

    @property
    def current(self) -> int:
        """Current usage."""
        with self._lock:
            return self._current

    @property
    def limit(self) -> int:
        """Configured limit (0 = unlimited)."""
        return self._limit

    def try_acquire(self) -> bool:
        """
        Reserve a slot for one new resource.

        Returns:
            False (without changing state) when the quota is full.
        """
        if self._limit == 0:
            return True
        with self._lock:
            if self._current >= self._limit:
                return False
            self._current += 1
            return True

    def release(self) -> None:
        """Release a slot. Never drops below zero."""
        if self._limit == 0:
            return
        with self._lock:
            if self._current > 0:
                self._current -= 1

    def __repr__(self) -> str:
        return f"InMemoryQuotaTracker(current={self.current}, limit={self._limit})"
