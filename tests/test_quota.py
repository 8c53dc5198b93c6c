# Tests for reposync.quotas
# Best-effort quota gate

import random
import threading

import pytest

from reposync.quotas import InMemoryQuotaTracker


class TestInMemoryQuotaTracker:
    """Tests for InMemoryQuotaTracker."""

    def test_acquire_until_full(self):
        quota = InMemoryQuotaTracker(0, 2)
        assert quota.try_acquire() is True
        assert quota.try_acquire() is True
        assert quota.try_acquire() is False
        assert quota.current == 2

    def test_full_quota_denies_without_change(self):
        quota = InMemoryQuotaTracker(10, 10)
        assert quota.try_acquire() is False
        assert quota.current == 10

    def test_release_frees_slot(self):
        quota = InMemoryQuotaTracker(10, 10)
        quota.release()
        assert quota.current == 9
        assert quota.try_acquire() is True

    def test_release_never_below_zero(self):
        quota = InMemoryQuotaTracker(0, 5)
        quota.release()
        quota.release()
        assert quota.current == 0

    def test_unlimited(self):
        quota = InMemoryQuotaTracker(3, 0)
        for _ in range(100):
            assert quota.try_acquire() is True
        quota.release()
        assert quota.current == 3

    def test_over_limit_usage(self):
        quota = InMemoryQuotaTracker(12, 10)
        assert quota.try_acquire() is False
        quota.release()
        assert quota.current == 11

    @pytest.mark.parametrize("usage,limit", [(-1, 5), (0, -1)])
    def test_negative_values(self, usage, limit):
        with pytest.raises(ValueError):
            InMemoryQuotaTracker(usage, limit)

    def test_bounds_hold_for_random_sequences(self):
        rng = random.Random(42)
        for _ in range(20):
            limit = rng.randint(1, 5)
            quota = InMemoryQuotaTracker(rng.randint(0, limit), limit)
            for _ in range(100):
                if rng.random() < 0.6:
                    quota.try_acquire()
                else:
                    quota.release()
                assert 0 <= quota.current <= limit

    def test_concurrent_acquire(self):
        quota = InMemoryQuotaTracker(0, 50)
        granted = []
        lock = threading.Lock()

        def worker():
            for _ in range(20):
                if quota.try_acquire():
                    with lock:
                        granted.append(1)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(granted) == 50
        assert quota.current == 50

    def test_repr(self):
        assert repr(InMemoryQuotaTracker(1, 2)) == "InMemoryQuotaTracker(current=1, limit=2)"
