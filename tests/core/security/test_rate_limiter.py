"""
Test suite for the fixed-window rate limiter.

System role: Verification of window counting, reset and sweeping
"""

import threading

import pytest

from studyhub.core.security import rate_limiter as rate_limiter_module
from studyhub.core.security.rate_limiter import (
    InMemoryRateLimitStore,
    RateLimiter,
    chat_rate_key,
    check_rate_limit,
    generate_rate_key,
    reset_rate_limiter,
)


class TestRateLimiterCheck:
    """Test suite for RateLimiter.check."""

    def test_four_calls_with_max_three(self, rate_limiter) -> None:
        """Test calls 1..3 pass and call 4 is denied."""
        # Act
        results = [rate_limiter.check("u1", 3, 1000) for _ in range(4)]

        # Assert
        assert results == [True, True, True, False]

    @pytest.mark.parametrize("max_requests", [1, 5, 20])
    def test_max_plus_one_is_denied(self, rate_limiter, max_requests: int) -> None:
        """Test exactly max calls pass within one window."""
        # Act
        results = [rate_limiter.check("k", max_requests, 60_000) for _ in range(max_requests + 1)]

        # Assert
        assert results[:-1] == [True] * max_requests
        assert results[-1] is False

    def test_window_resets_after_elapsed(self, rate_limiter, clock) -> None:
        """Test the counter resets once the window has passed."""
        # Arrange
        for _ in range(3):
            rate_limiter.check("u1", 3, 1000)
        assert rate_limiter.check("u1", 3, 1000) is False

        # Act
        clock.advance(1001)

        # Assert
        assert rate_limiter.check("u1", 3, 1000) is True
        assert rate_limiter.store.get("u1").count == 1

    def test_window_is_measured_from_first_request(self, rate_limiter, clock) -> None:
        """Test reset_time is first request + window, not wall-clock aligned."""
        # Act
        rate_limiter.check("u1", 2, 1000)
        clock.advance(900)
        rate_limiter.check("u1", 2, 1000)

        # Assert
        assert rate_limiter.store.get("u1").reset_time == clock.now - 900 + 1000
        assert rate_limiter.check("u1", 2, 1000) is False

    def test_at_reset_time_is_still_same_window(self, rate_limiter, clock) -> None:
        """Test the window only resets when now is strictly past reset_time."""
        # Arrange
        rate_limiter.check("u1", 1, 1000)

        # Act
        clock.advance(1000)

        # Assert
        assert rate_limiter.check("u1", 1, 1000) is False

    def test_denial_does_not_mutate_entry(self, rate_limiter) -> None:
        """Test denied calls leave the count at max."""
        # Act
        for _ in range(5):
            rate_limiter.check("u1", 2, 1000)

        # Assert
        assert rate_limiter.store.get("u1").count == 2

    def test_identifiers_are_independent(self, rate_limiter) -> None:
        """Test one key's count does not affect another's."""
        # Act
        rate_limiter.check("a", 1, 1000)

        # Assert
        assert rate_limiter.check("a", 1, 1000) is False
        assert rate_limiter.check("b", 1, 1000) is True

    def test_retry_after(self, rate_limiter, clock) -> None:
        """Test retry_after_ms counts down to the reset."""
        # Arrange
        rate_limiter.check("u1", 1, 1000)
        clock.advance(400)

        # Act & Assert
        assert rate_limiter.retry_after_ms("u1") == 600
        assert rate_limiter.retry_after_ms("unknown") == 0

    def test_concurrent_checks_never_exceed_max(self) -> None:
        """Test threads racing on one key admit exactly max requests."""
        # Arrange
        limiter = RateLimiter(store=InMemoryRateLimitStore(), clock=lambda: 0.0)
        results: list[bool] = []
        lock = threading.Lock()

        def worker() -> None:
            allowed = limiter.check("shared", 10, 60_000)
            with lock:
                results.append(allowed)

        threads = [threading.Thread(target=worker) for _ in range(50)]

        # Act
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        # Assert
        assert results.count(True) == 10


class TestSweepExpired:
    """Test suite for RateLimiter.sweep_expired."""

    def test_should_remove_only_expired_entries(self, rate_limiter, clock) -> None:
        """Test expired windows are dropped and live ones kept."""
        # Arrange
        rate_limiter.check("old", 5, 1000)
        clock.advance(500)
        rate_limiter.check("new", 5, 1000)
        clock.advance(600)

        # Act
        removed = rate_limiter.sweep_expired()

        # Assert
        assert removed == 1
        assert rate_limiter.store.get("old") is None
        assert rate_limiter.store.get("new") is not None
        assert len(rate_limiter.store) == 1


class TestRateKeys:
    """Test suite for rate-limit key builders and the module-level limiter."""

    def test_keys(self) -> None:
        """Test key formats for users and anonymous callers."""
        assert chat_rate_key("abc") == "ai_chat_abc"
        assert generate_rate_key("abc") == "ai_generate_abc"
        assert chat_rate_key(None) == "ai_chat_anonymous"
        assert generate_rate_key(None) == "ai_generate_anonymous"

    def test_module_level_check_uses_shared_limiter(self) -> None:
        """Test check_rate_limit counts across calls until reset."""
        # Arrange
        reset_rate_limiter()

        # Act
        results = [check_rate_limit("module-key", 2, 60_000) for _ in range(3)]
        reset_rate_limiter()

        # Assert
        assert results == [True, True, False]
        assert rate_limiter_module.get_rate_limiter().store.get("module-key") is None
