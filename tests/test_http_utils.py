"""
Tests for HTTP utilities — utils/http.py

Tests RetryStrategy and SessionManager without requiring actual network calls.
"""
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from utils.http import RetryStrategy, SessionManager


# ── RetryStrategy tests ──────────────────────────────────────────────────────

class TestRetryStrategy:
    def test_defaults(self):
        rs = RetryStrategy()
        assert rs.max_retries == 0
        assert rs.backoff_factor == 2.0
        assert 429 in rs.status_forcelist
        assert 503 in rs.status_forcelist

    def test_custom_params(self):
        rs = RetryStrategy(max_retries=5, backoff_factor=1.0,
                           status_forcelist=[500, 502])
        assert rs.max_retries == 5
        assert rs.backoff_factor == 1.0
        assert rs.status_forcelist == [500, 502]

    def test_get_retry_object(self):
        rs = RetryStrategy(max_retries=4, backoff_factor=3.0)
        retry = rs.get_retry_object()
        assert retry.total == 4
        assert retry.backoff_factor == 3.0

    def test_final_status_not_raised(self):
        retry = RetryStrategy(max_retries=2).get_retry_object()
        assert retry.raise_on_status is False

    def test_retry_allowed_methods(self):
        rs = RetryStrategy()
        retry = rs.get_retry_object()
        allowed = retry.allowed_methods
        assert "GET" in allowed
        assert "HEAD" in allowed


# ── SessionManager tests ─────────────────────────────────────────────────────

class TestSessionManager:
    def test_creates_session(self):
        sm = SessionManager()
        session = sm.session
        assert session is not None
        sm.close()

    def test_session_cached(self):
        """Accessing .session twice returns the same object."""
        sm = SessionManager()
        s1 = sm.session
        s2 = sm.session
        assert s1 is s2
        sm.close()

    def test_adapters_mounted(self):
        sm = SessionManager(RetryStrategy(max_retries=1))
        adapter = sm.session.get_adapter("https://example.test/")
        assert adapter.max_retries.total == 1
        sm.close()

    def test_close_resets_session(self):
        sm = SessionManager()
        _ = sm.session
        sm.close()
        assert sm._session is None

    def test_close_idempotent(self):
        sm = SessionManager()
        sm.close()  # no session yet
        sm.close()  # still fine

    def test_context_manager(self):
        with SessionManager() as sm:
            session = sm.session
            assert session is not None
        assert sm._session is None

    def test_default_strategy_has_no_retries(self):
        assert SessionManager().retry_strategy.max_retries == 0
