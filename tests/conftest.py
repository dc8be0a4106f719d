"""
Pytest Configuration and Shared Fixtures

Provides common test fixtures and configuration for the entire test suite.
"""

import tempfile
from datetime import datetime, timedelta
from pathlib import Path

import pytest

from budgetme.core import config as config_module
from budgetme.core.dates import to_millis
from budgetme.core.money import Money
from budgetme.ledger.models import HistoryItem, Ledger
from budgetme.storage.local import LocalStorageProvider
from tests.fixtures.memory_store import MemoryStorageProvider


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as temp_path:
        yield Path(temp_path)


@pytest.fixture
def now() -> datetime:
    """A fixed, mid-day moment so day arithmetic never straddles midnight."""
    return datetime(2024, 8, 15, 12, 0, 0)


@pytest.fixture
def fresh_ledger(now) -> Ledger:
    """Default ledger ($10.00 balance, $5.00/day) last updated at ``now``."""
    return Ledger.new(now)


@pytest.fixture
def make_item(now):
    """Factory for history items with distinct timestamps."""

    def _make(dollars, reason="food", specific=None, minutes=0) -> HistoryItem:
        return HistoryItem(
            amount=Money.from_dollars(dollars),
            reason=reason,
            time=to_millis(now - timedelta(hours=1) + timedelta(minutes=minutes)),
            specific=specific,
        )

    return _make


@pytest.fixture
def memory_store() -> MemoryStorageProvider:
    """In-memory ledger store."""
    return MemoryStorageProvider()


@pytest.fixture
def local_store(temp_dir) -> LocalStorageProvider:
    """Ledger store in a temporary directory."""
    return LocalStorageProvider(temp_dir / "ledger")


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch, tmp_path):
    """Set up test environment variables."""
    # Ensure tests never touch the real config directory
    monkeypatch.setenv("BUDGETME_ENV", "test")
    monkeypatch.setenv("BUDGETME_CONFIG_DIR", str(tmp_path / "budgetme_config"))
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.delenv("DEBUG", raising=False)

    # Force get_config() to re-read the patched environment
    monkeypatch.setattr(config_module, "_config", None)


# Test markers for categorizing tests
def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line("markers", "integration: Integration tests for complete workflows")
    config.addinivalue_line("markers", "currency: Tests for currency handling and precision")
    config.addinivalue_line("markers", "ledger: Tests for the ledger engine")
    config.addinivalue_line("markers", "storage: Tests for ledger storage backends")
    config.addinivalue_line("markers", "slow: Tests that take significant time to run")
