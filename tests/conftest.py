"""
Pytest configuration and shared fixtures for the test suite.

Provides sample siege logs and a temporary database used across the
parser, storage, API and CLI tests.
"""

import pytest
import tempfile
from pathlib import Path

import sys

sys.path.insert(0, str(Path(__file__).parent.parent))

from siegelog.database.schema import DatabaseManager, create_tables


SAMPLE_LOG = """[20:00:00] [Alpha] Hero1(Warrior) → Attack [Beta] Villain1
Kill +100 Guild War +20

[20:05:00] [Beta] Villain1(Mage) → Attack [Alpha] Hero1
Kill +50

[20:10:00] [Alpha] Hero1(Warrior) → Attack [Beta] Guild Master Boss
Kill +100 Guild Master +50

[20:02:00] [Alpha] Hero2(Rogue) → Attack [Beta] Defender Villain1
Kill +80

System message without a second line

[20:20:00] [Gamma] Lone(Priest) stood idle
+10
"""

WORKED_EXAMPLE = (
    "[10:00:00] [Alpha] Hero1(x) → Attack [Beta] Villain1\n+100\n\n"
    "[10:05:00] [Beta] Villain1(x) → Attack [Alpha] Hero1\n+50"
)


@pytest.fixture
def sample_log() -> str:
    """
    Mixed siege log: four valid kills (one out of time order), one short
    entry and one entry without a defender.
    """
    return SAMPLE_LOG


@pytest.fixture
def worked_example() -> str:
    """Two players trading one kill each."""
    return WORKED_EXAMPLE


@pytest.fixture
def sample_log_file(tmp_path, sample_log) -> Path:
    path = tmp_path / "siege.txt"
    path.write_text(sample_log, encoding="utf-8")
    return path


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = f.name

    db = DatabaseManager(db_path)
    create_tables(db)
    yield db
    db.close()

    # Cleanup
    for suffix in ("", "-wal", "-shm"):
        Path(db_path + suffix).unlink(missing_ok=True)


# Pytest configuration
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "api: mark test as HTTP API related")
    config.addinivalue_line("markers", "storage: mark test as database related")
    config.addinivalue_line("markers", "cli: mark test as command-line related")


# Pytest collection configuration
def pytest_collection_modifyitems(config, items):
    """Modify collected test items with markers."""
    for item in items:
        # Auto-mark tests based on file names
        if "test_api" in item.fspath.basename:
            item.add_marker(pytest.mark.api)

        if "test_storage" in item.fspath.basename:
            item.add_marker(pytest.mark.storage)

        if "test_cli" in item.fspath.basename:
            item.add_marker(pytest.mark.cli)
