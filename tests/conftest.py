"""Shared pytest fixtures for all tests."""

import sqlite3
import pytest
from pathlib import Path
from unittest.mock import MagicMock

from config import Config, get_migrations_dir
from llm.providers.base import ChatProvider
from services.base import Services
from tests.helpers import run_migrations


@pytest.fixture
def test_db():
    """Create an in-memory SQLite database for testing.

    Yields:
        sqlite3.Connection: Connection to in-memory database.
    """
    conn = sqlite3.connect(":memory:")
    conn.execute("PRAGMA foreign_keys = ON")
    yield conn
    conn.close()


@pytest.fixture
def test_config(tmp_path):
    """Create a test configuration pointing to temporary paths.

    Args:
        tmp_path: pytest tmp_path fixture for temporary directory.

    Returns:
        Config: Test configuration object.
    """
    return Config(
        base_dir=tmp_path / "eclat",
        db_data_dir=tmp_path / "eclat" / "db",
        db_filename="test.db",
        log_level="DEBUG",
        log_dir=tmp_path / "eclat" / "logs",
        cart_path=tmp_path / "eclat" / "cart.json",
        default_country_code="+91",
        llm_enabled=False,
        llm_provider="openai",
        llm_openai_api_key="",
        llm_openai_model="gpt-4o-mini",
    )


@pytest.fixture
def db_manager_with_schema(test_db):
    """Create a DatabaseManager with schema already set up.

    This fixture provides a DatabaseManager that uses an in-memory database
    with all migrations already applied.

    Args:
        test_db: In-memory database connection fixture.

    Returns:
        DatabaseManager: Database manager with schema ready.
    """
    run_migrations(test_db, get_migrations_dir())

    class TestDatabaseManager:
        """Test database manager that uses in-memory connection."""

        def __init__(self, conn):
            self.conn = conn

        def connect(self):
            """Return a context manager for the test connection."""
            return _TestConnectionContext(self.conn)

        def get_db_path(self):
            """Return a fake path for the test database."""
            return Path(":memory:")

        def get_migrations_dir(self):
            """Get the migrations directory path."""
            return get_migrations_dir()

    class _TestConnectionContext:
        """Context manager for test database connections."""

        def __init__(self, conn):
            self.conn = conn

        def __enter__(self):
            return self.conn

        def __exit__(self, exc_type, exc_val, exc_tb):
            # Don't close the connection - let the fixture handle it
            pass

    return TestDatabaseManager(test_db)


@pytest.fixture
def chat_provider():
    """A mock LLM provider that answers every question the same way."""
    provider = MagicMock(spec=ChatProvider)
    provider.reply.return_value = "Standard shipping takes 3-5 business days."
    return provider


@pytest.fixture
def services(test_config, db_manager_with_schema, chat_provider):
    """Create a Services container with test database.

    Args:
        test_config: Test configuration fixture.
        db_manager_with_schema: Database manager with schema set up.
        chat_provider: Mock LLM provider.

    Returns:
        Services: Services container for testing.
    """
    return Services(
        test_config, db_manager=db_manager_with_schema, chat_provider=chat_provider
    )
