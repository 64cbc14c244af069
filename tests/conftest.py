"""
Shared pytest fixtures for finance tracker tests.
"""

import pytest
import os
import sys
from unittest.mock import MagicMock

# Ensure the project root is on sys.path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from store import Store


class TestConfig:
    """Test configuration that bypasses MySQL."""
    __test__ = False
    SECRET_KEY = 'test-secret-key-for-testing-only'
    TESTING = True
    PORT = 3001
    LOG_LEVEL = 'CRITICAL'

    @staticmethod
    def open_store():
        """Mock pool - no real MySQL needed."""
        return Store(MagicMock())


def make_mock_connection():
    """Create a mock MySQL connection with cursor context manager."""
    conn = MagicMock()
    cursor = MagicMock()
    cursor.__enter__ = MagicMock(return_value=cursor)
    cursor.__exit__ = MagicMock(return_value=False)
    conn.cursor.return_value = cursor
    return conn, cursor


@pytest.fixture
def app():
    """Create application for testing."""
    from app import create_app
    application = create_app(config_class=TestConfig)
    yield application
    application.extensions['store'].close()


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture
def mock_db(app):
    """Provide mock database connection and cursor."""
    conn, cursor = make_mock_connection()
    app.extensions['store']._pool.get_connection.return_value = conn
    return conn, cursor
