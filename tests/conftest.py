"""
Pytest configuration and fixtures for the Event Planning API tests.

Provides shared fixtures for:
- A fresh SQLite database file per test
- A FastAPI test client bound to that database
- Bearer token headers for arbitrary actors
- Sample data factories for events, tasks and guests
"""

import pytest
from fastapi.testclient import TestClient

from event_planning_api.app.core.config import settings
from event_planning_api.app.core.db import get_connection, init_db
from event_planning_api.app.core.security import create_access_token
from event_planning_api.app.main import app


# ============================================================================
# Database Fixtures
# ============================================================================

@pytest.fixture(scope='function')
def test_db(tmp_path, monkeypatch):
    """Point the application at an empty, migrated database file."""
    db_path = tmp_path / "event_planning_test.db"
    monkeypatch.setattr(settings, "database_url", str(db_path))
    init_db()
    return db_path


@pytest.fixture
def count_rows(test_db):
    """Count rows of a table matching ``event_id``."""
    def _count(table, event_id):
        conn = get_connection()
        try:
            row = conn.execute(
                f"SELECT COUNT(*) AS n FROM {table} WHERE event_id = ?", (event_id,)
            ).fetchone()
        finally:
            conn.close()
        return row["n"]
    return _count


# ============================================================================
# HTTP Fixtures
# ============================================================================

@pytest.fixture(scope='function')
def client(test_db):
    """Create a TestClient; entering it runs the startup migrations."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_headers():
    """Factory for Authorization headers of a given actor."""
    def _headers(actor_id='alice'):
        token = create_access_token({"sub": actor_id})
        return {"Authorization": f"Bearer {token}"}
    return _headers


# ============================================================================
# Sample Data Factories
# ============================================================================

@pytest.fixture
def sample_event_data():
    """Factory for event creation payloads."""
    def _create(title='Launch', **overrides):
        data = {
            'title': title,
            'description': 'Product launch party',
            'start_date_time': '2025-09-01T18:00:00+00:00',
            'end_date_time': '2025-09-01T23:00:00+00:00',
            'time_zone': 'Europe/Berlin',
            'location_name': 'Rooftop',
            'location_address': '1 Main Street',
            'location_map_link': 'https://maps.example.com/?q=rooftop',
        }
        data.update(overrides)
        return data
    return _create
