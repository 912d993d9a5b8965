"""
Pytest configuration and shared fixtures.
This file ensures the project root is in sys.path for imports.
"""

import os
import sys
from pathlib import Path

import pytest

os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("MEAL_TIMEZONE", "Asia/Kolkata")
os.environ.setdefault("PUSH_ENABLED", "true")

# Add project root to sys.path so we can import domain, services, etc.
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))


@pytest.fixture
def db_session():
    """
    Stand-in SQLAlchemy session.

    Repositories are replaced by in-memory fakes in service tests, so the
    session only needs to accept commit/rollback calls.
    """
    from unittest.mock import MagicMock
    from sqlalchemy.orm import Session

    return MagicMock(spec=Session)


@pytest.fixture
def store(monkeypatch):
    """In-memory rows plus fake repositories wired into the services"""
    from test_fixtures import InMemoryStore, install_fake_repositories

    s = InMemoryStore()
    s.send_push = install_fake_repositories(monkeypatch, s)
    return s
