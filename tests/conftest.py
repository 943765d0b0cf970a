"""
Shared fixtures for the social network tests.

Analytics tests need no database. Query, service and route tests run
against a throwaway SQLite file created per test.
"""
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))

from socialnet import db  # noqa: E402


@pytest.fixture
def db_path(tmp_path: Path, monkeypatch) -> str:
    path = str(tmp_path / "socialnet.db")
    monkeypatch.setattr(db, "DB_PATH", path)
    return path


@pytest.fixture
def conn(db_path: str):
    connection = db.get_db(db_path)
    yield connection
    connection.close()


@pytest.fixture
def client(db_path: str):
    from fastapi.testclient import TestClient

    from socialnet.main import app

    with TestClient(app) as test_client:
        yield test_client


def make_user(conn, first_name: str, last_name: str = "Remus", email: str | None = None) -> dict:
    """Insert a user with QUICK validation and return it."""
    from socialnet import service
    from socialnet.validation import ValidateStrategy

    email = email or f"{first_name.lower()}.{last_name.lower()}@mail.com"
    return service.add_user(conn, first_name, last_name, email, ValidateStrategy.QUICK)
