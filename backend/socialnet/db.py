"""
Database helpers shared across queries and routers.
No analysis logic lives here — only I/O primitives.
"""
import logging
import os
import sqlite3
from collections.abc import Generator
from pathlib import Path

log = logging.getLogger(__name__)

DATA_DIR = Path(__file__).parent.parent.parent / "data"
DEFAULT_DB_PATH = str(DATA_DIR / "socialnet.db")
DB_PATH = os.environ.get("SOCIALNET_DB_PATH", DEFAULT_DB_PATH)
LOG_LEVEL = os.environ.get("SOCIALNET_LOG_LEVEL", "INFO")

SCHEMA = """
CREATE TABLE IF NOT EXISTS users (
    id          TEXT PRIMARY KEY,
    first_name  TEXT NOT NULL,
    last_name   TEXT NOT NULL,
    email       TEXT NOT NULL
);
CREATE TABLE IF NOT EXISTS friendships (
    user_lo     TEXT NOT NULL REFERENCES users(id),
    user_hi     TEXT NOT NULL REFERENCES users(id),
    created_at  TEXT NOT NULL,
    PRIMARY KEY (user_lo, user_hi),
    CHECK (user_lo < user_hi)
);
"""


def row_to_dict(row) -> dict:
    return dict(row)


def canonical_pair(a: str, b: str) -> tuple[str, str]:
    """Friendships are unordered; storage always keeps the smaller id first."""
    return (a, b) if a <= b else (b, a)


def init_schema(conn: sqlite3.Connection) -> None:
    conn.executescript(SCHEMA)
    conn.commit()


def get_db(db_path: str | None = None) -> sqlite3.Connection:
    path = db_path or DB_PATH
    if path != ":memory:":
        Path(path).parent.mkdir(parents=True, exist_ok=True)
    log.debug("Opening database: %s", path)
    conn = sqlite3.connect(path, check_same_thread=False)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    init_schema(conn)
    return conn


def db_session() -> Generator[sqlite3.Connection, None, None]:
    """FastAPI dependency: one connection per request, closed afterwards."""
    conn = get_db()
    try:
        yield conn
    finally:
        conn.close()
