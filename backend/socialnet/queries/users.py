"""
User queries — DB I/O only.
"""
from __future__ import annotations

import sqlite3

from socialnet.db import row_to_dict

_USER_FIELDS = "id, first_name, last_name, email"


def insert_user(conn: sqlite3.Connection, user: dict) -> None:
    conn.execute(
        "INSERT INTO users (id, first_name, last_name, email) VALUES (?, ?, ?, ?)",
        (user["id"], user["first_name"], user["last_name"], user["email"]),
    )
    conn.commit()


def fetch_user(conn: sqlite3.Connection, user_id: str) -> dict | None:
    row = conn.execute(
        f"SELECT {_USER_FIELDS} FROM users WHERE id = ?", (user_id,)
    ).fetchone()
    return row_to_dict(row) if row else None


def fetch_users(conn: sqlite3.Connection) -> list[dict]:
    """All users in insertion order."""
    rows = conn.execute(f"SELECT {_USER_FIELDS} FROM users ORDER BY rowid").fetchall()
    return [row_to_dict(r) for r in rows]


def find_user_by_fields(
    conn: sqlite3.Connection, first_name: str, last_name: str, email: str
) -> dict | None:
    row = conn.execute(
        f"SELECT {_USER_FIELDS} FROM users "
        "WHERE first_name = ? AND last_name = ? AND email = ?",
        (first_name, last_name, email),
    ).fetchone()
    return row_to_dict(row) if row else None


def update_user(conn: sqlite3.Connection, user: dict) -> int:
    cur = conn.execute(
        "UPDATE users SET first_name = ?, last_name = ?, email = ? WHERE id = ?",
        (user["first_name"], user["last_name"], user["email"], user["id"]),
    )
    conn.commit()
    return cur.rowcount


def delete_user(conn: sqlite3.Connection, user_id: str) -> int:
    """Delete a user together with every friendship it takes part in."""
    with conn:
        conn.execute(
            "DELETE FROM friendships WHERE user_lo = ? OR user_hi = ?", (user_id, user_id)
        )
        cur = conn.execute("DELETE FROM users WHERE id = ?", (user_id,))
    return cur.rowcount


def list_all_user_ids(conn: sqlite3.Connection) -> list[str]:
    return [r["id"] for r in conn.execute("SELECT id FROM users ORDER BY rowid").fetchall()]


def search_users_by_last_name(conn: sqlite3.Connection, fragment: str) -> list[dict]:
    """Case-sensitive substring match on last_name."""
    rows = conn.execute(
        f"SELECT {_USER_FIELDS} FROM users WHERE instr(last_name, ?) > 0 ORDER BY rowid",
        (fragment,),
    ).fetchall()
    return [row_to_dict(r) for r in rows]
