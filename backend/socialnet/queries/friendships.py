"""
Friendship queries — DB I/O only.

Pairs are stored canonically (user_lo < user_hi), so every lookup
canonicalizes its arguments once instead of probing both orderings.
"""
from __future__ import annotations

import sqlite3

from socialnet.db import canonical_pair, row_to_dict

_USER_FIELDS = "u.id, u.first_name, u.last_name, u.email"


def insert_friendship(conn: sqlite3.Connection, user_a: str, user_b: str, created_at: str) -> None:
    lo, hi = canonical_pair(user_a, user_b)
    conn.execute(
        "INSERT INTO friendships (user_lo, user_hi, created_at) VALUES (?, ?, ?)",
        (lo, hi, created_at),
    )
    conn.commit()


def fetch_friendship(conn: sqlite3.Connection, user_a: str, user_b: str) -> dict | None:
    lo, hi = canonical_pair(user_a, user_b)
    row = conn.execute(
        "SELECT user_lo, user_hi, created_at FROM friendships WHERE user_lo = ? AND user_hi = ?",
        (lo, hi),
    ).fetchone()
    return row_to_dict(row) if row else None


def delete_friendship(conn: sqlite3.Connection, user_a: str, user_b: str) -> int:
    lo, hi = canonical_pair(user_a, user_b)
    cur = conn.execute(
        "DELETE FROM friendships WHERE user_lo = ? AND user_hi = ?", (lo, hi)
    )
    conn.commit()
    return cur.rowcount


def fetch_friendships(conn: sqlite3.Connection) -> list[dict]:
    rows = conn.execute(
        "SELECT user_lo, user_hi, created_at FROM friendships ORDER BY rowid"
    ).fetchall()
    return [row_to_dict(r) for r in rows]


def list_all_friendship_pairs(conn: sqlite3.Connection) -> list[tuple[str, str]]:
    rows = conn.execute("SELECT user_lo, user_hi FROM friendships ORDER BY rowid").fetchall()
    return [(r["user_lo"], r["user_hi"]) for r in rows]


def fetch_friends_of(conn: sqlite3.Connection, user_id: str) -> list[dict]:
    """Users sharing a friendship with user_id, oldest friendship first."""
    rows = conn.execute(
        f"""
        SELECT {_USER_FIELDS}, f.created_at AS friends_since
        FROM friendships f
        JOIN users u ON u.id = CASE WHEN f.user_lo = ? THEN f.user_hi ELSE f.user_lo END
        WHERE f.user_lo = ? OR f.user_hi = ?
        ORDER BY f.rowid
        """,
        (user_id, user_id, user_id),
    ).fetchall()
    return [row_to_dict(r) for r in rows]


def fetch_friends_from_month(conn: sqlite3.Connection, user_id: str, month: int) -> list[dict]:
    """Friends of user_id whose friendship was created in the given month (1-12)."""
    rows = conn.execute(
        f"""
        SELECT {_USER_FIELDS}, f.created_at AS friends_since
        FROM friendships f
        JOIN users u ON u.id = CASE WHEN f.user_lo = ? THEN f.user_hi ELSE f.user_lo END
        WHERE (f.user_lo = ? OR f.user_hi = ?)
          AND CAST(strftime('%m', f.created_at) AS INTEGER) = ?
        ORDER BY f.rowid
        """,
        (user_id, user_id, user_id, month),
    ).fetchall()
    return [row_to_dict(r) for r in rows]
