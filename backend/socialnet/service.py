"""
Social network service: validation, storage and analytics wired together.

Every function takes an open connection; callers own its lifetime.
"""
from __future__ import annotations

import logging
import sqlite3
import time
import uuid
from datetime import datetime

from socialnet.analytics.communities import compute_communities, detect_communities
from socialnet.analytics.friends import rank_by_friend_count
from socialnet.errors import ConflictError, NotFoundError, ValidationError
from socialnet.queries import friendships as friendship_queries
from socialnet.queries import users as user_queries
from socialnet.validation import ValidateStrategy, validate_friendship, validate_user

log = logging.getLogger(__name__)


# ── Users ────────────────────────────────────────────────────────────────────

def add_user(
    conn: sqlite3.Connection,
    first_name: str,
    last_name: str,
    email: str,
    strategy: ValidateStrategy = ValidateStrategy.SLOW,
) -> dict:
    validate_user(first_name, last_name, email, strategy)
    if user_queries.find_user_by_fields(conn, first_name, last_name, email):
        raise ConflictError("A user with the same name and email already exists.")

    user = {
        "id":         str(uuid.uuid4()),
        "first_name": first_name,
        "last_name":  last_name,
        "email":      email,
    }
    user_queries.insert_user(conn, user)
    log.info("Added user %s (%s %s)", user["id"], first_name, last_name)
    return user


def get_user(conn: sqlite3.Connection, user_id: str) -> dict:
    user = user_queries.fetch_user(conn, user_id)
    if user is None:
        raise NotFoundError(f"No user with id {user_id}.")
    return user


def list_users(conn: sqlite3.Connection) -> list[dict]:
    return user_queries.fetch_users(conn)


def update_user(
    conn: sqlite3.Connection,
    user_id: str,
    first_name: str,
    last_name: str,
    email: str,
    strategy: ValidateStrategy = ValidateStrategy.SLOW,
) -> dict:
    get_user(conn, user_id)
    validate_user(first_name, last_name, email, strategy)
    existing = user_queries.find_user_by_fields(conn, first_name, last_name, email)
    if existing and existing["id"] != user_id:
        raise ConflictError("A user with the same name and email already exists.")

    user = {"id": user_id, "first_name": first_name, "last_name": last_name, "email": email}
    user_queries.update_user(conn, user)
    log.info("Updated user %s", user_id)
    return user


def remove_user(conn: sqlite3.Connection, user_id: str) -> dict:
    """Remove a user and all of its friendships; returns the removed user."""
    user = get_user(conn, user_id)
    user_queries.delete_user(conn, user_id)
    log.info("Removed user %s", user_id)
    return user


def users_with_string_in_last_name(conn: sqlite3.Connection, fragment: str) -> list[dict]:
    if not fragment:
        raise ValidationError("Search string cannot be empty.")
    return user_queries.search_users_by_last_name(conn, fragment)


# ── Friendships ──────────────────────────────────────────────────────────────

def add_friendship(
    conn: sqlite3.Connection,
    user_id_1: str,
    user_id_2: str,
    created_at: datetime | None = None,
) -> dict:
    validate_friendship(user_id_1, user_id_2)
    get_user(conn, user_id_1)
    get_user(conn, user_id_2)
    if friendship_queries.fetch_friendship(conn, user_id_1, user_id_2):
        raise ConflictError("These users are already friends.")

    stamp = (created_at or datetime.now()).isoformat(sep=" ", timespec="seconds")
    friendship_queries.insert_friendship(conn, user_id_1, user_id_2, stamp)
    log.info("Added friendship %s - %s", user_id_1, user_id_2)
    return friendship_queries.fetch_friendship(conn, user_id_1, user_id_2)


def remove_friendship(conn: sqlite3.Connection, user_id_1: str, user_id_2: str) -> dict:
    friendship = friendship_queries.fetch_friendship(conn, user_id_1, user_id_2)
    if friendship is None:
        raise NotFoundError("No friendship found between these users.")
    friendship_queries.delete_friendship(conn, user_id_1, user_id_2)
    log.info("Removed friendship %s - %s", user_id_1, user_id_2)
    return friendship


def list_friendships(conn: sqlite3.Connection) -> list[dict]:
    return friendship_queries.fetch_friendships(conn)


def friends_of(conn: sqlite3.Connection, user_id: str) -> list[dict]:
    get_user(conn, user_id)
    return friendship_queries.fetch_friends_of(conn, user_id)


def friends_from_month(conn: sqlite3.Connection, user_id: str, month: int) -> list[dict]:
    if not 1 <= month <= 12:
        raise ValidationError(f"Invalid month: {month}.")
    get_user(conn, user_id)
    return friendship_queries.fetch_friends_from_month(conn, user_id, month)


def users_with_minimum_friends(conn: sqlite3.Connection, minimum: int) -> list[dict]:
    if minimum < 0:
        raise ValidationError("Minimum number of friends cannot be negative.")
    users = user_queries.fetch_users(conn)
    pairs = friendship_queries.list_all_friendship_pairs(conn)
    return rank_by_friend_count(users, pairs, minimum)


# ── Communities ──────────────────────────────────────────────────────────────

def _graph_snapshot(conn: sqlite3.Connection) -> tuple[list[str], list[tuple[str, str]]]:
    """Read users and friendships inside one transaction so they agree."""
    with conn:
        if not conn.in_transaction:
            conn.execute("BEGIN")
        user_ids = user_queries.list_all_user_ids(conn)
        pairs = friendship_queries.list_all_friendship_pairs(conn)
    return user_ids, pairs


def community_report(conn: sqlite3.Connection) -> dict:
    user_ids, pairs = _graph_snapshot(conn)
    t0 = time.perf_counter()
    report = detect_communities(user_ids, pairs)
    log.info(
        "Communities: %d users, %d friendships -> %d communities in %.3fs",
        len(user_ids), len(pairs), report["community_count"], time.perf_counter() - t0,
    )
    return report


def communities(conn: sqlite3.Connection) -> tuple[int, list[list[str]]]:
    """Return (number of communities, most active communities)."""
    report = community_report(conn)
    return report["community_count"], report["most_active"]


def number_of_communities(conn: sqlite3.Connection) -> int:
    user_ids, pairs = _graph_snapshot(conn)
    count, _ = compute_communities(user_ids, pairs)
    return count


def most_active_communities(conn: sqlite3.Connection) -> list[list[str]]:
    return community_report(conn)["most_active"]
