"""
Social network console.

Usage (from backend/):
    python3 -m socialnet.cli seed                     # load the demo network
    python3 -m socialnet.cli add-user John Snow john@mail.com   # add a user
    python3 -m socialnet.cli add-friendship <id1> <id2>
    python3 -m socialnet.cli communities              # number of communities
    python3 -m socialnet.cli most-active              # members of the most active one(s)
    python3 -m socialnet.cli min-friends 2
    python3 -m socialnet.cli friends-from-month <id> 11
    python3 -m socialnet.cli search Rem
    python3 -m socialnet.cli serve --port 8000        # run the HTTP API

Every command accepts --db PATH and --log-level LEVEL before the subcommand.
"""
from __future__ import annotations

import argparse
import logging
import sqlite3
import sys

from socialnet import db
from socialnet import service
from socialnet.errors import SocialNetworkError
from socialnet.validation import ValidateStrategy

DEFAULT_PORT = 8000

# Demo network: 11 users and 10 friendships
SEED_USERS = [
    ("John", "Snow", "john.snow@mail.com"),
    ("Maria", "Pop", "maria.pop@mail.com"),
    ("Marius", "Smith", "marius.smith@mail.com"),
    ("Florin", "Purice", "florin.purice@mail.com"),
    ("Ioan", "Ciobotaru", "ioan.ciobo@mail.com"),
    ("Vasile", "Pruna", "vasile.pruna@mail.com"),
    ("Cosmin", "Ilie", "cosmin.ilie@mail.com"),
    ("Marina", "Florian", "marina.florian@mail.com"),
    ("Oana", "Marin", "oana.marin@mail.com"),
    ("Ionut", "Vantu", "ionut.vantu@mail.com"),
    ("Ana", "Manole", "ana.manole@mail.com"),
]
SEED_FRIENDSHIPS = [
    (0, 1), (2, 1), (1, 3), (0, 4), (0, 5),
    (0, 6), (3, 4), (6, 5), (5, 1), (0, 2),
]


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )


def format_user(user: dict) -> str:
    return f"{user['id']}  {user['first_name']} {user['last_name']} <{user['email']}>"


# ── Commands ──────────────────────────────────────────────────────────────────

def cmd_add_user(conn: sqlite3.Connection, args: argparse.Namespace) -> int:
    user = service.add_user(conn, args.first_name, args.last_name, args.email, args.strategy)
    print(f"User added successfully: {format_user(user)}")
    return 0


def cmd_remove_user(conn: sqlite3.Connection, args: argparse.Namespace) -> int:
    user = service.remove_user(conn, args.user_id)
    print(f"Removed user: {format_user(user)}")
    return 0


def cmd_users(conn: sqlite3.Connection, args: argparse.Namespace) -> int:
    users = service.list_users(conn)
    if not users:
        print("User list is empty!", file=sys.stderr)
        return 0
    print("\nUSERS\n")
    for user in users:
        print(format_user(user))
    return 0


def cmd_add_friendship(conn: sqlite3.Connection, args: argparse.Namespace) -> int:
    service.add_friendship(conn, args.user_id_1, args.user_id_2)
    print("Friendship added successfully!")
    return 0


def cmd_remove_friendship(conn: sqlite3.Connection, args: argparse.Namespace) -> int:
    service.remove_friendship(conn, args.user_id_1, args.user_id_2)
    first = service.get_user(conn, args.user_id_1)
    second = service.get_user(conn, args.user_id_2)
    print(f"Removed the friendship between: {format_user(first)} and {format_user(second)}")
    return 0


def cmd_friends(conn: sqlite3.Connection, args: argparse.Namespace) -> int:
    friends = service.friends_of(conn, args.user_id)
    if not friends:
        print("The specified user has no friends!", file=sys.stderr)
        return 0
    print("\nFRIENDS\n")
    for friend in friends:
        print(f"{format_user(friend)}  since {friend['friends_since']}")
    return 0


def cmd_communities(conn: sqlite3.Connection, args: argparse.Namespace) -> int:
    count = service.number_of_communities(conn)
    if count == len(service.list_users(conn)):
        print("The network has no communities!", file=sys.stderr)
        return 0
    print(f"The number of communities is: {count}")
    return 0


def cmd_most_active(conn: sqlite3.Connection, args: argparse.Namespace) -> int:
    users = {u["id"]: u for u in service.list_users(conn)}
    most_active = service.most_active_communities(conn)
    # Every user standing alone means no friendships at all.
    if len(most_active) == len(users):
        print("The network has no communities!", file=sys.stderr)
        return 0
    for community in most_active:
        print("\nTHE MOST ACTIVE COMMUNITY'S MEMBERS\n")
        for uid in community:
            print(format_user(users[uid]))
    return 0


def cmd_min_friends(conn: sqlite3.Connection, args: argparse.Namespace) -> int:
    for user in service.users_with_minimum_friends(conn, args.minimum):
        print(f"{user['first_name']} {user['last_name']}: {user['friend_count']}")
    return 0


def cmd_friends_from_month(conn: sqlite3.Connection, args: argparse.Namespace) -> int:
    friends = service.friends_from_month(conn, args.user_id, args.month)
    if not friends:
        print(f"The user has no friendships created in {args.month}", file=sys.stderr)
        return 0
    print("\nFRIENDSHIPS\n")
    for friend in friends:
        print(f"{friend['first_name']} | {friend['last_name']} | {friend['friends_since']}")
    return 0


def cmd_search(conn: sqlite3.Connection, args: argparse.Namespace) -> int:
    users = service.users_with_string_in_last_name(conn, args.fragment)
    if not users:
        print("No users found!", file=sys.stderr)
        return 0
    print(f"Users that have '{args.fragment}' in their last name\n")
    for user in users:
        print(format_user(user))
    return 0


def cmd_seed(conn: sqlite3.Connection, args: argparse.Namespace) -> int:
    ids = [
        service.add_user(conn, first, last, email)["id"]
        for first, last, email in SEED_USERS
    ]
    for a, b in SEED_FRIENDSHIPS:
        service.add_friendship(conn, ids[a], ids[b])
    print(f"Seeded {len(ids)} users and {len(SEED_FRIENDSHIPS)} friendships.")
    return 0


COMMANDS = {
    "add-user":           cmd_add_user,
    "remove-user":        cmd_remove_user,
    "users":              cmd_users,
    "add-friendship":     cmd_add_friendship,
    "remove-friendship":  cmd_remove_friendship,
    "friends":            cmd_friends,
    "communities":        cmd_communities,
    "most-active":        cmd_most_active,
    "min-friends":        cmd_min_friends,
    "friends-from-month": cmd_friends_from_month,
    "search":             cmd_search,
    "seed":               cmd_seed,
}


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="socialnet",
        description="Manage a small social network and inspect its communities.",
    )
    parser.add_argument("--db", default=None, help=f"SQLite database path (default: {db.DB_PATH})")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=db.LOG_LEVEL.upper(),
        help="Logging level",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("add-user", help="add a user")
    p.add_argument("first_name")
    p.add_argument("last_name")
    p.add_argument("email")
    p.add_argument(
        "--strategy",
        choices=[s.value for s in ValidateStrategy],
        default=ValidateStrategy.SLOW.value,
        help="validation strictness (default: slow)",
    )

    p = sub.add_parser("remove-user", help="remove a user and its friendships")
    p.add_argument("user_id")

    sub.add_parser("users", help="list users")

    for name, text in (("add-friendship", "befriend two users"), ("remove-friendship", "unfriend two users")):
        p = sub.add_parser(name, help=text)
        p.add_argument("user_id_1")
        p.add_argument("user_id_2")

    p = sub.add_parser("friends", help="list the friends of a user")
    p.add_argument("user_id")

    sub.add_parser("communities", help="number of communities")
    sub.add_parser("most-active", help="members of the most active community")

    p = sub.add_parser("min-friends", help="users with at least N friends")
    p.add_argument("minimum", type=int)

    p = sub.add_parser("friends-from-month", help="friendships of a user made in a month")
    p.add_argument("user_id")
    p.add_argument("month", type=int)

    p = sub.add_parser("search", help="users whose last name contains a string")
    p.add_argument("fragment")

    sub.add_parser("seed", help="load the demo network")

    p = sub.add_parser("serve", help="run the HTTP API")
    p.add_argument("--host", default="127.0.0.1")
    p.add_argument("--port", type=int, default=DEFAULT_PORT)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = create_parser().parse_args(argv)
    configure_logging(args.log_level)

    if args.db:
        db.DB_PATH = args.db

    if args.command == "serve":
        import uvicorn

        uvicorn.run("socialnet.main:app", host=args.host, port=args.port)
        return 0

    conn = db.get_db()
    try:
        return COMMANDS[args.command](conn, args)
    except SocialNetworkError as ex:
        print(f"ERROR: {ex}", file=sys.stderr)
        return 1
    finally:
        conn.close()


if __name__ == "__main__":
    sys.exit(main())
