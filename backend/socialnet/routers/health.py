import sqlite3

from fastapi import APIRouter, Depends

from socialnet.db import db_session

router = APIRouter()


@router.get("/api/health")
def health(conn: sqlite3.Connection = Depends(db_session)):
    users = conn.execute("SELECT COUNT(*) AS n FROM users").fetchone()["n"]
    friendships = conn.execute("SELECT COUNT(*) AS n FROM friendships").fetchone()["n"]
    return {"status": "ok", "users": users, "friendships": friendships}
