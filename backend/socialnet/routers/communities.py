import sqlite3

from fastapi import APIRouter, Depends

from socialnet import service
from socialnet.db import db_session

router = APIRouter()


@router.get("/api/communities")
def communities(conn: sqlite3.Connection = Depends(db_session)):
    return service.community_report(conn)


@router.get("/api/communities/count")
def community_count(conn: sqlite3.Connection = Depends(db_session)):
    return {"community_count": service.number_of_communities(conn)}


@router.get("/api/communities/most-active")
def most_active(conn: sqlite3.Connection = Depends(db_session)):
    report = service.community_report(conn)
    members = {u["id"]: u for u in service.list_users(conn)}
    return {
        "longest_path": report["max_longest_path"],
        "communities":  [[members[uid] for uid in c] for c in report["most_active"]],
    }
