import sqlite3

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from socialnet import service
from socialnet.db import db_session

router = APIRouter()


class FriendshipRequest(BaseModel):
    user_id_1: str
    user_id_2: str


@router.get("/api/friendships")
def list_friendships(conn: sqlite3.Connection = Depends(db_session)):
    return {"friendships": service.list_friendships(conn)}


@router.post("/api/friendships", status_code=201)
def add_friendship(req: FriendshipRequest, conn: sqlite3.Connection = Depends(db_session)):
    return service.add_friendship(conn, req.user_id_1, req.user_id_2)


@router.delete("/api/friendships/{user_id_1}/{user_id_2}")
def remove_friendship(user_id_1: str, user_id_2: str, conn: sqlite3.Connection = Depends(db_session)):
    return {"removed": service.remove_friendship(conn, user_id_1, user_id_2)}
