import sqlite3
from typing import Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from socialnet import service
from socialnet.db import db_session
from socialnet.validation import ValidateStrategy

router = APIRouter()


class UserRequest(BaseModel):
    first_name: str
    last_name:  str
    email:      str
    strategy:   ValidateStrategy = ValidateStrategy.SLOW


@router.get("/api/users")
def list_users(conn: sqlite3.Connection = Depends(db_session)):
    return {"users": service.list_users(conn)}


@router.post("/api/users", status_code=201)
def add_user(req: UserRequest, conn: sqlite3.Connection = Depends(db_session)):
    return service.add_user(conn, req.first_name, req.last_name, req.email, req.strategy)


@router.get("/api/users/search")
def search_users(
    last_name: str = Query(..., min_length=1),
    conn: sqlite3.Connection = Depends(db_session),
):
    users = service.users_with_string_in_last_name(conn, last_name)
    return {"users": users, "query": last_name}


@router.get("/api/users/min-friends")
def users_with_minimum_friends(
    minimum: int = Query(1, ge=0),
    conn: sqlite3.Connection = Depends(db_session),
):
    return {"users": service.users_with_minimum_friends(conn, minimum), "minimum": minimum}


@router.get("/api/users/{user_id}")
def get_user(user_id: str, conn: sqlite3.Connection = Depends(db_session)):
    return service.get_user(conn, user_id)


@router.put("/api/users/{user_id}")
def update_user(user_id: str, req: UserRequest, conn: sqlite3.Connection = Depends(db_session)):
    return service.update_user(
        conn, user_id, req.first_name, req.last_name, req.email, req.strategy
    )


@router.delete("/api/users/{user_id}")
def remove_user(user_id: str, conn: sqlite3.Connection = Depends(db_session)):
    return {"removed": service.remove_user(conn, user_id)}


@router.get("/api/users/{user_id}/friends")
def friends_of(
    user_id: str,
    month:   Optional[int] = Query(None, ge=1, le=12),
    conn:    sqlite3.Connection = Depends(db_session),
):
    if month is None:
        friends = service.friends_of(conn, user_id)
    else:
        friends = service.friends_from_month(conn, user_id, month)
    return {"user_id": user_id, "month": month, "friends": friends}
