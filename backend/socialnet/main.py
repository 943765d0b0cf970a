"""
Social Network Explorer — FastAPI Backend
Serves users, friendships and community analysis from a SQLite store.
"""
import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from socialnet import db
from socialnet.errors import SocialNetworkError
from socialnet.routers import communities, friendships, health, users

log = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    log.info("Starting social network API (db=%s)", db.DB_PATH)
    db.get_db().close()
    yield
    log.info("Shutting down social network API")


app = FastAPI(title="Social Network Explorer API", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(SocialNetworkError)
async def social_network_error(request: Request, exc: SocialNetworkError) -> JSONResponse:
    log.warning("%s %s -> %d: %s", request.method, request.url.path, exc.status_code, exc)
    return JSONResponse(status_code=exc.status_code, content={"detail": str(exc)})


app.include_router(health.router)
app.include_router(users.router)
app.include_router(friendships.router)
app.include_router(communities.router)
