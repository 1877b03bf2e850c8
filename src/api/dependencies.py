from fastapi import HTTPException, Request

from adapter.mongodb.connection import MongoConnection
from adapter.mongodb.post_repository import MongoPostRepository
from adapter.mongodb.user_repository import MongoUserRepository
from port.post_repository import PostRepository
from port.user_repository import UserRepository


def get_mongo_connection(request: Request) -> MongoConnection:
    return request.app.state.mongo


def _get_db(request: Request):
    """Get MongoDB database, raising 503 if unavailable."""
    db = get_mongo_connection(request).get_database()
    if db is None:
        raise HTTPException(status_code=503, detail="Database unavailable")
    return db


def get_user_repo(request: Request) -> UserRepository:
    return MongoUserRepository(_get_db(request))


def get_post_repo(request: Request) -> PostRepository:
    return MongoPostRepository(_get_db(request))
