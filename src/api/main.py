"""FastAPI application entry point."""

import os
import sys
import logging
import tomllib
from contextlib import asynccontextmanager
from pathlib import Path
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

load_dotenv()

# main.py is at src/api/main.py
_src_path = Path(__file__).parent.parent
sys.path.insert(0, str(_src_path))

from api.routes import auth, health, posts, users
from utils.logging import setup_structured_logging
from adapter.mongodb.connection import MongoConnection, MongoSettings
from adapter.mongodb.indexes import ensure_all_indexes

setup_structured_logging()

logger = logging.getLogger(__name__)

# Read version from pyproject.toml (single source of truth)
_project_root = _src_path.parent
with open(_project_root / "pyproject.toml", "rb") as f:
    VERSION = tomllib.load(f)["project"]["version"]

SERVICE_NAME = "Blog API"
API_PREFIX = "/api/v1"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: ensure indexes on startup, close the client on shutdown."""
    mongo: MongoConnection = app.state.mongo
    db = mongo.get_database()
    if db is not None:
        if ensure_all_indexes(db):
            logger.info("MongoDB indexes verified/created successfully")
        else:
            logger.warning("Failed to create some MongoDB indexes")
    else:
        logger.warning("MongoDB unavailable, skipping index creation")

    yield

    mongo.close()


def _cors_settings() -> tuple[str | list[str], bool]:
    """Parse CORS_ORIGINS. Credentials are only allowed with an explicit origin list."""
    cors_origins_env = os.getenv("CORS_ORIGINS", "*")
    if cors_origins_env == "*":
        logger.warning(
            "CORS configured with wildcard origin ('*'). "
            "For production, set CORS_ORIGINS to specific domains"
        )
        return "*", False
    origins = [origin.strip() for origin in cors_origins_env.split(",")]
    logger.info("CORS configured with specific origins", extra={"origins": origins})
    return origins, True


def create_app(settings: MongoSettings | None = None) -> FastAPI:
    app = FastAPI(
        title=SERVICE_NAME,
        description="Blog backend: users, login and posts",
        version=VERSION,
        lifespan=lifespan,
    )
    app.state.mongo = MongoConnection(settings or MongoSettings.from_env())

    cors_origins, allow_credentials = _cors_settings()
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    for module in (auth, users, posts, health):
        app.include_router(module.router, prefix=API_PREFIX)

    @app.get("/")
    async def root():
        return {
            "service": SERVICE_NAME,
            "version": VERSION,
            "status": "running"
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    port = int(os.getenv("PORT", 8000))
    uvicorn.run(
        app,
        host="0.0.0.0",
        port=port,
        access_log=False  # structured logging covers requests
    )
