import os
import logging
from dataclasses import dataclass

from pymongo import MongoClient
from pymongo.database import Database
from pymongo.errors import ConnectionFailure, PyMongoError

logger = logging.getLogger(__name__)

# Suppress verbose PyMongo logs (driver-level noise)
logging.getLogger('pymongo').setLevel(logging.WARNING)

DEFAULT_DATABASE_NAME = 'blog'


@dataclass(frozen=True)
class MongoSettings:
    """Connection settings, passed explicitly to MongoConnection."""
    url: str | None
    database_name: str = DEFAULT_DATABASE_NAME
    server_selection_timeout_ms: int = 5000
    max_pool_size: int = 10

    @staticmethod
    def from_env() -> 'MongoSettings':
        return MongoSettings(
            url=os.getenv('MONGO_URL'),
            database_name=os.getenv('MONGODB_DATABASE', DEFAULT_DATABASE_NAME),
        )


class MongoConnection:
    """Lazily connected, cached MongoClient.

    Connection strategy:
    1. Return cached client if healthy (ping succeeds)
    2. If cached client fails, attempt reconnection
    3. If initial connection failed (config issue), don't retry
    """

    def __init__(self, settings: MongoSettings):
        self.settings = settings
        self._client: MongoClient | None = None
        self._connection_attempted = False
        self._connection_failed = False

    def reset(self) -> None:
        self._client = None

    def get_client(self) -> MongoClient | None:
        if self._client is not None:
            try:
                self._client.admin.command('ping')
                return self._client
            except PyMongoError:
                self._client = None
                logger.debug("[MONGODB] Cached client failed ping, attempting reconnection...")

        if self._connection_failed:
            return None

        if not self.settings.url:
            logger.error("[MONGODB] MONGO_URL not configured.")
            self._connection_failed = True
            return None

        try:
            client = MongoClient(
                self.settings.url,
                serverSelectionTimeoutMS=self.settings.server_selection_timeout_ms,
                connectTimeoutMS=5000,
                socketTimeoutMS=30000,
                maxPoolSize=self.settings.max_pool_size,
                minPoolSize=0,
                maxIdleTimeMS=30000,
                waitQueueTimeoutMS=10000,
                retryWrites=True,
                retryReads=True,
            )
            client.admin.command('ping')

            is_first_connection = not self._connection_attempted
            self._connection_attempted = True
            self._client = client

            if is_first_connection:
                logger.info(
                    "[MONGODB] Connected successfully",
                    extra={"database": self.settings.database_name},
                )
            return client
        except (ConnectionFailure, PyMongoError) as e:
            if not self._connection_attempted:
                logger.error("[MONGODB] Initial connection failed", extra={"error": str(e)[:200]})
                self._connection_failed = True
            return None

    def get_database(self) -> Database | None:
        client = self.get_client()
        if client is None:
            return None
        return client[self.settings.database_name]

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None
