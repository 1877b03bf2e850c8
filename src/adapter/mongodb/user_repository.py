"""MongoDB implementation of UserRepository."""

from logging import getLogger

from pymongo.database import Database
from pymongo.errors import DuplicateKeyError as MongoDuplicateKeyError
from pymongo.errors import PyMongoError

from adapter.mongodb import USERS_COLLECTION_NAME, to_object_id
from adapter.mongodb.indexes import IndexSpec, apply_indexes
from domain.model.errors import DuplicateKeyError
from domain.model.timestamps import as_utc
from domain.model.user import User

logger = getLogger(__name__)


class MongoUserRepository:
    INDEXES = (
        IndexSpec('username_1', (('username', 1),), unique=True),
    )

    def __init__(self, db: Database):
        self.collection = db[USERS_COLLECTION_NAME]

    def ensure_indexes(self) -> bool:
        """Create indexes for users collection."""
        return apply_indexes(self.collection, self.INDEXES)

    def _to_domain(self, doc: dict) -> User:
        """Convert MongoDB document to User domain model."""
        return User(
            id=str(doc['_id']),
            username=doc['username'],
            password_hash=doc['password_hash'],
            created_at=as_utc(doc['created_at']),
        )

    def create(self, user: User) -> User:
        """Insert a new user. Raise DuplicateKeyError if the username exists."""
        doc = {
            '_id': to_object_id(user.id),
            'username': user.username,
            'password_hash': user.password_hash,
            'created_at': user.created_at,
        }
        try:
            self.collection.insert_one(doc)
        except MongoDuplicateKeyError as e:
            logger.warning("User creation failed: username already exists", extra={"username": user.username})
            raise DuplicateKeyError(str(e)) from e
        except PyMongoError as e:
            logger.error("Failed to create user", extra={"username": user.username, "error": str(e)})
            raise

        logger.info("User created", extra={"userId": user.id, "username": user.username})
        return self._to_domain(doc)

    def get_by_username(self, username: str) -> User | None:
        try:
            doc = self.collection.find_one({'username': username})
        except PyMongoError as e:
            logger.error("Failed to get user by username", extra={"username": username, "error": str(e)})
            raise
        return self._to_domain(doc) if doc else None

    def get_by_id(self, user_id: str) -> User | None:
        object_id = to_object_id(user_id)
        if object_id is None:
            return None
        try:
            doc = self.collection.find_one({'_id': object_id})
        except PyMongoError as e:
            logger.error("Failed to get user by ID", extra={"userId": user_id, "error": str(e)})
            raise
        return self._to_domain(doc) if doc else None
