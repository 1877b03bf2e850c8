"""MongoDB adapters: connection handling, indexes and repositories."""

from bson import ObjectId

USERS_COLLECTION_NAME = 'users'
POSTS_COLLECTION_NAME = 'posts'


def to_object_id(value: str) -> ObjectId | None:
    """Parse a 24-hex id string. Return None for malformed ids."""
    if not ObjectId.is_valid(value):
        return None
    return ObjectId(value)
