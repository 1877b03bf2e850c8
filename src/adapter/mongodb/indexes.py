"""MongoDB index declarations and startup creation.

Each repository lists its indexes as ``IndexSpec`` values. ``apply_indexes``
creates them and replaces any stale index that clashes on name or key pattern.
"""

from dataclasses import dataclass
from logging import getLogger

from pymongo.errors import OperationFailure, PyMongoError

logger = getLogger(__name__)

# Server error codes: IndexOptionsConflict, IndexKeySpecsConflict
INDEX_CONFLICT_CODES = frozenset({85, 86})


@dataclass(frozen=True)
class IndexSpec:
    name: str
    keys: tuple[tuple[str, int], ...]
    unique: bool = False

    def create_on(self, collection) -> None:
        collection.create_index(list(self.keys), name=self.name, unique=self.unique)


def _stale_index_names(collection, spec: IndexSpec) -> list[str]:
    """Existing indexes sharing the spec's name or its key pattern."""
    wanted = list(spec.keys)
    return [
        name for name, info in collection.index_information().items()
        if name != '_id_' and (name == spec.name or list(info.get('key', [])) == wanted)
    ]


def _create(collection, spec: IndexSpec) -> None:
    try:
        spec.create_on(collection)
    except OperationFailure as e:
        if e.code not in INDEX_CONFLICT_CODES:
            raise
        for name in _stale_index_names(collection, spec):
            logger.warning("Dropping conflicting index", extra={"index": name, "replacement": spec.name})
            collection.drop_index(name)
        spec.create_on(collection)
        logger.info("Recreated index", extra={"index": spec.name})


def apply_indexes(collection, specs) -> bool:
    """Create every index in ``specs``. Return False if any of them failed."""
    ok = True
    for spec in specs:
        try:
            _create(collection, spec)
        except PyMongoError as e:
            logger.error("Failed to create index", extra={"index": spec.name, "error": str(e)})
            ok = False
    return ok


def ensure_all_indexes(db) -> bool:
    """Ensure indexes for all collections. Called at app startup."""
    from adapter.mongodb.post_repository import MongoPostRepository
    from adapter.mongodb.user_repository import MongoUserRepository

    results = [
        MongoUserRepository(db).ensure_indexes(),
        MongoPostRepository(db).ensure_indexes(),
    ]
    return all(results)
