"""MongoDB implementation of PostRepository."""

from logging import getLogger

from pymongo import ASCENDING, DESCENDING, ReturnDocument
from pymongo.database import Database
from pymongo.errors import PyMongoError

from adapter.mongodb import POSTS_COLLECTION_NAME, to_object_id
from adapter.mongodb.indexes import IndexSpec, apply_indexes
from domain.model.post import Post, PostSort
from domain.model.timestamps import as_utc

logger = getLogger(__name__)


class MongoPostRepository:
    def __init__(self, db: Database):
        self.collection = db[POSTS_COLLECTION_NAME]

    # ── indexes ──────────────────────────────────────────────

    INDEXES = (
        IndexSpec('idx_posts_created_at', (('created_at', -1),)),
        IndexSpec('idx_posts_updated_at', (('updated_at', -1),)),
        IndexSpec('idx_posts_author', (('author', 1), ('created_at', -1))),
        IndexSpec('idx_posts_tags', (('tags', 1),)),
    )

    def ensure_indexes(self) -> bool:
        """Create indexes for posts collection."""
        return apply_indexes(self.collection, self.INDEXES)

    # ── helpers ──────────────────────────────────────────────

    def _to_domain(self, doc: dict) -> Post:
        """Convert MongoDB document to Post domain model."""
        return Post(
            id=str(doc['_id']),
            title=doc['title'],
            author=doc['author'],
            created_at=as_utc(doc['created_at']),
            updated_at=as_utc(doc['updated_at']),
            contents=doc.get('contents'),
            tags=list(doc.get('tags') or []),
        )

    @staticmethod
    def _sort_spec(sort: PostSort) -> list:
        direction = DESCENDING if sort.descending else ASCENDING
        # ObjectIds grow with insertion, so _id breaks ties in insertion order
        return [(sort.sort_by.attribute, direction), ('_id', ASCENDING)]

    # ── write operations ─────────────────────────────────────

    def insert(self, post: Post) -> Post:
        doc = {
            '_id': to_object_id(post.id),
            'title': post.title,
            'author': post.author,
            'contents': post.contents,
            'tags': list(post.tags),
            'created_at': post.created_at,
            'updated_at': post.updated_at,
        }
        try:
            self.collection.insert_one(doc)
        except PyMongoError as e:
            logger.error("Failed to insert post", extra={"postId": post.id, "error": str(e)})
            raise

        logger.info("Post inserted", extra={"postId": post.id, "author": post.author})
        return self._to_domain(doc)

    def update(self, post: Post) -> Post | None:
        """Persist the patchable fields, filtered on author so ownership is checked by the store too."""
        object_id = to_object_id(post.id)
        if object_id is None:
            return None
        try:
            doc = self.collection.find_one_and_update(
                {'_id': object_id, 'author': post.author},
                {'$set': {
                    'title': post.title,
                    'contents': post.contents,
                    'tags': list(post.tags),
                    'updated_at': post.updated_at,
                }},
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            logger.error("Failed to update post", extra={"postId": post.id, "error": str(e)})
            raise

        if doc is None:
            logger.warning("Post not found for update", extra={"postId": post.id})
            return None
        logger.debug("Post updated", extra={"postId": post.id})
        return self._to_domain(doc)

    def delete(self, post_id: str, author: str) -> int:
        object_id = to_object_id(post_id)
        if object_id is None:
            return 0
        try:
            result = self.collection.delete_one({'_id': object_id, 'author': author})
        except PyMongoError as e:
            logger.error("Failed to delete post", extra={"postId": post_id, "error": str(e)})
            raise

        logger.info("Post delete", extra={"postId": post_id, "deletedCount": result.deleted_count})
        return result.deleted_count

    # ── read operations ──────────────────────────────────────

    def get_by_id(self, post_id: str) -> Post | None:
        object_id = to_object_id(post_id)
        if object_id is None:
            return None
        try:
            doc = self.collection.find_one({'_id': object_id})
        except PyMongoError as e:
            logger.error("Failed to retrieve post", extra={"postId": post_id, "error": str(e)})
            raise
        return self._to_domain(doc) if doc else None

    def find(
        self,
        author: str | None = None,
        tag: str | None = None,
        sort: PostSort = PostSort(),
    ) -> list[Post]:
        query: dict = {}
        if author is not None:
            query['author'] = author
        if tag is not None:
            # equality on an array field matches any element
            query['tags'] = tag

        try:
            docs = self.collection.find(query).sort(self._sort_spec(sort))
            posts = [self._to_domain(doc) for doc in docs]
        except PyMongoError as e:
            logger.error("Failed to list posts", extra={"error": str(e)})
            raise

        logger.debug("Listed posts", extra={"count": len(posts)})
        return posts
