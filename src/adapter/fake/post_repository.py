"""In-memory implementation of PostRepository for testing."""

from dataclasses import replace

from domain.model.post import Post, PostSort


def _copy(post: Post) -> Post:
    return replace(post, tags=list(post.tags))


class FakePostRepository:
    def __init__(self):
        # dict keeps insertion order, which is the tie-break for equal sort keys
        self.store: dict[str, Post] = {}

    # ── write operations ─────────────────────────────────────

    def insert(self, post: Post) -> Post:
        self.store[post.id] = _copy(post)
        return _copy(post)

    def update(self, post: Post) -> Post | None:
        stored = self.store.get(post.id)
        if stored is None or stored.author != post.author:
            return None

        stored.title = post.title
        stored.contents = post.contents
        stored.tags = list(post.tags)
        stored.updated_at = post.updated_at
        return _copy(stored)

    def delete(self, post_id: str, author: str) -> int:
        stored = self.store.get(post_id)
        if stored is None or stored.author != author:
            return 0
        del self.store[post_id]
        return 1

    # ── read operations ──────────────────────────────────────

    def get_by_id(self, post_id: str) -> Post | None:
        post = self.store.get(post_id)
        return _copy(post) if post else None

    def find(
        self,
        author: str | None = None,
        tag: str | None = None,
        sort: PostSort = PostSort(),
    ) -> list[Post]:
        results = list(self.store.values())

        if author is not None:
            results = [p for p in results if p.author == author]
        if tag is not None:
            results = [p for p in results if tag in p.tags]

        # sorted() is stable in both directions
        results = sorted(
            results,
            key=lambda p: getattr(p, sort.sort_by.attribute),
            reverse=sort.descending,
        )
        return [_copy(p) for p in results]
