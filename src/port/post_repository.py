"""Port definition for PostRepository."""

from typing import Protocol

from domain.model.post import Post, PostSort


class PostRepository(Protocol):
    def insert(self, post: Post) -> Post: ...

    def get_by_id(self, post_id: str) -> Post | None: ...

    def find(
        self,
        author: str | None = None,
        tag: str | None = None,
        sort: PostSort = PostSort(),
    ) -> list[Post]: ...

    def update(self, post: Post) -> Post | None:
        """Persist patchable fields and updated_at if ``post.author`` still owns the document."""
        ...

    def delete(self, post_id: str, author: str) -> int:
        """Delete the post if owned by ``author``. Return the deleted count."""
        ...
