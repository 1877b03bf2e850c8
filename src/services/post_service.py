"""Post service — create, list, fetch, update and delete blog posts.

Ownership is the only authorization rule: a post can be changed or removed
only by the user recorded as its author. A mismatch is not an error; update
returns None and delete reports a zero count.
"""

import logging

from domain.model.post import DeleteResult, Post, PostSort, SortField, SortOrder
from port.post_repository import PostRepository
from port.user_repository import UserRepository

logger = logging.getLogger(__name__)


def create_post(repo: PostRepository, user_id: str, data: dict) -> Post:
    """Create a post authored by ``user_id``.

    Any ``author`` key in ``data`` is ignored.

    Raises:
        ValidationError: title missing
    """
    post = Post.create(
        author=user_id,
        title=data.get('title'),
        contents=data.get('contents'),
        tags=data.get('tags'),
    )
    created = repo.insert(post)
    logger.info("Post created", extra={"postId": created.id, "userId": user_id})
    return created


def list_all_posts(
    repo: PostRepository,
    sort_by: str | SortField | None = None,
    sort_order: str | SortOrder | None = None,
) -> list[Post]:
    return repo.find(sort=PostSort.parse(sort_by, sort_order))


def list_posts_by_author(
    repo: PostRepository,
    author_id: str,
    sort_by: str | SortField | None = None,
    sort_order: str | SortOrder | None = None,
) -> list[Post]:
    return repo.find(author=author_id, sort=PostSort.parse(sort_by, sort_order))


def list_posts_by_username(
    post_repo: PostRepository,
    user_repo: UserRepository,
    username: str,
    sort_by: str | SortField | None = None,
    sort_order: str | SortOrder | None = None,
) -> list[Post]:
    """List posts of the user called ``username``; unknown names give an empty list."""
    sort = PostSort.parse(sort_by, sort_order)
    user = user_repo.get_by_username(username)
    if user is None:
        return []
    return post_repo.find(author=user.id, sort=sort)


def list_posts_by_tag(
    repo: PostRepository,
    tag: str,
    sort_by: str | SortField | None = None,
    sort_order: str | SortOrder | None = None,
) -> list[Post]:
    return repo.find(tag=tag, sort=PostSort.parse(sort_by, sort_order))


def get_post_by_id(repo: PostRepository, post_id: str) -> Post | None:
    return repo.get_by_id(post_id)


def update_post(repo: PostRepository, user_id: str, post_id: str, patch: dict) -> Post | None:
    """Apply ``patch`` to a post owned by ``user_id``.

    Returns None when the post does not exist or belongs to someone else;
    the stored post is left untouched in both cases.

    Raises:
        ValidationError: the patch would leave the post invalid (e.g. empty title)
    """
    post = repo.get_by_id(post_id)
    if post is None:
        return None
    if not post.is_owned_by(user_id):
        logger.info("Post update skipped: not the author", extra={"postId": post_id, "userId": user_id})
        return None

    updated = repo.update(post.patched(patch))
    if updated is not None:
        logger.info("Post updated", extra={"postId": post_id, "userId": user_id})
    return updated


def delete_post(repo: PostRepository, user_id: str, post_id: str) -> DeleteResult:
    post = repo.get_by_id(post_id)
    if post is None or not post.is_owned_by(user_id):
        return DeleteResult(deleted_count=0)

    deleted_count = repo.delete(post_id, author=user_id)
    logger.info("Post deleted", extra={"postId": post_id, "userId": user_id, "deletedCount": deleted_count})
    return DeleteResult(deleted_count=deleted_count)
