# domain/model/post.py

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum

from bson import ObjectId

from domain.model.errors import ValidationError
from domain.model.fields import cast_string
from domain.model.timestamps import next_timestamp, utc_now

# Fields a patch may change. ``author`` and the timestamps are never patched.
PATCHABLE_FIELDS = ('title', 'contents', 'tags')


class SortField(str, Enum):
    """Sortable post fields, keyed by their public (camelCase) name."""
    CREATED_AT = 'createdAt'
    UPDATED_AT = 'updatedAt'
    TITLE = 'title'

    @property
    def attribute(self) -> str:
        return _SORT_ATTRIBUTES[self]


_SORT_ATTRIBUTES = {
    SortField.CREATED_AT: 'created_at',
    SortField.UPDATED_AT: 'updated_at',
    SortField.TITLE: 'title',
}


class SortOrder(str, Enum):
    ASCENDING = 'ascending'
    DESCENDING = 'descending'


@dataclass(frozen=True)
class PostSort:
    """Ordering applied to post listings. Ties keep insertion order."""
    sort_by: SortField = SortField.CREATED_AT
    sort_order: SortOrder = SortOrder.DESCENDING

    @staticmethod
    def parse(sort_by: str | SortField | None = None, sort_order: str | SortOrder | None = None) -> PostSort:
        try:
            field_ = SortField(sort_by) if sort_by else SortField.CREATED_AT
        except ValueError:
            allowed = ', '.join(f.value for f in SortField)
            raise ValidationError(f"Invalid sortBy '{sort_by}'. Allowed: {allowed}") from None
        try:
            order = SortOrder(sort_order) if sort_order else SortOrder.DESCENDING
        except ValueError:
            raise ValidationError(
                f"Invalid sortOrder '{sort_order}'. Allowed: ascending, descending"
            ) from None
        return PostSort(sort_by=field_, sort_order=order)

    @property
    def descending(self) -> bool:
        return self.sort_order == SortOrder.DESCENDING


@dataclass(frozen=True)
class DeleteResult:
    deleted_count: int


@dataclass
class Post:
    """Domain model representing a blog post."""
    id: str
    title: str
    author: str
    created_at: datetime
    updated_at: datetime
    contents: str | None = None
    tags: list[str] = field(default_factory=list)

    @staticmethod
    def create(author: str, title: str, contents: str | None = None, tags=None) -> Post:
        now = utc_now()
        post = Post(
            id=str(ObjectId()),
            title=cast_string(title, "Post", "title"),
            author=author,
            created_at=now,
            updated_at=now,
            contents=cast_string(contents, "Post", "contents"),
            tags=normalize_tags(tags),
        )
        validate_post(post)
        return post

    def patched(self, patch: dict) -> Post:
        """Return a copy with the patchable fields of ``patch`` applied.

        ``updated_at`` always moves forward, even when the patch is empty.
        """
        changes = {k: v for k, v in patch.items() if k in PATCHABLE_FIELDS}
        for name in ('title', 'contents'):
            if name in changes:
                changes[name] = cast_string(changes[name], "Post", name)
        if 'tags' in changes:
            changes['tags'] = normalize_tags(changes['tags'])
        post = replace(self, **changes, updated_at=next_timestamp(self.updated_at))
        validate_post(post)
        return post

    def is_owned_by(self, user_id: str | None) -> bool:
        return user_id is not None and self.author == user_id


def normalize_tags(tags) -> list[str]:
    if tags is None:
        return []
    if isinstance(tags, str):
        return [tags]
    if not isinstance(tags, (list, tuple)) or not all(isinstance(t, str) for t in tags):
        raise ValidationError("Post validation failed: tags: Cast to [string] failed")
    return list(tags)


def validate_post(post: Post) -> None:
    """Type and required-field checks run before a post is persisted."""
    for name in ('title', 'contents'):
        value = getattr(post, name)
        if value is not None and not isinstance(value, str):
            raise ValidationError(f"Post validation failed: {name}: Cast to string failed")

    missing = []
    if post.title is None or not post.title.strip():
        missing.append("title: Path `title` is required.")
    if not post.author:
        missing.append("author: Path `author` is required.")
    if missing:
        raise ValidationError("Post validation failed: " + ", ".join(missing))
