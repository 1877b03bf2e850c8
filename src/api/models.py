"""Pydantic models for API request/response."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from domain.model.post import Post
from domain.model.user import UserInfo


class UserResponse(BaseModel):
    """Public user info. Never carries the password hash."""
    id: str = Field(..., description="User ID")
    username: str

    @staticmethod
    def from_domain(info: UserInfo) -> 'UserResponse':
        return UserResponse(id=info.id, username=info.username)


class CredentialsRequest(BaseModel):
    """Request model for signup and login.

    Fields are optional so missing values reach the service layer and come
    back as its validation or authentication messages.
    """
    username: Optional[str] = None
    password: Optional[str] = None


class AuthResponse(BaseModel):
    """Response model for login."""
    token: str
    user: UserResponse


class PostCreateRequest(BaseModel):
    """Request model for creating a post. A client-sent author is ignored."""
    title: Optional[str] = None
    author: Optional[str] = None
    contents: Optional[str] = None
    tags: Optional[list[str]] = None


class PostUpdateRequest(BaseModel):
    """Partial update; only fields present in the request body are applied."""
    title: Optional[str] = None
    contents: Optional[str] = None
    tags: Optional[list[str]] = None


class PostResponse(BaseModel):
    """Response model for a post."""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., description="Post ID")
    title: str
    author: str = Field(..., description="Author user ID")
    contents: Optional[str] = None
    tags: list[str] = Field(default_factory=list)
    created_at: datetime = Field(..., alias="createdAt")
    updated_at: datetime = Field(..., alias="updatedAt")

    @staticmethod
    def from_domain(post: Post) -> 'PostResponse':
        return PostResponse(
            id=post.id,
            title=post.title,
            author=post.author,
            contents=post.contents,
            tags=post.tags,
            created_at=post.created_at,
            updated_at=post.updated_at,
        )
