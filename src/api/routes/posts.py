"""Post API routes.

Endpoints:
- GET /posts: List posts, optionally filtered by author username or tag
- GET /posts/{id}: Get a single post
- POST /posts: Create a post as the current user
- PATCH /posts/{id}: Update a post owned by the current user
- DELETE /posts/{id}: Delete a post owned by the current user
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from api.dependencies import get_post_repo, get_user_repo
from api.models import PostCreateRequest, PostResponse, PostUpdateRequest, UserResponse
from api.security import get_current_user_required
from domain.model.errors import ValidationError
from port.post_repository import PostRepository
from port.user_repository import UserRepository
from services import post_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/posts", tags=["posts"])


@router.get("", response_model=list[PostResponse])
async def list_posts(
    author: str | None = None,
    tag: str | None = None,
    sort_by: str | None = Query(None, alias="sortBy"),
    sort_order: str | None = Query(None, alias="sortOrder"),
    repo: PostRepository = Depends(get_post_repo),
    user_repo: UserRepository = Depends(get_user_repo),
):
    """List posts. ``author`` is a username."""
    if author and tag:
        raise HTTPException(status_code=400, detail="query by either author or tag, not both")

    try:
        if author:
            posts = post_service.list_posts_by_username(repo, user_repo, author, sort_by, sort_order)
        elif tag:
            posts = post_service.list_posts_by_tag(repo, tag, sort_by, sort_order)
        else:
            posts = post_service.list_all_posts(repo, sort_by, sort_order)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return [PostResponse.from_domain(p) for p in posts]


@router.get("/{post_id}", response_model=PostResponse)
async def get_post(post_id: str, repo: PostRepository = Depends(get_post_repo)):
    post = post_service.get_post_by_id(repo, post_id)
    if post is None:
        raise HTTPException(status_code=404, detail="Post not found")
    return PostResponse.from_domain(post)


@router.post("", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
    request: PostCreateRequest,
    current_user: UserResponse = Depends(get_current_user_required),
    repo: PostRepository = Depends(get_post_repo),
):
    try:
        post = post_service.create_post(repo, current_user.id, request.model_dump(exclude={'author'}))
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return PostResponse.from_domain(post)


@router.patch("/{post_id}", response_model=PostResponse)
async def update_post(
    post_id: str,
    request: PostUpdateRequest,
    current_user: UserResponse = Depends(get_current_user_required),
    repo: PostRepository = Depends(get_post_repo),
):
    """Update a post. Missing and foreign posts both answer 404."""
    try:
        post = post_service.update_post(repo, current_user.id, post_id, request.model_dump(exclude_unset=True))
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if post is None:
        raise HTTPException(status_code=404, detail="Post not found")
    return PostResponse.from_domain(post)


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_post(
    post_id: str,
    current_user: UserResponse = Depends(get_current_user_required),
    repo: PostRepository = Depends(get_post_repo),
):
    result = post_service.delete_post(repo, current_user.id, post_id)
    if result.deleted_count == 0:
        raise HTTPException(status_code=404, detail="Post not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
