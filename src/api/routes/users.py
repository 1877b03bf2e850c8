"""Public user info route."""

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_user_repo
from api.models import UserResponse
from domain.model.errors import NotFoundError
from port.user_repository import UserRepository
from services import user_service

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/{user_id}", response_model=UserResponse)
async def get_user_info(user_id: str, repo: UserRepository = Depends(get_user_repo)):
    try:
        info = user_service.get_user_info_by_id(repo, user_id)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="User not found")
    return UserResponse.from_domain(info)
