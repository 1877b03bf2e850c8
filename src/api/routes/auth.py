"""Authentication routes (signup, login)."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from api.dependencies import get_user_repo
from api.models import AuthResponse, CredentialsRequest, UserResponse
from api.security import create_access_token
from domain.model.errors import AuthenticationError, DuplicateKeyError, ValidationError
from port.user_repository import UserRepository
from services import user_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/user", tags=["auth"])


@router.post("/signup", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def signup(request: CredentialsRequest, repo: UserRepository = Depends(get_user_repo)):
    """Create a user account.

    Raises:
        HTTPException: 400 if username or password is missing, 409 if the username is taken
    """
    try:
        user = user_service.create_user(repo, request.username, request.password)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except DuplicateKeyError:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Username already exists")

    return UserResponse.from_domain(user.to_info())


@router.post("/login", response_model=AuthResponse)
async def login(request: CredentialsRequest, repo: UserRepository = Depends(get_user_repo)):
    """Login user and return JWT token.

    Raises:
        HTTPException: 401 with "Invalid username!" or "Invalid password!"
    """
    try:
        user = user_service.login_user(repo, request.username, request.password)
    except AuthenticationError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))

    token = create_access_token(user.id)
    return AuthResponse(token=token, user=UserResponse.from_domain(user.to_info()))
