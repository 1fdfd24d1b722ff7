"""Auth API: registration, login and the current user."""
import logging
from fastapi import APIRouter, Depends, status

from surveydesk.api.deps import get_user_repository
from surveydesk.core.policy import Operation, require
from surveydesk.core.security import create_access_token
from surveydesk.schemas.user import (
    AuthResponse,
    LoginRequest,
    Principal,
    UserCreate,
    UserInDB,
    UserPublic,
)
from surveydesk.services.repository import UserRepository

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/auth", tags=["auth"])


def _auth_response(user: UserInDB) -> AuthResponse:
    principal = Principal(id=user.id, email=user.email, role=user.role)
    return AuthResponse(
        token=create_access_token(principal),
        user=UserPublic(id=user.id, email=user.email, name=user.name, role=user.role),
    )


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    data: UserCreate,
    _: None = Depends(require(Operation.REGISTER)),
    users: UserRepository = Depends(get_user_repository),
):
    """Create a user with the default role and return a token for it."""
    return _auth_response(users.register(data))


@router.post("/login", response_model=AuthResponse)
def login(
    data: LoginRequest,
    _: None = Depends(require(Operation.LOGIN)),
    users: UserRepository = Depends(get_user_repository),
):
    user = users.authenticate(data.email, data.password)
    logger.info(f"User logged in: id={user.id}")
    return _auth_response(user)


@router.get("/me", response_model=UserPublic)
def read_current_user(
    principal: Principal = Depends(require(Operation.CURRENT_USER)),
    users: UserRepository = Depends(get_user_repository),
):
    user = users.get(principal.id)
    return UserPublic(id=user.id, email=user.email, name=user.name, role=user.role)
