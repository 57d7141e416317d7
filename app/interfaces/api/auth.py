"""Auth API routes — signup, login, update-role."""

from fastapi import APIRouter, Depends

from app.application.services import auth_service
from app.domain.repositories.user_repository import UserRepository
from app.domain.schemas.auth import (
    LoginRequest,
    SignupRequest,
    UpdateRoleRequest,
    UserRead,
    UserResponse,
)
from app.interfaces.api.deps import get_user_repository

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post("/signup", response_model=UserResponse)
def signup(body: SignupRequest, repo: UserRepository = Depends(get_user_repository)):
    user = auth_service.signup(repo, name=body.name, phone=body.phone, password=body.password)
    return UserResponse(user=UserRead.from_user(user))


@router.post("/login", response_model=UserResponse)
def login(body: LoginRequest, repo: UserRepository = Depends(get_user_repository)):
    user = auth_service.login(repo, phone=body.phone, password=body.password)
    return UserResponse(user=UserRead.from_user(user))


@router.put("/update-role", response_model=UserResponse)
def update_role(body: UpdateRoleRequest, repo: UserRepository = Depends(get_user_repository)):
    # An omitted role leaves the record as is; an explicit null clears it
    if "role" not in body.model_fields_set:
        user = auth_service.get_user(repo, user_id=body.userId)
    else:
        user = auth_service.update_role(repo, user_id=body.userId, role=body.role)
    return UserResponse(user=UserRead.from_user(user))
