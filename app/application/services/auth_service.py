"""Auth service — signup, login and role assignment."""

from typing import Optional

import structlog
from fastapi import status
from passlib.context import CryptContext

from app.config import get_settings
from app.core.exceptions import (
    DuplicatePhoneException,
    InvalidCredentialsException,
    UserNotFoundException,
)
from app.domain.models.user import Role, User
from app.domain.repositories.user_repository import UserRepository

settings = get_settings()
logger = structlog.get_logger(__name__)
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def signup(repo: UserRepository, name: Optional[str], phone: str, password: str) -> User:
    if repo.get_by_phone(phone):
        raise DuplicatePhoneException()

    user = repo.create({
        "name": name,
        "phone": phone,
        "password": hash_password(password),
        "role": None,
        "location": None,
    })
    logger.info("User signed up", user_id=str(user.id))
    return user


def login(repo: UserRepository, phone: str, password: str) -> User:
    user = repo.get_by_phone(phone)
    if not user:
        raise UserNotFoundException(status_code=status.HTTP_400_BAD_REQUEST)

    if not verify_password(password, user.password_hash):
        raise InvalidCredentialsException()

    return user


def get_user(repo: UserRepository, user_id: str) -> User:
    user = repo.get_by_id(user_id)
    if not user:
        raise UserNotFoundException()
    return user


def update_role(repo: UserRepository, user_id: str, role: Optional[Role]) -> User:
    user = repo.update_role(user_id, role.value if role else None)
    if not user:
        raise UserNotFoundException()

    logger.info("User role updated", user_id=user_id, role=user.role)
    return user
