"""Pydantic schemas for User and Auth."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.domain.models.user import Role, User


class SignupRequest(BaseModel):
    name: Optional[str] = None
    phone: str = Field(min_length=1)
    password: str = Field(min_length=1)

    @field_validator("phone", mode="before")
    @classmethod
    def strip_phone(cls, v):
        return v.strip() if isinstance(v, str) else v


class LoginRequest(BaseModel):
    phone: str
    password: str

    @field_validator("phone", mode="before")
    @classmethod
    def strip_phone(cls, v):
        return v.strip() if isinstance(v, str) else v


class UpdateRoleRequest(BaseModel):
    userId: str
    role: Optional[Role] = None


class UserRead(BaseModel):
    """Public view of a user. The password hash is never serialized."""

    id: str = Field(serialization_alias="_id")
    name: Optional[str] = None
    phone: str
    role: Optional[str] = None  # stored value as is; writes are checked by UpdateRoleRequest
    location: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_user(cls, user: User) -> "UserRead":
        return cls(
            id=str(user.id),
            name=user.name,
            phone=user.phone,
            role=user.role,
            location=user.location,
        )


class UserResponse(BaseModel):
    user: UserRead
