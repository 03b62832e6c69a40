from datetime import datetime

from pydantic import BaseModel, EmailStr, Field, field_validator

from ...domain.errors import RoleNotFound
from ...domain.roles import RoleKind


def _role_id(value: str) -> str:
    try:
        return RoleKind.from_role_id(value).role_id
    except RoleNotFound:
        raise ValueError("role must be one of: STUDENT, TEACHER, ADMIN, SUPER_ADMIN")


class CreateUserReq(BaseModel):
    username: str = Field(min_length=3, max_length=50)
    email: EmailStr
    name: str = Field(min_length=1, max_length=100)
    surname: str = Field(min_length=1, max_length=100)
    password: str = Field(min_length=8)
    role_id: str = "STUDENT"

    @field_validator("role_id")
    @classmethod
    def known_role(cls, v: str) -> str:
        return _role_id(v)


class UpdateProfileReq(BaseModel):
    username: str | None = Field(default=None, max_length=50)
    email: EmailStr | None = None
    name: str | None = Field(default=None, max_length=100)
    surname: str | None = Field(default=None, max_length=100)

    @field_validator("username")
    @classmethod
    def username_length(cls, v: str | None) -> str | None:
        # blank means "leave unchanged"
        if v is None or not v.strip():
            return v
        v = v.strip()
        if len(v) < 3:
            raise ValueError("username must be between 3 and 50 characters")
        return v

    @field_validator("email", mode="before")
    @classmethod
    def blank_email(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v


class AssignRoleReq(BaseModel):
    role_id: str

    @field_validator("role_id")
    @classmethod
    def known_role(cls, v: str) -> str:
        return _role_id(v)


class ChangePasswordReq(BaseModel):
    current_password: str
    new_password: str = Field(min_length=8)


class ResetPasswordReq(BaseModel):
    current_password: str


class ResetPasswordResp(BaseModel):
    temporary_password: str


class LoginReq(BaseModel):
    username: str
    password: str


class RoleResp(BaseModel):
    id: str
    name: str
    description: str | None = None
    class Config: from_attributes = True


class UserResp(BaseModel):
    id: str
    username: str
    email: str
    name: str
    surname: str
    created_at: datetime
    last_login: datetime | None = None
    role: RoleResp | None = None
    class Config: from_attributes = True


class ProfileResp(BaseModel):
    id: str
    username: str
    email: str
    name: str
    surname: str
    role: str | None = None
    created_at: datetime
    last_login: datetime | None = None
    class Config: from_attributes = True


class TokenResp(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int
    class Config: from_attributes = True
