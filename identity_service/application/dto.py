from dataclasses import dataclass
from datetime import datetime


@dataclass
class RoleDTO:
    id: str
    name: str
    description: str | None = None


@dataclass
class CreateAccountInput:
    username: str
    email: str
    name: str
    surname: str
    password: str
    role_id: str | None = None


@dataclass
class UpdateProfileInput:
    username: str | None = None
    email: str | None = None
    name: str | None = None
    surname: str | None = None


@dataclass
class AccountDTO:
    id: str
    username: str
    email: str
    name: str
    surname: str
    created_at: datetime
    last_login: datetime | None
    role: RoleDTO | None


@dataclass
class ProfileDTO:
    id: str
    username: str
    email: str
    name: str
    surname: str
    role: str | None
    created_at: datetime
    last_login: datetime | None


@dataclass
class TokenDTO:
    access_token: str
    expires_in: int
    token_type: str = "bearer"
