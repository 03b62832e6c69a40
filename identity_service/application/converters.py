"""
Mapping between DTOs and domain entities.

Every converter accepts ``None`` and hands ``None`` back. Field validation
(lengths, email shape, allowed roles) happens in the HTTP schemas, not here.
"""
from ..domain.entities import Account, Role, utcnow
from .dto import (
    AccountDTO,
    CreateAccountInput,
    ProfileDTO,
    RoleDTO,
    UpdateProfileInput,
)
from .ports import IIdentifierAllocator, IPasswordHasher

PROFILE_FIELDS = ("username", "email", "name", "surname")


def role_to_dto(role: Role | None) -> RoleDTO | None:
    if role is None:
        return None
    return RoleDTO(id=role.id, name=role.name, description=role.description)


def dto_to_role(dto: RoleDTO | None) -> Role | None:
    if dto is None:
        return None
    return Role(id=dto.id, name=dto.name, description=dto.description)


class AccountConverter:
    def __init__(self, allocator: IIdentifierAllocator, hasher: IPasswordHasher):
        self.allocator = allocator
        self.hasher = hasher

    def creation_request_to_account(
        self, request: CreateAccountInput | None, resolved_role: Role
    ) -> Account | None:
        """Build a new account: fresh id, hashed password, creation time, given role."""
        if request is None:
            return None
        return Account(
            id=self.allocator.allocate(),
            username=request.username,
            email=request.email,
            name=request.name,
            surname=request.surname,
            password_hash=self.hasher.hash(request.password),
            role=resolved_role,
            created_at=utcnow(),
        )


def account_to_full_dto(account: Account | None) -> AccountDTO | None:
    if account is None:
        return None
    return AccountDTO(
        id=account.id,
        username=account.username,
        email=account.email,
        name=account.name,
        surname=account.surname,
        created_at=account.created_at,
        last_login=account.last_login,
        role=role_to_dto(account.role),
    )


def account_to_profile_dto(account: Account | None) -> ProfileDTO | None:
    if account is None:
        return None
    return ProfileDTO(
        id=account.id,
        username=account.username,
        email=account.email,
        name=account.name,
        surname=account.surname,
        role=account.role_name,
        created_at=account.created_at,
        last_login=account.last_login,
    )


def is_present(value: str | None) -> bool:
    return value is not None and value.strip() != ""


def apply_profile_update(account: Account | None, update: UpdateProfileInput | None) -> None:
    # absent or blank fields never overwrite stored data
    if account is None or update is None:
        return
    for field_name in PROFILE_FIELDS:
        value = getattr(update, field_name)
        if is_present(value):
            setattr(account, field_name, value)
