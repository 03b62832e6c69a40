from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError
from sqlalchemy.orm import Session

from ...application.use_cases.accounts import AccountLifecycleService
from ...application.use_cases.auth import AuthService
from ...application.use_cases.roles import RoleService
from ...domain.roles import RoleKind
from ...infrastructure.cache import is_token_revoked
from ...infrastructure.db import get_db
from ...infrastructure.repositories import SqlAccountRepository, SqlRoleRepository
from ...infrastructure.security import PasswordHasher, decode_token
from .responses import unwrap

bearer = HTTPBearer()
hasher = PasswordHasher()


def get_role_service(db: Session = Depends(get_db)) -> RoleService:
    return RoleService(SqlRoleRepository(db))


def get_account_service(db: Session = Depends(get_db)) -> AccountLifecycleService:
    return AccountLifecycleService(SqlAccountRepository(db), RoleService(SqlRoleRepository(db)), hasher)


def get_auth_service(db: Session = Depends(get_db)) -> AuthService:
    accounts = SqlAccountRepository(db)
    return AuthService(accounts, AccountLifecycleService(accounts, RoleService(SqlRoleRepository(db)), hasher))


def get_claims(creds: HTTPAuthorizationCredentials = Depends(bearer)) -> dict:
    try:
        payload = decode_token(creds.credentials)
    except JWTError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")
    if is_token_revoked(payload.get("jti", "")):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Token revoked")
    return payload


def get_current_account_id(claims: dict = Depends(get_claims)) -> str:
    return claims["sub"]


def require_role(required: RoleKind):
    """Dependency factory: the caller's role must be at least ``required``."""
    def dependency(
        claims: dict = Depends(get_claims),
        roles: RoleService = Depends(get_role_service),
    ) -> dict:
        unwrap(roles.check_role(claims.get("role"), required))
        return claims
    return dependency


def ensure_can_grant(claims: dict, role_id: str) -> None:
    # nobody hands out a role above their own
    caller = RoleKind.from_role_name(claims.get("role"))
    if not caller.has_minimum_level(RoleKind.from_role_id(role_id)):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Cannot grant a role above your own")


require_admin = require_role(RoleKind.ADMIN)
require_super_admin = require_role(RoleKind.SUPER_ADMIN)
