import structlog

from ...domain.errors import ErrorKind
from ...infrastructure.cache import is_token_revoked, revoke_token
from ...infrastructure.metrics import login_attempts_total
from ...infrastructure.security import create_access_token, seconds_until_expiry
from ..dto import TokenDTO
from ..ports import IAccountRepository
from ..results import Err, Ok, Result
from .accounts import AccountLifecycleService

logger = structlog.get_logger()


class AuthService:
    """Issues, refreshes and revokes bearer tokens.

    An unknown username and a wrong password come back as different error
    kinds; the HTTP layer reports both as the same 401.
    """

    def __init__(self, accounts: IAccountRepository, lifecycle: AccountLifecycleService):
        self.accounts = accounts
        self.lifecycle = lifecycle

    def login(self, username: str, password: str) -> Result[TokenDTO]:
        account = self.accounts.get_by_username(username)
        if account is None:
            login_attempts_total.labels(outcome="unknown_user").inc()
            return Err(ErrorKind.ACCOUNT_NOT_FOUND, "Account not found")
        verified = self.lifecycle.verify_password(account, password)
        if not verified.ok:
            login_attempts_total.labels(outcome="rejected").inc()
            logger.info("login_failed", account_id=account.id, reason=verified.kind.value)
            return verified
        recorded = self.lifecycle.record_login(account.id)
        if not recorded.ok:
            return recorded
        token, expires_in = create_access_token(recorded.value)
        login_attempts_total.labels(outcome="success").inc()
        logger.info("login_succeeded", account_id=account.id)
        return Ok(TokenDTO(access_token=token, expires_in=expires_in))

    def logout(self, claims: dict) -> None:
        if claims.get("jti"):
            revoke_token(claims["jti"], seconds_until_expiry(claims))
        logger.info("logout", account_id=claims.get("sub"))

    def refresh(self, claims: dict) -> Result[TokenDTO]:
        jti = claims.get("jti")
        if not jti or is_token_revoked(jti):
            return Err(ErrorKind.INVALID_CREDENTIALS, "Token already invalidated")
        found = self.lifecycle.get_account(claims["sub"])
        if not found.ok:
            return found
        revoke_token(jti, seconds_until_expiry(claims))
        # new token carries the role held now, not the one in the old claims
        token, expires_in = create_access_token(found.value)
        return Ok(TokenDTO(access_token=token, expires_in=expires_in))
