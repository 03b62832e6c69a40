"""
Account lifecycle: creation, profile update, login bookkeeping, role
assignment and password change.

Username, email and id uniqueness is pre-checked here, but the storage
constraint is what actually decides: a ``UniqueViolation`` from the
repository is re-examined to tell a username/email clash (reported) from an
id clash between concurrent allocators (retried with a fresh id).
"""
import secrets

import structlog

from ...config import settings
from ...domain.entities import Account, utcnow
from ...domain.errors import CorruptCredentialFormat, ErrorKind, UniqueViolation
from ...domain.roles import DEFAULT_ROLE, RoleKind
from ...infrastructure.identifiers import IdentifierAllocator
from ...infrastructure.metrics import accounts_created_total, id_allocation_collisions_total
from ..converters import AccountConverter, apply_profile_update, is_present
from ..dto import CreateAccountInput, UpdateProfileInput
from ..ports import IAccountRepository, IIdentifierAllocator, IPasswordHasher
from ..results import Err, Ok, Result
from .roles import RoleService

logger = structlog.get_logger()

SUPER_ADMIN_ID = "000000"
TEMPORARY_PASSWORD_BYTES = 9  # 12 url-safe characters


def _changed(requested: str | None, current: str) -> str | None:
    return requested if is_present(requested) and requested != current else None


class AccountLifecycleService:
    def __init__(
        self,
        accounts: IAccountRepository,
        roles: RoleService,
        hasher: IPasswordHasher,
        allocator: IIdentifierAllocator | None = None,
        max_attempts: int | None = None,
    ):
        self.accounts = accounts
        self.roles = roles
        self.hasher = hasher
        self.allocator = allocator or IdentifierAllocator(accounts.exists_by_id)
        self.converter = AccountConverter(self.allocator, hasher)
        self.max_attempts = max_attempts or settings.ID_ALLOCATION_ATTEMPTS

    # --- lookups

    def get_account(self, account_id: str) -> Result[Account]:
        account = self.accounts.get(account_id)
        if account is None:
            return Err(ErrorKind.ACCOUNT_NOT_FOUND, f"Account '{account_id}' not found")
        return Ok(account)

    def list_accounts(self) -> list[Account]:
        return self.accounts.list()

    # --- uniqueness

    def _duplicate(self, username: str | None, email: str | None) -> Err | None:
        if username is not None and self.accounts.exists_by_username(username):
            return Err(ErrorKind.DUPLICATE_USERNAME, "Username already exists")
        if email is not None and self.accounts.exists_by_email(email):
            return Err(ErrorKind.DUPLICATE_EMAIL, "Email already exists")
        return None

    # --- creation

    def create_account(self, request: CreateAccountInput) -> Result[Account]:
        resolved = self.roles.resolve_role(request.role_id or DEFAULT_ROLE.role_id)
        if not resolved.ok:
            return resolved
        duplicate = self._duplicate(request.username, request.email)
        if duplicate:
            return duplicate

        for attempt in range(1, self.max_attempts + 1):
            account = self.converter.creation_request_to_account(request, resolved.value)
            try:
                saved = self.accounts.add(account)
            except UniqueViolation:
                duplicate = self._duplicate(request.username, request.email)
                if duplicate:
                    return duplicate
                id_allocation_collisions_total.inc()
                logger.warning("account_id_collision", account_id=account.id, attempt=attempt)
                if attempt == self.max_attempts:
                    raise
                continue
            accounts_created_total.inc()
            logger.info("account_created", account_id=saved.id, username=saved.username, role=saved.role.id)
            return Ok(saved)

    def create_super_admin(self, request: CreateAccountInput) -> Result[Account]:
        """Bootstrap the single SUPER_ADMIN account under the reserved id."""
        if self.accounts.count_by_role(RoleKind.SUPER_ADMIN.role_id) > 0:
            return Err(ErrorKind.SUPER_ADMIN_EXISTS, "Super admin already exists")
        resolved = self.roles.resolve_role(RoleKind.SUPER_ADMIN.role_id)
        if not resolved.ok:
            return resolved
        duplicate = self._duplicate(request.username, request.email)
        if duplicate:
            return duplicate
        account = Account(
            id=SUPER_ADMIN_ID,
            username=request.username,
            email=request.email,
            name=request.name,
            surname=request.surname,
            password_hash=self.hasher.hash(request.password),
            role=resolved.value,
            created_at=utcnow(),
        )
        try:
            saved = self.accounts.add(account)
        except UniqueViolation:
            return self._duplicate(request.username, request.email) or Err(
                ErrorKind.SUPER_ADMIN_EXISTS, "Super admin already exists"
            )
        logger.info("super_admin_created", account_id=saved.id, username=saved.username)
        return Ok(saved)

    # --- mutation

    def update_profile(self, account_id: str, request: UpdateProfileInput) -> Result[Account]:
        found = self.get_account(account_id)
        if not found.ok:
            return found
        account = found.value

        changed_username = _changed(request.username, account.username)
        changed_email = _changed(request.email, account.email)
        duplicate = self._duplicate(changed_username, changed_email)
        if duplicate:
            return duplicate

        apply_profile_update(account, request)
        try:
            saved = self.accounts.save(account)
        except UniqueViolation:
            duplicate = self._duplicate(changed_username, changed_email)
            if duplicate:
                return duplicate
            raise
        logger.info("profile_updated", account_id=account_id)
        return Ok(saved)

    def record_login(self, account_id: str) -> Result[Account]:
        found = self.get_account(account_id)
        if not found.ok:
            return found
        account = found.value
        account.update_last_login()
        return Ok(self.accounts.save(account))

    def assign_role(self, account_id: str, role_id: str) -> Result[Account]:
        found = self.get_account(account_id)
        if not found.ok:
            return found
        resolved = self.roles.resolve_role(role_id)
        if not resolved.ok:
            return resolved
        account = found.value
        if account.role.id == resolved.value.id:
            return Ok(account)
        previous = account.role.id
        account.role = resolved.value
        saved = self.accounts.save(account)
        logger.info("role_assigned", account_id=account_id, previous_role=previous, role=saved.role.id)
        return Ok(saved)

    def verify_password(self, account: Account, plain: str) -> Result[Account]:
        try:
            matches = self.hasher.verify(account.password_hash, plain)
        except CorruptCredentialFormat:
            logger.error("corrupt_credential_hash", account_id=account.id)
            return Err(ErrorKind.CORRUPT_CREDENTIAL_FORMAT, "Stored credential cannot be verified")
        if not matches:
            return Err(ErrorKind.INVALID_CREDENTIALS, "Invalid credentials")
        return Ok(account)

    def change_password(self, account_id: str, current_password: str, new_password: str) -> Result[bool]:
        found = self.get_account(account_id)
        if not found.ok:
            return found
        verified = self.verify_password(found.value, current_password)
        if not verified.ok:
            logger.info("password_change_rejected", account_id=account_id, reason=verified.kind.value)
            return verified
        account = verified.value
        account.password_hash = self.hasher.hash(new_password)
        self.accounts.save(account)
        logger.info("password_changed", account_id=account_id)
        return Ok(True)

    def reset_password(self, account_id: str, current_password: str) -> Result[str]:
        """Replace the password with a temporary one; the plaintext is returned only here."""
        found = self.get_account(account_id)
        if not found.ok:
            return found
        verified = self.verify_password(found.value, current_password)
        if not verified.ok:
            logger.info("password_reset_rejected", account_id=account_id, reason=verified.kind.value)
            return verified
        account = verified.value
        temporary = secrets.token_urlsafe(TEMPORARY_PASSWORD_BYTES)
        account.password_hash = self.hasher.hash(temporary)
        self.accounts.save(account)
        logger.info("password_reset", account_id=account_id)
        return Ok(temporary)
