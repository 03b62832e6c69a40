from enum import Enum


class ErrorKind(str, Enum):
    ROLE_NOT_FOUND = "role_not_found"
    ACCOUNT_NOT_FOUND = "account_not_found"
    INVALID_CREDENTIALS = "invalid_credentials"
    DUPLICATE_USERNAME = "duplicate_username"
    DUPLICATE_EMAIL = "duplicate_email"
    CORRUPT_CREDENTIAL_FORMAT = "corrupt_credential_format"
    SUPER_ADMIN_EXISTS = "super_admin_exists"
    FORBIDDEN = "forbidden"


class RoleNotFound(LookupError):
    def __init__(self, identifier):
        super().__init__(f"Role '{identifier}' not found")
        self.identifier = identifier


class CorruptCredentialFormat(ValueError):
    """Stored credential hash cannot be identified by any known scheme."""


class UniqueViolation(Exception):
    """Storage rejected a write because a unique column already holds the value."""
