import uuid
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt
from passlib.context import CryptContext

from ..config import settings
from ..domain.entities import Account
from ..domain.errors import CorruptCredentialFormat

# memory-hard, salted; parameters and salt travel inside the PHC string
pwd = CryptContext(
    schemes=["argon2"],
    deprecated="auto",
    argon2__memory_cost=1024,
    argon2__rounds=2,
    argon2__parallelism=1,
)


def _wipe(buffer: bytearray) -> None:
    buffer[:] = bytes(len(buffer))


class PasswordHasher:
    """Argon2id hashing with the plaintext held in a call-local buffer that is zeroed after use."""

    def hash(self, plain: str) -> str:
        buffer = bytearray(plain, "utf-8")
        try:
            return pwd.hash(bytes(buffer))
        finally:
            _wipe(buffer)

    def verify(self, hashed: str, plain: str) -> bool:
        if not isinstance(hashed, str) or pwd.identify(hashed) is None:
            raise CorruptCredentialFormat("Stored credential hash is not recognised")
        buffer = bytearray(plain, "utf-8")
        try:
            return pwd.verify(bytes(buffer), hashed)
        except ValueError:
            # argon2 prefix but broken parameters or salt
            return False
        finally:
            _wipe(buffer)


def create_access_token(account: Account, minutes: int | None = None) -> tuple[str, int]:
    """Issue a bearer token for ``account``; returns the token and its lifetime in seconds."""
    minutes = minutes or settings.ACCESS_TOKEN_EXPIRE_MINUTES
    now = datetime.now(timezone.utc)
    payload = {
        "sub": account.id,
        "username": account.username,
        "role": account.role.id,
        "jti": uuid.uuid4().hex,
        "iat": now,
        "exp": now + timedelta(minutes=minutes),
    }
    token = jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)
    return token, minutes * 60


def decode_token(token: str) -> dict:
    """Return the token claims or raise JWTError."""
    payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    if not payload.get("sub"):
        raise JWTError("No subject")
    return payload


def seconds_until_expiry(claims: dict) -> int:
    exp = claims.get("exp")
    if exp is None:
        return 0
    return max(0, int(exp - datetime.now(timezone.utc).timestamp()))
