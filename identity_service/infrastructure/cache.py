import redis
import structlog
from typing import Optional
from ..config import settings

logger = structlog.get_logger()

_redis_client: Optional[redis.Redis] = None

REVOKED_PREFIX = "revoked:"

def get_redis() -> redis.Redis:
    global _redis_client
    if _redis_client is None:
        _redis_client = redis.from_url(
            settings.REDIS_URL,
            decode_responses=True,
            socket_connect_timeout=5,
            socket_timeout=5,
            retry_on_timeout=True
        )
    return _redis_client

def revoke_token(jti: str, ttl: int) -> bool:
    """Mark a token id as revoked until the token would have expired anyway."""
    if ttl <= 0:
        return True
    try:
        client = get_redis()
        client.setex(f"{REVOKED_PREFIX}{jti}", ttl, "1")
        return True
    except Exception as e:
        logger.warning("token_revoke_failed", jti=jti, error=str(e))
        return False

def is_token_revoked(jti: str) -> bool:
    try:
        client = get_redis()
        return bool(client.exists(f"{REVOKED_PREFIX}{jti}"))
    except Exception as e:
        # Redis down: tokens stay valid until they expire
        logger.warning("token_revocation_check_failed", jti=jti, error=str(e))
        return False
