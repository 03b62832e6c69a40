from unittest.mock import MagicMock, patch

from identity_service.infrastructure.cache import is_token_revoked, revoke_token


@patch('identity_service.infrastructure.cache.get_redis')
def test_revoke_token(mock_redis):
    mock_client = MagicMock()
    mock_redis.return_value = mock_client

    assert revoke_token("abc", ttl=120) is True
    mock_client.setex.assert_called_once_with("revoked:abc", 120, "1")


@patch('identity_service.infrastructure.cache.get_redis')
def test_revoke_expired_token_is_noop(mock_redis):
    assert revoke_token("abc", ttl=0) is True
    mock_redis.assert_not_called()


@patch('identity_service.infrastructure.cache.get_redis')
def test_is_token_revoked(mock_redis):
    mock_client = MagicMock()
    mock_client.exists.return_value = 1
    mock_redis.return_value = mock_client

    assert is_token_revoked("abc") is True
    mock_client.exists.assert_called_once_with("revoked:abc")


@patch('identity_service.infrastructure.cache.get_redis')
def test_redis_unavailable_fails_open(mock_redis):
    mock_redis.side_effect = Exception("Redis error")

    assert revoke_token("abc", ttl=60) is False
    assert is_token_revoked("abc") is False
