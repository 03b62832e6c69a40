import pytest

from identity_service.application.dto import CreateAccountInput
from identity_service.application.use_cases.auth import AuthService
from identity_service.domain.errors import ErrorKind
from identity_service.infrastructure.security import decode_token


@pytest.fixture
def auth(account_repo, account_service):
    account_service.create_account(CreateAccountInput(
        username="alice", email="alice@x.com", name="Alice", surname="Liddell",
        password="password123", role_id="TEACHER",
    ))
    return AuthService(account_repo, account_service)


def test_login_issues_token_and_records_login(auth, account_repo):
    result = auth.login("alice", "password123")
    assert result.ok
    claims = decode_token(result.value.access_token)
    assert claims["username"] == "alice"
    assert claims["role"] == "TEACHER"
    assert account_repo.get(claims["sub"]).last_login is not None


def test_unknown_user_and_wrong_password_are_distinct(auth):
    assert auth.login("ghost", "password123").kind == ErrorKind.ACCOUNT_NOT_FOUND
    assert auth.login("alice", "wrong-password").kind == ErrorKind.INVALID_CREDENTIALS


def test_failed_login_does_not_touch_last_login(auth, account_repo):
    auth.login("alice", "wrong-password")
    assert account_repo.get_by_username("alice").last_login is None


def test_refresh_revokes_previous_token(auth, fake_redis):
    claims = decode_token(auth.login("alice", "password123").value.access_token)
    refreshed = auth.refresh(claims)
    assert refreshed.ok
    assert f"revoked:{claims['jti']}" in fake_redis.store
    assert auth.refresh(claims).kind == ErrorKind.INVALID_CREDENTIALS


def test_refresh_picks_up_new_role(auth, account_service):
    claims = decode_token(auth.login("alice", "password123").value.access_token)
    account_service.assign_role(claims["sub"], "ADMIN")
    new_claims = decode_token(auth.refresh(claims).value.access_token)
    assert new_claims["role"] == "ADMIN"


def test_refresh_for_missing_account(auth):
    claims = {"sub": "999999", "jti": "abc", "exp": 0}
    assert auth.refresh(claims).kind == ErrorKind.ACCOUNT_NOT_FOUND


def test_logout_revokes(auth, fake_redis):
    claims = decode_token(auth.login("alice", "password123").value.access_token)
    auth.logout(claims)
    assert f"revoked:{claims['jti']}" in fake_redis.store
