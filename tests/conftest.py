import os
import sys
from dataclasses import replace
from unittest.mock import patch

import pytest

CURRENT_DIR = os.path.dirname(__file__)
SERVICE_ROOT = os.path.dirname(CURRENT_DIR)
if SERVICE_ROOT not in sys.path:
    sys.path.insert(0, SERVICE_ROOT)

# Settings are read at import time
os.environ.setdefault("DATABASE_URL", "sqlite:///./test_identity.db")
os.environ.setdefault("REDIS_URL", "redis://localhost:6379/99")

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from identity_service.application.use_cases.accounts import AccountLifecycleService
from identity_service.application.use_cases.roles import RoleService
from identity_service.domain.errors import UniqueViolation
from identity_service.infrastructure.models import Base
from identity_service.infrastructure.repositories import SqlRoleRepository
from identity_service.infrastructure.security import PasswordHasher


class FakeRedis:
    """Just enough of redis.Redis for the token denylist."""

    def __init__(self):
        self.store = {}

    def setex(self, key, ttl, value):
        self.store[key] = value

    def exists(self, key):
        return int(key in self.store)


class InMemoryRoleRepository:
    def __init__(self):
        self.rows = {}

    def exists_by_id(self, role_id):
        return role_id in self.rows

    def find_by_id(self, role_id):
        return self.rows.get(role_id)

    def find_by_name(self, name):
        return next((r for r in self.rows.values() if r.name == name), None)

    def list(self):
        return sorted(self.rows.values(), key=lambda r: r.id)

    def save(self, role):
        self.rows[role.id] = role
        return role


class InMemoryAccountRepository:
    """Stores copies so unsaved changes never leak into the store."""

    def __init__(self):
        self.rows = {}
        self.saves = 0

    def exists_by_id(self, account_id):
        return account_id in self.rows

    def exists_by_username(self, username):
        return any(a.username == username for a in self.rows.values())

    def exists_by_email(self, email):
        return any(a.email == email for a in self.rows.values())

    def get(self, account_id):
        account = self.rows.get(account_id)
        return replace(account) if account else None

    def get_by_username(self, username):
        account = next((a for a in self.rows.values() if a.username == username), None)
        return replace(account) if account else None

    def list(self):
        return [replace(a) for a in self.rows.values()]

    def count_by_role(self, role_id):
        return sum(1 for a in self.rows.values() if a.role.id == role_id)

    def _check_unique(self, account):
        for other in self.rows.values():
            if other.id == account.id:
                continue
            if other.username == account.username or other.email == account.email:
                raise UniqueViolation("username or email")

    def add(self, account):
        if account.id in self.rows:
            raise UniqueViolation("id")
        self._check_unique(account)
        self.rows[account.id] = replace(account)
        self.saves += 1
        return replace(account)

    def save(self, account):
        self._check_unique(account)
        self.rows[account.id] = replace(account)
        self.saves += 1
        return replace(account)


@pytest.fixture(autouse=True)
def fake_redis():
    """Token denylist backed by a dict instead of a live redis"""
    client = FakeRedis()
    with patch("identity_service.infrastructure.cache.get_redis", return_value=client):
        yield client


@pytest.fixture
def hasher():
    return PasswordHasher()


@pytest.fixture
def role_repo():
    return InMemoryRoleRepository()


@pytest.fixture
def account_repo():
    return InMemoryAccountRepository()


@pytest.fixture
def role_service(role_repo):
    svc = RoleService(role_repo)
    svc.initialize_roles()
    return svc


@pytest.fixture
def account_service(account_repo, role_service, hasher):
    return AccountLifecycleService(account_repo, role_service, hasher)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    session = sessionmaker(bind=engine, autocommit=False, autoflush=False)()
    RoleService(SqlRoleRepository(session)).initialize_roles()
    yield session
    session.close()
