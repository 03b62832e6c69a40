from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..application.ports import IAccountRepository, IRoleRepository
from ..domain.entities import Account, Role
from ..domain.errors import UniqueViolation
from .models import RoleORM, UserORM


def role_to_domain(r: RoleORM) -> Role:
    return Role(id=r.id, name=r.name, description=r.description)


def account_to_domain(u: UserORM) -> Account:
    return Account(
        id=u.id,
        username=u.username,
        email=u.email,
        name=u.name,
        surname=u.surname,
        password_hash=u.password_hash,
        role=role_to_domain(u.role),
        created_at=u.created_at,
        last_login=u.last_login,
    )


def _commit(db: Session) -> None:
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise UniqueViolation(str(e.orig)) from e


class SqlRoleRepository(IRoleRepository):
    def __init__(self, db: Session): self.db = db

    def exists_by_id(self, role_id: str) -> bool:
        return self.db.get(RoleORM, role_id) is not None

    def find_by_id(self, role_id: str) -> Role | None:
        row = self.db.get(RoleORM, role_id)
        return role_to_domain(row) if row else None

    def find_by_name(self, name: str) -> Role | None:
        row = self.db.execute(select(RoleORM).where(RoleORM.name == name)).scalar_one_or_none()
        return role_to_domain(row) if row else None

    def list(self) -> list[Role]:
        rows = self.db.execute(select(RoleORM).order_by(RoleORM.id)).scalars().all()
        return [role_to_domain(r) for r in rows]

    def save(self, role: Role) -> Role:
        row = self.db.get(RoleORM, role.id)
        if row is None:
            row = RoleORM(id=role.id)
            self.db.add(row)
        row.name = role.name
        row.description = role.description
        _commit(self.db)
        self.db.refresh(row)
        return role_to_domain(row)


class SqlAccountRepository(IAccountRepository):
    def __init__(self, db: Session): self.db = db

    def _exists(self, *criteria) -> bool:
        return self.db.execute(select(UserORM.id).where(*criteria).limit(1)).first() is not None

    def exists_by_id(self, account_id: str) -> bool:
        return self._exists(UserORM.id == account_id)

    def exists_by_username(self, username: str) -> bool:
        return self._exists(UserORM.username == username)

    def exists_by_email(self, email: str) -> bool:
        return self._exists(UserORM.email == email)

    def get(self, account_id: str) -> Account | None:
        row = self.db.get(UserORM, account_id)
        return account_to_domain(row) if row else None

    def get_by_username(self, username: str) -> Account | None:
        row = self.db.execute(
            select(UserORM).where(UserORM.username == username)
        ).unique().scalar_one_or_none()
        return account_to_domain(row) if row else None

    def list(self) -> list[Account]:
        rows = self.db.execute(select(UserORM).order_by(UserORM.created_at)).unique().scalars().all()
        return [account_to_domain(u) for u in rows]

    def count_by_role(self, role_id: str) -> int:
        return self.db.execute(
            select(func.count()).select_from(UserORM).where(UserORM.role_id == role_id)
        ).scalar_one()

    def add(self, account: Account) -> Account:
        """Insert a new account; an id already in use raises UniqueViolation, never overwrites."""
        row = UserORM(id=account.id, created_at=account.created_at)
        self.db.add(row)
        return self._write(row, account)

    def save(self, account: Account) -> Account:
        row = self.db.get(UserORM, account.id)
        if row is None:
            return self.add(account)
        return self._write(row, account)

    def _write(self, row: UserORM, account: Account) -> Account:
        row.username = account.username
        row.email = account.email
        row.name = account.name
        row.surname = account.surname
        row.password_hash = account.password_hash
        row.last_login = account.last_login
        row.role_id = account.role.id
        _commit(self.db)
        self.db.refresh(row)
        return account_to_domain(row)
