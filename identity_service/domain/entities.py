from dataclasses import dataclass, field
from datetime import datetime, timezone


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Role:
    id: str
    name: str
    description: str | None = None


@dataclass(eq=False)
class Account:
    id: str
    username: str
    email: str
    name: str
    surname: str
    password_hash: str = field(repr=False)
    role: Role
    created_at: datetime = field(default_factory=utcnow)
    last_login: datetime | None = None

    @property
    def role_name(self) -> str | None:
        return self.role.name if self.role is not None else None

    def __setattr__(self, key, value):
        if key == "id" and "id" in self.__dict__:
            raise AttributeError("Account id is immutable")
        super().__setattr__(key, value)

    def update_last_login(self) -> None:
        self.last_login = utcnow()

    # identity, not structure
    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if isinstance(other, Account):
            return self.id == other.id
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.id)
