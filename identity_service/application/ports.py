from ..domain.entities import Account, Role


class IAccountRepository:
    def exists_by_id(self, account_id: str) -> bool: ...
    def exists_by_username(self, username: str) -> bool: ...
    def exists_by_email(self, email: str) -> bool: ...
    def get(self, account_id: str) -> Account | None: ...
    def get_by_username(self, username: str) -> Account | None: ...
    def list(self) -> list[Account]: ...
    def count_by_role(self, role_id: str) -> int: ...
    def add(self, account: Account) -> Account: ...
    def save(self, account: Account) -> Account: ...


class IRoleRepository:
    def exists_by_id(self, role_id: str) -> bool: ...
    def find_by_id(self, role_id: str) -> Role | None: ...
    def find_by_name(self, name: str) -> Role | None: ...
    def list(self) -> list[Role]: ...
    def save(self, role: Role) -> Role: ...


class IPasswordHasher:
    def hash(self, plain: str) -> str: ...
    def verify(self, hashed: str, plain: str) -> bool: ...


class IIdentifierAllocator:
    def allocate(self) -> str: ...
