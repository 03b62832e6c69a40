import structlog

from ...domain.entities import Role
from ...domain.errors import ErrorKind, RoleNotFound
from ...domain.roles import RoleKind
from ..ports import IRoleRepository
from ..results import Err, Ok, Result

logger = structlog.get_logger()


class RoleService:
    def __init__(self, roles: IRoleRepository):
        self.roles = roles

    def initialize_roles(self) -> int:
        """Seed one role row per RoleKind; existing rows are left alone."""
        created = 0
        for kind in RoleKind:
            if not self.roles.exists_by_id(kind.role_id):
                self.roles.save(Role(id=kind.role_id, name=kind.role_name, description=kind.description))
                created += 1
        if created:
            logger.info("roles_initialized", created=created)
        return created

    def list_roles(self) -> list[Role]:
        return self.roles.list()

    def resolve_role(self, identifier: str | None) -> Result[Role]:
        """Find a stored role by id, then by name; known kinds match case-insensitively."""
        if not identifier or not identifier.strip():
            return Err(ErrorKind.ROLE_NOT_FOUND, "Role identifier is required")
        candidate = identifier.strip()
        try:
            candidate = RoleKind.from_role_id(candidate).role_id
        except RoleNotFound:
            pass
        role = self.roles.find_by_id(candidate) or self.roles.find_by_name(candidate)
        if role is None:
            return Err(ErrorKind.ROLE_NOT_FOUND, f"Role '{identifier}' not found")
        return Ok(role)

    def check_role(self, role_name: str | None, required: RoleKind) -> Result[RoleKind]:
        try:
            kind = RoleKind.from_role_name(role_name)
        except RoleNotFound:
            return Err(ErrorKind.FORBIDDEN, f"Unrecognised user role: {role_name}")
        if not kind.has_minimum_level(required):
            return Err(
                ErrorKind.FORBIDDEN,
                f"Insufficient permissions. Required: {required.role_name}, held: {kind.role_name}",
            )
        return Ok(kind)
