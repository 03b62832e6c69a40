"""
Fixed role hierarchy used for authorization checks.

Levels grow with privilege: STUDENT < TEACHER < ADMIN < SUPER_ADMIN.
"""
from enum import Enum

from .errors import RoleNotFound


class RoleKind(Enum):
    STUDENT = ("STUDENT", "STUDENT", 0)
    TEACHER = ("TEACHER", "TEACHER", 1)
    ADMIN = ("ADMIN", "ADMIN", 2)
    SUPER_ADMIN = ("SUPER_ADMIN", "SUPER_ADMIN", 3)

    def __init__(self, role_id: str, role_name: str, level: int):
        self.role_id = role_id
        self.role_name = role_name
        self.level = level

    @classmethod
    def from_role_id(cls, role_id: str) -> "RoleKind":
        for kind in cls:
            if isinstance(role_id, str) and kind.role_id.lower() == role_id.lower():
                return kind
        raise RoleNotFound(role_id)

    @classmethod
    def from_role_name(cls, role_name: str) -> "RoleKind":
        for kind in cls:
            if isinstance(role_name, str) and kind.role_name.lower() == role_name.lower():
                return kind
        raise RoleNotFound(role_name)

    def has_minimum_level(self, other: "RoleKind") -> bool:
        return self.level >= other.level

    @property
    def description(self) -> str:
        return ROLE_DESCRIPTIONS[self]


ROLE_DESCRIPTIONS = {
    RoleKind.STUDENT: "Base role, reserved for students",
    RoleKind.TEACHER: "Role with additional permissions for teachers",
    RoleKind.ADMIN: "Administrator with user management privileges",
    RoleKind.SUPER_ADMIN: "System administrator with every privilege",
}

DEFAULT_ROLE = RoleKind.STUDENT


def has_minimum_level(subject: RoleKind, required: RoleKind) -> bool:
    return subject.has_minimum_level(required)


__all__ = ["RoleKind", "DEFAULT_ROLE", "ROLE_DESCRIPTIONS", "has_minimum_level"]
