"""Role-based access control.

Routes declare the permission they need; which roles hold a permission is
decided here and nowhere else.
"""
from enum import Enum
from typing import Set, Tuple

from motorsports.models.user import UserRole


class Permission(str, Enum):
    READ = "read"                  # list/get on every resource
    WRITE = "write"                # create/update/delete on team data
    MANAGE_USERS = "manage_users"  # admin user management


ROLE_PERMISSIONS: dict[UserRole, Set[Permission]] = {
    UserRole.ADMIN: set(Permission),
    UserRole.USER: {Permission.READ, Permission.WRITE},
    UserRole.VIEWER: {Permission.READ},
}


def roles_with(permission: Permission) -> Tuple[str, ...]:
    """Roles granted a permission, in role declaration order."""
    return tuple(
        role.value for role in UserRole
        if permission in ROLE_PERMISSIONS.get(role, set())
    )


def has_permission(role: str, permission: Permission) -> bool:
    return role in roles_with(permission)
