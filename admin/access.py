from typing import List

from fastapi import Depends, Header, Request

from errors import AccessDeniedError
from .schemas import AdminRole, MANAGER_SECTIONS

DEVELOPER_SECTION = "developer"


def allowed_sections(role: AdminRole, manager_permissions: List[str]) -> List[str]:
    if role == AdminRole.OWNER:
        return MANAGER_SECTIONS + [DEVELOPER_SECTION]
    if role == AdminRole.DEVELOPER:
        return [DEVELOPER_SECTION]
    return [s for s in MANAGER_SECTIONS if s in manager_permissions]


def can_access(role: AdminRole, section: str, manager_permissions: List[str]) -> bool:
    return section in allowed_sections(role, manager_permissions)


def get_role(x_admin_role: AdminRole = Header(AdminRole.OWNER)) -> AdminRole:
    # login is simulated; the role travels with the request
    return x_admin_role


def require_section(section: str):
    """FastAPI dependency guarding an admin section."""

    def guard(request: Request, role: AdminRole = Depends(get_role)) -> AdminRole:
        permissions = request.app.state.retail.config.manager_permissions
        if not can_access(role, section, permissions):
            raise AccessDeniedError(role.value, section)
        return role

    return guard
