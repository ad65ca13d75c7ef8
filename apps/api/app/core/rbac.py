"""Role-based authorization policy.

Two independent mechanisms live here and both are intentional:

* an ordinal role hierarchy (``has_permission``) used to gate reads, and
* flat capability allow-lists (``can_create_record`` and friends) used to gate
  writes and analytics.

They coincide for the four known roles but are not derived from each other.
Every function is total: an unknown role string gets the least-privileged
answer and nothing here raises.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import StrEnum

from fastapi import Depends

from app.core.auth import Identity, get_current_identity
from app.core.errors import ForbiddenError, UnauthorizedError
from app.metrics import observe_authz_denied


logger = logging.getLogger("app.authz")


class Role(StrEnum):
    ADMIN = "admin"
    MANAGER = "manager"
    ANALYST = "analyst"
    VIEWER = "viewer"


class Capability(StrEnum):
    CREATE_RECORD = "create_record"
    UPDATE_RECORD = "update_record"
    DELETE_RECORD = "delete_record"
    VIEW_ANALYTICS = "view_analytics"
    MANAGE_USERS = "manage_users"
    VIEW_ALL_DATA = "view_all_data"


ROLE_LEVELS: dict[str, int] = {
    Role.ADMIN: 4,
    Role.MANAGER: 3,
    Role.ANALYST: 2,
    Role.VIEWER: 1,
}

CAPABILITY_ROLES: dict[Capability, frozenset[str]] = {
    Capability.CREATE_RECORD: frozenset({Role.ADMIN, Role.MANAGER}),
    Capability.UPDATE_RECORD: frozenset({Role.ADMIN, Role.MANAGER}),
    Capability.DELETE_RECORD: frozenset({Role.ADMIN, Role.MANAGER}),
    Capability.VIEW_ANALYTICS: frozenset({Role.ADMIN, Role.MANAGER, Role.ANALYST}),
    Capability.MANAGE_USERS: frozenset({Role.ADMIN}),
    Capability.VIEW_ALL_DATA: frozenset({Role.ADMIN, Role.MANAGER, Role.ANALYST}),
}


def role_level(role: str | None) -> int:
    if not isinstance(role, str):
        return 0
    return ROLE_LEVELS.get(role, 0)


def has_permission(role: str | None, required_role: str | None) -> bool:
    return role_level(role) >= role_level(required_role)


def has_capability(role: str | None, capability: Capability) -> bool:
    return isinstance(role, str) and role in CAPABILITY_ROLES[capability]


def can_create_record(role: str | None) -> bool:
    return has_capability(role, Capability.CREATE_RECORD)


def can_update_record(role: str | None) -> bool:
    return has_capability(role, Capability.UPDATE_RECORD)


def can_delete_record(role: str | None) -> bool:
    return has_capability(role, Capability.DELETE_RECORD)


def can_view_analytics(role: str | None) -> bool:
    return has_capability(role, Capability.VIEW_ANALYTICS)


def can_manage_users(role: str | None) -> bool:
    return has_capability(role, Capability.MANAGE_USERS)


def can_view_all_data(role: str | None) -> bool:
    return has_capability(role, Capability.VIEW_ALL_DATA)


def capabilities_for(role: str | None) -> list[Capability]:
    return [capability for capability in Capability if has_capability(role, capability)]


def _deny(identity: Identity, reason: str) -> ForbiddenError:
    observe_authz_denied(reason)
    logger.info("authz.denied", extra={"user_id": identity.user_id, "role": identity.role, "reason": reason})
    return ForbiddenError()


async def require_identity(identity: Identity | None = Depends(get_current_identity)) -> Identity:
    if identity is None:
        observe_authz_denied("unauthenticated")
        raise UnauthorizedError()
    return identity


def require_role(required_role: Role) -> Callable[..., Identity]:
    async def checker(identity: Identity = Depends(require_identity)) -> Identity:
        if not has_permission(identity.role, required_role):
            raise _deny(identity, f"role<{required_role.value}")
        return identity

    return checker


def require_capability(capability: Capability) -> Callable[..., Identity]:
    async def checker(identity: Identity = Depends(require_identity)) -> Identity:
        if not has_capability(identity.role, capability):
            raise _deny(identity, capability.value)
        return identity

    return checker
