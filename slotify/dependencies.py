# slotify/dependencies.py
"""
Authentication + role checks as FastAPI dependencies.
The authorization rule itself (role_allowed) is a plain function so it can be
used and tested without the web framework.
"""

import uuid
from dataclasses import dataclass
from typing import Iterable, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from slotify.models.user import Role
from slotify.utils.errors import ForbiddenError, UnauthorizedError
from slotify.utils.security import decode_access_token

bearer = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class Principal:
    """The authenticated caller, as carried by the access token."""
    user_id: uuid.UUID
    role: Role


def role_allowed(role: Role, allowed: Iterable[Role]) -> bool:
    return role in frozenset(allowed)


def get_current_principal(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer),
) -> Principal:
    if credentials is None:
        raise UnauthorizedError("Invalid or missing token")

    payload = decode_access_token(credentials.credentials)
    if payload is None:
        raise UnauthorizedError("Invalid or missing token")

    try:
        return Principal(user_id=uuid.UUID(payload["sub"]), role=Role(payload["role"]))
    except (KeyError, ValueError):
        raise UnauthorizedError("Invalid or missing token")


def require_role(*roles: Role):
    """Dependency factory: authenticated caller whose role is one of `roles`."""
    def _check(principal: Principal = Depends(get_current_principal)) -> Principal:
        if not role_allowed(principal.role, roles):
            raise ForbiddenError("Insufficient permissions")
        return principal
    return _check
