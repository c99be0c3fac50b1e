"""Admin session parsing and role checks.

The session itself is issued by the login flow (out of this service); here we
only read the `admin_session` cookie and compare roles.
"""

import json
import logging
from urllib.parse import unquote

from fastapi import Request
from pydantic import BaseModel, ValidationError

from errors import ForbiddenError, NotAuthenticatedError

logger = logging.getLogger(__name__)

SESSION_COOKIE = "admin_session"

ROLE_HIERARCHY = {
    "super_admin": 2,
    "admin": 1,
}


class AdminUser(BaseModel):
    id: str
    email: str
    name: str = ""
    role: str


def parse_session(raw: str | None) -> AdminUser | None:
    """Decode the (URL-encoded) cookie JSON; anything malformed counts as no session."""
    if not raw:
        return None
    try:
        return AdminUser.model_validate(json.loads(unquote(raw)))
    except (json.JSONDecodeError, ValidationError) as e:
        logger.warning("Rejected malformed admin session: %s", e)
        return None


def has_admin_role(user: AdminUser | None, required_role: str = "admin") -> bool:
    if user is None:
        return False
    return ROLE_HIERARCHY.get(user.role, 0) >= ROLE_HIERARCHY[required_role]


def require_role(required_role: str = "admin"):
    """Build a dependency that returns the admin user or raises 401/403."""

    async def dependency(request: Request) -> AdminUser:
        user = parse_session(request.cookies.get(SESSION_COOKIE))
        if user is None:
            raise NotAuthenticatedError()
        if not has_admin_role(user, required_role):
            raise ForbiddenError(required_role)
        return user

    return dependency


require_admin = require_role("admin")
require_super_admin = require_role("super_admin")
