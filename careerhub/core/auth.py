"""
Request identity for the CareerHub API.

Authentication happens upstream (session/JWT handling is not part of this
service); the gateway forwards the authenticated user as X-User-Id.
"""
from typing import Optional

from fastapi import Header

from careerhub.core.errors import UnauthorizedError


async def get_current_user_id(
    x_user_id: Optional[str] = Header(None, description="Authenticated user ID forwarded by the gateway")
) -> str:
    """
    Extract current user ID from request headers.

    Raises:
        UnauthorizedError: header missing or blank, so no score is ever
        computed for an undefined user
    """
    if x_user_id is None or not x_user_id.strip():
        raise UnauthorizedError("Missing X-User-Id header")
    return x_user_id.strip()
