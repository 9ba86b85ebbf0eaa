"""
Authentication dependencies.
"""
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from ...core.exceptions import AuthenticationError, PermissionDeniedError
from ...core.roles import Access, Role
from ...core.security import verify_token
from ...db.database import get_session
from ...models.user import User
from ...services.user_service import UserService

# Security
security = HTTPBearer(auto_error=False)


async def get_token_payload(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    session: AsyncSession = Depends(get_session),
) -> dict:
    """Decoded bearer token that has not been revoked."""
    if credentials is None:
        raise AuthenticationError()

    payload = verify_token(credentials.credentials)
    if await UserService.is_token_revoked(session, payload.get("jti")):
        raise AuthenticationError("Token has been revoked")
    return payload


async def get_current_user(
    payload: dict = Depends(get_token_payload),
    session: AsyncSession = Depends(get_session),
) -> User:
    """Get the current authenticated user."""
    try:
        user_id = int(payload.get("sub"))
    except (TypeError, ValueError):
        raise AuthenticationError("Could not validate credentials")

    user = await session.get(User, user_id)
    if user is None:
        raise AuthenticationError("Could not validate credentials")
    return user


def require_access(access: Access):
    """Dependency factory: the current user must have a role allowing ``access``."""

    async def dependency(current_user: User = Depends(get_current_user)) -> User:
        try:
            role = Role.parse(current_user.role)
        except ValueError:
            raise PermissionDeniedError()
        if not role.allows(access):
            raise PermissionDeniedError()
        return current_user

    return dependency


require_superadmin = require_access(Access.SITE)
require_records_access = require_access(Access.RECORDS)
