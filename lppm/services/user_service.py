"""
User service layer for business logic.
"""
import logging
from typing import Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.config import settings
from ..core.exceptions import AuthenticationError, FieldValidationError
from ..core.roles import Role
from ..core.security import create_access_token, get_password_hash, verify_password
from ..db.pagination import Page, paginate
from ..models.user import RevokedToken, User
from ..schemas.user import UserCreate, UserUpdate
from .base import get_or_404, taken_message

logger = logging.getLogger(__name__)


class UserService:
    """User service class."""

    @staticmethod
    async def _ensure_email_free(
        session: AsyncSession,
        email: str,
        user_id: Optional[int] = None,
    ) -> None:
        query = select(User.id).where(User.email == email)
        if user_id is not None:
            query = query.where(User.id != user_id)
        if (await session.execute(query)).first() is not None:
            raise FieldValidationError.single("email", taken_message("email"))

    @staticmethod
    async def create_user(session: AsyncSession, user_data: UserCreate) -> User:
        """Create a new user."""
        await UserService._ensure_email_free(session, user_data.email)

        db_user = User(
            name=user_data.name,
            email=user_data.email,
            password_hash=get_password_hash(user_data.password),
            role=user_data.role.value,
        )
        session.add(db_user)
        await session.commit()
        await session.refresh(db_user)
        logger.info(f"User {db_user.email} registered as {db_user.role}")
        return db_user

    @staticmethod
    async def get_user(session: AsyncSession, user_id: int) -> User:
        return await get_or_404(session, User, user_id, "User not found.")

    @staticmethod
    async def get_user_by_email(session: AsyncSession, email: str) -> Optional[User]:
        """Get user by email."""
        result = await session.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    @staticmethod
    async def list_users(session: AsyncSession, page: int = 1) -> Page:
        query = select(User).order_by(User.id)
        return await paginate(session, query, page, settings.USER_PAGE_SIZE)

    @staticmethod
    async def update_user(
        session: AsyncSession,
        user: User,
        user_data: UserUpdate,
        keep_role: bool = False,
    ) -> User:
        """Replace a user's profile and password; ``keep_role`` ignores the role field."""
        await UserService._ensure_email_free(session, user_data.email, user.id)

        user.name = user_data.name
        user.email = user_data.email
        user.password_hash = get_password_hash(user_data.password)
        if not keep_role:
            user.role = user_data.role.value

        await session.commit()
        await session.refresh(user)
        return user

    @staticmethod
    async def delete_user(session: AsyncSession, user: User) -> None:
        """Delete a user."""
        await session.delete(user)
        await session.commit()
        logger.info(f"User {user.email} deleted")

    @staticmethod
    async def authenticate(session: AsyncSession, email: str, password: str) -> Tuple[User, str]:
        """Check credentials and issue an access token."""
        user = await UserService.get_user_by_email(session, email)
        if user is None or not verify_password(password, user.password_hash):
            logger.warning(f"Failed login for {email}")
            raise AuthenticationError("The provided credentials are incorrect.")

        token = create_access_token(data={"sub": str(user.id), "role": user.role})
        logger.info(f"User {user.email} logged in")
        return user, token

    @staticmethod
    async def revoke_token(session: AsyncSession, jti: str) -> None:
        if await session.get(RevokedToken, jti) is None:
            session.add(RevokedToken(jti=jti))
            await session.commit()

    @staticmethod
    async def is_token_revoked(session: AsyncSession, jti: Optional[str]) -> bool:
        if not jti:
            return True
        return await session.get(RevokedToken, jti) is not None

    @staticmethod
    async def seed_first_superadmin(session: AsyncSession) -> Optional[User]:
        """Create the configured superadmin when no user exists yet."""
        if not (settings.FIRST_SUPERADMIN_EMAIL and settings.FIRST_SUPERADMIN_PASSWORD):
            return None
        count = (await session.execute(select(func.count(User.id)))).scalar_one()
        if count:
            return None

        user = User(
            name=settings.FIRST_SUPERADMIN_NAME,
            email=settings.FIRST_SUPERADMIN_EMAIL,
            password_hash=get_password_hash(settings.FIRST_SUPERADMIN_PASSWORD),
            role=Role.SUPERADMIN.value,
        )
        session.add(user)
        await session.commit()
        logger.info(f"Seeded superadmin {user.email}")
        return user
