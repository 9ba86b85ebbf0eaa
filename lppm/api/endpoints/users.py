"""
User management and authentication endpoints.
"""
from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from ...core import responses
from ...core.roles import Role
from ...db.database import get_session
from ...models.user import User
from ...schemas.user import LoginRequest, LoginUser, UserCreate, UserRead, UserUpdate
from ...services.user_service import UserService
from ..dependencies.auth import get_current_user, get_token_payload, require_superadmin

router = APIRouter()


@router.post("/login")
async def login(
    login_data: LoginRequest,
    session: AsyncSession = Depends(get_session),
):
    """Exchange credentials for a bearer token."""
    user, token = await UserService.authenticate(session, login_data.email, login_data.password)
    return responses.auth_success(
        LoginUser.model_validate(user, from_attributes=True), "Logged in successfully.", token
    )


@router.post("/logout")
async def logout(
    payload: dict = Depends(get_token_payload),
    session: AsyncSession = Depends(get_session),
):
    """Revoke the token used for this request."""
    await UserService.revoke_token(session, payload["jti"])
    return responses.success(message="Logged out successfully.")


@router.get("/current")
async def get_current(current_user: User = Depends(get_current_user)):
    return responses.success(UserRead.model_validate(current_user), "Current user data retrieved successfully.")


@router.patch("/current")
async def update_current(
    user_data: UserUpdate,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
):
    """Update the caller's own profile; only a superadmin may change its role."""
    keep_role = current_user.role != Role.SUPERADMIN.value
    user = await UserService.update_user(session, current_user, user_data, keep_role=keep_role)
    return responses.success(UserRead.model_validate(user), "User data successfully updated.")


@router.post("")
async def register_user(
    user_data: UserCreate,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_superadmin),
):
    """Create a new user (superadmin only)."""
    user = await UserService.create_user(session, user_data)
    return responses.created(UserRead.model_validate(user), "Register user success.")


@router.get("")
async def list_users(
    request: Request,
    page: int = 1,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_superadmin),
):
    """List users, five per page (superadmin only)."""
    result = await UserService.list_users(session, page)
    return responses.paginated(result, "Users data retrieved successfully.", request.url, UserRead)


@router.get("/{user_id}")
async def get_user(
    user_id: int,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_superadmin),
):
    user = await UserService.get_user(session, user_id)
    return responses.success(UserRead.model_validate(user), "User data retrieved successfully.")


@router.patch("/{user_id}")
async def update_user(
    user_id: int,
    user_data: UserUpdate,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_superadmin),
):
    user = await UserService.get_user(session, user_id)
    user = await UserService.update_user(session, user, user_data)
    return responses.success(UserRead.model_validate(user), "User data successfully updated.")


@router.delete("/{user_id}")
async def delete_user(
    user_id: int,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_superadmin),
):
    """Delete a user (superadmin only)."""
    user = await UserService.get_user(session, user_id)
    await UserService.delete_user(session, user)
    return responses.success(message="User successfully deleted.")
