"""Admin user management endpoints."""

from uuid import UUID

from fastapi import APIRouter

from app.core.deps import AdminUser, DBSession
from app.schemas.admin import RoleUpdate
from app.schemas.auth import UserResponse
from app.schemas.common import ApiResponse
from app.services.user_admin_service import UserAdminService

router = APIRouter()


@router.get("/users", response_model=ApiResponse[list[UserResponse]])
async def list_users(admin: AdminUser, db: DBSession) -> ApiResponse[list[UserResponse]]:  # noqa: ARG001
    users = await UserAdminService(db).list_users()
    return ApiResponse[list[UserResponse]](
        data=[UserResponse.model_validate(u) for u in users],
        count=len(users),
    )


@router.get("/users/{user_id}", response_model=ApiResponse[UserResponse])
async def get_user(user_id: UUID, admin: AdminUser, db: DBSession) -> ApiResponse[UserResponse]:  # noqa: ARG001
    user = await UserAdminService(db).get_user(user_id)
    return ApiResponse[UserResponse](data=UserResponse.model_validate(user))


@router.put("/users/{user_id}/role", response_model=ApiResponse[UserResponse])
async def update_user_role(
    user_id: UUID,
    data: RoleUpdate,
    admin: AdminUser,
    db: DBSession,
) -> ApiResponse[UserResponse]:
    """Set a user's role. Admins cannot demote themselves."""
    user = await UserAdminService(db).update_role(admin, user_id, data.role)
    return ApiResponse[UserResponse](data=UserResponse.model_validate(user), message="User role updated")


@router.delete("/users/{user_id}", response_model=ApiResponse[None])
async def delete_user(user_id: UUID, admin: AdminUser, db: DBSession) -> ApiResponse[None]:
    await UserAdminService(db).delete_user(admin, user_id)
    return ApiResponse[None](message="User deleted")
