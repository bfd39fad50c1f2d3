from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, Field

from saas_auth.api.error import ClientError, ServerError
from saas_auth.app.services.unit_of_work import UnitOfWork
from saas_auth.app.use_cases.admin import (
    ActivateUsersResponse,
    ActivateUsersUseCase,
    ChangeRoleUseCase,
    GetUserUseCase,
    ListUsersUseCase,
    SuspendUsersResponse,
    SuspendUsersUseCase,
    UserListResponse,
)
from saas_auth.app.use_cases.auth import AdminProfile
from saas_auth.depends import get_unit_of_work, require_admin
from saas_auth.domain.principal import Principal

router = APIRouter(prefix="/admin", tags=["Admin"])


def _raise_admin_error(error):
    if error.code == "INSUFFICIENT_ROLE":
        raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
    elif error.code == "USER_NOT_FOUND":
        raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
    elif error.code in ("INVALID_ROLE", "CANNOT_CHANGE_OWN_ROLE"):
        raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
    raise ServerError(error)


@router.get("/users", status_code=status.HTTP_200_OK, response_model=UserListResponse)
async def list_users(
    page: int = Query(1, ge=1, description="Page number, starting at 1"),
    limit: int = Query(20, ge=1, le=100, description="Users per page"),
    admin: Principal = Depends(require_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Paged list of all users, newest first.
    """
    use_case = ListUsersUseCase(uow)
    result = await use_case.execute(admin, page, limit)

    if result.is_err():
        _raise_admin_error(result.error)

    return result.value


class UserIdsRequest(BaseModel):
    """
    Suspend or activate users HTTP request payload
    """

    ids: List[UUID] = Field(..., min_length=1, description="IDs of users to update")


@router.patch(
    "/users/suspend", status_code=status.HTTP_200_OK, response_model=SuspendUsersResponse
)
async def suspend_users(
    request: UserIdsRequest,
    admin: Principal = Depends(require_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Suspend user accounts.

    Raises:
        - 404 Not Found: Any id is unknown (nothing is changed)
    """
    use_case = SuspendUsersUseCase(uow)
    result = await use_case.execute(admin, request.ids)

    if result.is_err():
        _raise_admin_error(result.error)

    return result.value


class ChangeRoleRequest(BaseModel):
    """
    Change role HTTP request payload
    """

    role: str = Field(..., description="New role: individual, team or admin")


@router.patch("/users/{user_id}/role", status_code=status.HTTP_200_OK, response_model=AdminProfile)
async def change_role(
    user_id: UUID,
    request: ChangeRoleRequest,
    admin: Principal = Depends(require_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Change a user's account role.

    Raises:
        - 400 Bad Request: Invalid role, or changing your own role
        - 404 Not Found: Unknown user
    """
    use_case = ChangeRoleUseCase(uow)
    result = await use_case.execute(admin, user_id, request.role)

    if result.is_err():
        _raise_admin_error(result.error)

    return result.value


@router.patch(
    "/users/activate", status_code=status.HTTP_200_OK, response_model=ActivateUsersResponse
)
async def activate_users(
    request: UserIdsRequest,
    admin: Principal = Depends(require_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Lift the suspension of user accounts.

    Raises:
        - 404 Not Found: Any id is unknown (nothing is changed)
    """
    use_case = ActivateUsersUseCase(uow)
    result = await use_case.execute(admin, request.ids)

    if result.is_err():
        _raise_admin_error(result.error)

    return result.value


@router.get("/users/{user_id}", status_code=status.HTTP_200_OK, response_model=AdminProfile)
async def get_user(
    user_id: UUID,
    admin: Principal = Depends(require_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Admin view of one user.

    Raises:
        - 404 Not Found: Unknown user
    """
    use_case = GetUserUseCase(uow)
    result = await use_case.execute(admin, user_id)

    if result.is_err():
        _raise_admin_error(result.error)

    return result.value
