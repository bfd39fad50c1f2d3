from fastapi import APIRouter, Depends, status

from saas_auth.api.error import ClientError, ServerError
from saas_auth.app.services.unit_of_work import UnitOfWork
from saas_auth.app.use_cases.auth import GetSessionUseCase, PublicProfile
from saas_auth.depends import get_current_principal, get_unit_of_work
from saas_auth.domain.principal import Principal

router = APIRouter(tags=["User"])


@router.get("/auth/me", status_code=status.HTTP_200_OK, response_model=PublicProfile)
async def get_me(
    principal: Principal = Depends(get_current_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Current user profile.

    Raises:
        - 401 Unauthorized: Missing or invalid access token
        - 403 Forbidden: Suspended account
    """
    use_case = GetSessionUseCase(uow)
    result = await use_case.execute(principal)

    if result.is_err():
        error = result.error
        if error.code == "USER_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        raise ServerError(error)

    return result.value
