from fastapi import Depends, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from saas_auth.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from saas_auth.api.error import ClientError
from saas_auth.app.services.unit_of_work import UnitOfWork
from saas_auth.app.use_cases.auth import AuthenticateUseCase
from saas_auth.context import ServiceContext
from saas_auth.domain.entities import UserRole
from saas_auth.domain.principal import Principal
from saas_auth.libs.result import Error

security = HTTPBearer(auto_error=False)


def get_services(request: Request) -> ServiceContext:
    return request.app.state.services


async def get_unit_of_work(services: ServiceContext = Depends(get_services)):
    async with services.session_factory() as session:
        yield SqlAlchemyUnitOfWork(session)


async def get_current_principal(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    uow: UnitOfWork = Depends(get_unit_of_work),
    services: ServiceContext = Depends(get_services),
) -> Principal:
    """
    Dependency resolving the bearer access token to a Principal.

    The token is verified and its user re-loaded on every request.

    Raises:
        ClientError: 401 for a missing, invalid or expired token or an
            unknown user; 403 for a suspended user
    """
    if credentials is None:
        raise ClientError(
            Error("UNAUTHORIZED", "Please authenticate"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    result = await AuthenticateUseCase(uow, services.tokens).execute(credentials.credentials)

    if result.is_err():
        error = result.error
        if error.code == "USER_SUSPENDED":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)

    return result.value


def require_roles(*roles: UserRole):
    """Dependency factory allowing only principals whose role is in roles"""

    async def _check(principal: Principal = Depends(get_current_principal)) -> Principal:
        if principal.role not in roles:
            raise ClientError(
                Error("INSUFFICIENT_ROLE", "You do not have access to this resource"),
                status_code=status.HTTP_403_FORBIDDEN,
            )
        return principal

    return _check


require_admin = require_roles(UserRole.admin)
require_team_access = require_roles(UserRole.individual, UserRole.team)
