"""
Authenticate Use Case

Resolves a bearer access token to the Principal acting in a request.
"""

from saas_auth.app.services.token_service import TokenService
from saas_auth.app.services.unit_of_work import UnitOfWork
from saas_auth.domain.entities import TokenType
from saas_auth.domain.principal import Principal
from saas_auth.libs.result import Error, Result, Return


class AuthenticateUseCase:
    """
    Verifies an access token and re-loads its user on every request, so
    suspension takes effect before the token expires.
    """

    def __init__(self, uow: UnitOfWork, tokens: TokenService):
        self.uow = uow
        self.tokens = tokens

    async def execute(self, access_token: str) -> Result[Principal]:
        claims = self.tokens.verify(access_token, TokenType.access)
        if claims.is_err():
            return claims

        async with self.uow:
            user = await self.uow.users.get_by_id(claims.value.user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))
            if user.is_suspended:
                return Return.err(Error("USER_SUSPENDED", "User account is suspended"))

            return Return.ok(Principal.from_user(user))
