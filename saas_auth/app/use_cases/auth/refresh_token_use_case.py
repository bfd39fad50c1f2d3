"""
Refresh Token Use Case

Exchanges a refresh token for a brand-new access/refresh pair.
"""

from saas_auth.app.services.token_service import TokenService
from saas_auth.app.services.unit_of_work import UnitOfWork
from saas_auth.domain.entities import TokenType
from saas_auth.libs.result import Error, Result, Return

from .dtos import AuthTokens


class RefreshTokenUseCase:
    """
    Use case for token rotation.

    Business Rules:
    - Token must verify as type refresh
    - User must still exist (USER_NOT_FOUND) and not be suspended
    - Stateless: the presented refresh token stays valid until it expires
    """

    def __init__(self, uow: UnitOfWork, tokens: TokenService):
        self.uow = uow
        self.tokens = tokens

    async def execute(self, refresh_token: str) -> Result[AuthTokens]:
        claims = self.tokens.verify(refresh_token, TokenType.refresh)
        if claims.is_err():
            return claims

        async with self.uow:
            user = await self.uow.users.get_by_id(claims.value.user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))
            if user.is_suspended:
                return Return.err(Error("USER_SUSPENDED", "User account is suspended"))

            return Return.ok(AuthTokens.from_pair(self.tokens.issue_auth_tokens(user.id)))
