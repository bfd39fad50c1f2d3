"""
Login Use Case

Password sign-in returning an access/refresh token pair.
"""

from saas_auth.app.services.token_service import TokenService
from saas_auth.app.services.unit_of_work import UnitOfWork
from saas_auth.domain.base import normalize_email
from saas_auth.libs.result import Result, Return

from .credentials import CredentialVerifier, start_session
from .dtos import LoginResponse


class LoginUseCase:
    """
    Use case for password login and JWT issuance.

    Business Rules:
    - Credential rules live in CredentialVerifier
    - The password path never supplies a google id, so federated
      accounts are refused here with AUTHORIZATION_FAILED
    - Success sets is_active and records a login audit event
    """

    def __init__(self, uow: UnitOfWork, verifier: CredentialVerifier, tokens: TokenService):
        self.uow = uow
        self.verifier = verifier
        self.tokens = tokens

    async def execute(self, email: str, password: str) -> Result[LoginResponse]:
        """
        Execute login use case.

        Args:
            email: User email
            password: Plain text password

        Returns:
            Result with LoginResponse (profile and tokens), or Error
        """
        async with self.uow:
            user = await self.uow.users.get_by_email(normalize_email(email))

            verified = await self.verifier.verify(user, password=password)
            if verified.is_err():
                return verified

            response = await start_session(self.uow, self.tokens, verified.value, "login")
            return Return.ok(response)
