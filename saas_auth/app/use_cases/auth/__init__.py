"""
Authentication Use Cases

Registration, sign-in, token rotation and mailed-code flows.
"""

from .authenticate_use_case import AuthenticateUseCase
from .credentials import CredentialVerifier
from .dtos import (
    AdminProfile,
    AuthTokens,
    LoginResponse,
    PublicProfile,
    ResetTokenResponse,
    StatusResponse,
    TokenInfo,
)
from .get_session_use_case import GetSessionUseCase
from .google_auth_use_case import GoogleAuthUseCase
from .login_use_case import LoginUseCase
from .logout_use_case import LogoutUseCase
from .refresh_token_use_case import RefreshTokenUseCase
from .register_use_case import RegisterUseCase
from .request_code_use_case import RequestCodeUseCase
from .reset_password_use_case import ResetPasswordUseCase
from .verify_email_use_case import VerifyEmailUseCase
from .verify_reset_code_use_case import VerifyResetCodeUseCase

__all__ = [
    # Use Cases
    "AuthenticateUseCase",
    "GetSessionUseCase",
    "GoogleAuthUseCase",
    "LoginUseCase",
    "LogoutUseCase",
    "RefreshTokenUseCase",
    "RegisterUseCase",
    "RequestCodeUseCase",
    "ResetPasswordUseCase",
    "VerifyEmailUseCase",
    "VerifyResetCodeUseCase",
    "CredentialVerifier",
    # DTOs
    "AdminProfile",
    "AuthTokens",
    "LoginResponse",
    "PublicProfile",
    "ResetTokenResponse",
    "StatusResponse",
    "TokenInfo",
]
