"""
Authentication Use Case DTOs (Data Transfer Objects)

Named response shapes for the auth domain. Users leave the application
layer only as PublicProfile or AdminProfile, never as entities.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from saas_auth.app.services.token_service import AuthTokenPair, IssuedToken
from saas_auth.domain.entities import User


# ============================================================================
# Profiles
# ============================================================================


class PublicProfile(BaseModel):
    """User fields safe to return to the user themselves"""

    id: str
    email: str
    name: str
    username: str
    role: str
    avatar_url: Optional[str] = None
    is_email_verified: bool

    @classmethod
    def from_user(cls, user: User) -> "PublicProfile":
        return cls(
            id=str(user.id),
            email=user.email,
            name=user.name,
            username=user.username,
            role=user.role.value,
            avatar_url=user.avatar_url,
            is_email_verified=user.is_email_verified,
        )


class AdminProfile(PublicProfile):
    """PublicProfile plus account state, for administrators"""

    is_suspended: bool
    is_active: bool
    has_google_identity: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_user(cls, user: User) -> "AdminProfile":
        return cls(
            **PublicProfile.from_user(user).model_dump(),
            is_suspended=user.is_suspended,
            is_active=user.is_active,
            has_google_identity=user.google_id is not None,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


# ============================================================================
# Tokens
# ============================================================================


class TokenInfo(BaseModel):
    token: str
    expires_at: datetime

    @classmethod
    def from_issued(cls, issued: IssuedToken) -> "TokenInfo":
        return cls(token=issued.token, expires_at=issued.expires_at)


class AuthTokens(BaseModel):
    """Access and refresh pair"""

    access: TokenInfo
    refresh: TokenInfo

    @classmethod
    def from_pair(cls, pair: AuthTokenPair) -> "AuthTokens":
        return cls(
            access=TokenInfo.from_issued(pair.access),
            refresh=TokenInfo.from_issued(pair.refresh),
        )


class LoginResponse(BaseModel):
    """Response for password and Google sign-in"""

    user: PublicProfile
    tokens: AuthTokens


class ResetTokenResponse(BaseModel):
    """Response for a verified password reset code"""

    reset_token: str
    expires_at: datetime


# ============================================================================
# Status responses
# ============================================================================


class StatusResponse(BaseModel):
    """Outcome of a code or verification flow"""

    status: str
    message: str
