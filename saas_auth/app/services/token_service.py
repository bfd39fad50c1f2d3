"""
Signed token issuance and verification.

Tokens are stateless HS256 JWTs carrying sub, type, iat, exp and jti. The
``type`` claim binds a token to one purpose; a token presented for another
purpose is rejected even when its signature and expiry are valid.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Dict, Optional
from uuid import UUID, uuid4

from jose import JWTError, jwt

from saas_auth.domain.base import from_timestamp, to_timestamp, utcnow
from saas_auth.domain.entities import TokenType
from saas_auth.libs.result import Error, Result, Return


@dataclass(frozen=True)
class IssuedToken:
    token: str
    expires_at: datetime


@dataclass(frozen=True)
class AuthTokenPair:
    access: IssuedToken
    refresh: IssuedToken


@dataclass(frozen=True)
class TokenClaims:
    user_id: UUID
    type: TokenType
    issued_at: datetime
    expires_at: datetime
    jti: str


class TokenService:
    def __init__(
        self,
        secret: str,
        lifetimes: Dict[TokenType, timedelta],
        algorithm: str = "HS256",
        now: Optional[Callable[[], datetime]] = None,
    ):
        self.secret = secret
        self.algorithm = algorithm
        self.lifetimes = lifetimes
        self._now = now or utcnow

    @classmethod
    def from_config(cls, config, now: Optional[Callable[[], datetime]] = None):
        lifetimes = {
            TokenType.access: timedelta(minutes=config.JWT_ACCESS_EXPIRATION_MINUTES),
            TokenType.refresh: timedelta(days=config.JWT_REFRESH_EXPIRATION_DAYS),
            TokenType.reset_password: timedelta(
                minutes=config.JWT_RESET_PASSWORD_EXPIRATION_MINUTES
            ),
            TokenType.verify_email: timedelta(
                minutes=config.JWT_VERIFY_EMAIL_EXPIRATION_MINUTES
            ),
        }
        return cls(
            secret=config.JWT_SECRET,
            lifetimes=lifetimes,
            algorithm=config.JWT_ALGORITHM,
            now=now,
        )

    def issue(self, user_id: UUID, token_type: TokenType) -> IssuedToken:
        """
        Sign a token of the given type for user_id.

        Returns:
            IssuedToken with the encoded JWT and its expiry (second precision)
        """
        issued_at = to_timestamp(self._now())
        expires_at = issued_at + int(self.lifetimes[token_type].total_seconds())
        payload = {
            "sub": str(user_id),
            "type": token_type.value,
            "iat": issued_at,
            "exp": expires_at,
            "jti": uuid4().hex,
        }
        token = jwt.encode(payload, self.secret, algorithm=self.algorithm)
        return IssuedToken(token=token, expires_at=from_timestamp(expires_at))

    def issue_auth_tokens(self, user_id: UUID) -> AuthTokenPair:
        return AuthTokenPair(
            access=self.issue(user_id, TokenType.access),
            refresh=self.issue(user_id, TokenType.refresh),
        )

    def verify(self, token: str, expected_type: TokenType) -> Result[TokenClaims]:
        """
        Verify signature, type and expiry of a token.

        Error codes:
            INVALID_TOKEN: not a structurally valid JWT or missing claims
            UNAUTHORIZED: signature does not verify
            TOKEN_TYPE_MISMATCH: type claim differs from expected_type
            TOKEN_EXPIRED: now is at or after exp
        """
        try:
            jwt.get_unverified_claims(token)
        except JWTError:
            return Return.err(Error("INVALID_TOKEN", "Malformed token"))

        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"verify_exp": False, "verify_iat": False, "verify_nbf": False},
            )
        except JWTError:
            return Return.err(Error("UNAUTHORIZED", "Please authenticate"))

        try:
            user_id = UUID(payload["sub"])
            issued_at = int(payload["iat"])
            expires_at = int(payload["exp"])
            token_type = payload["type"]
        except (KeyError, TypeError, ValueError):
            return Return.err(Error("INVALID_TOKEN", "Token is missing required claims"))

        if token_type != expected_type.value:
            return Return.err(Error("TOKEN_TYPE_MISMATCH", "Token type mismatch"))

        if to_timestamp(self._now()) >= expires_at:
            return Return.err(Error("TOKEN_EXPIRED", "Token has expired"))

        return Return.ok(
            TokenClaims(
                user_id=user_id,
                type=expected_type,
                issued_at=from_timestamp(issued_at),
                expires_at=from_timestamp(expires_at),
                jti=str(payload.get("jti", "")),
            )
        )
