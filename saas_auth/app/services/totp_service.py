"""
Time-based one-time codes for mailed verification.

Each user keeps one persistent base32 secret. Codes are computed from a
secret derived per purpose (HMAC-SHA1 of the stored secret keyed by the
purpose name), so a code mailed for email verification cannot be replayed
in the forgot-password flow.
"""

import base64
import hashlib
import hmac
from datetime import datetime
from typing import Callable, Optional

import pyotp

from saas_auth.domain.base import to_timestamp, utcnow
from saas_auth.domain.entities import CodePurpose


class TotpService:
    def __init__(
        self,
        digits: int = 4,
        interval: int = 30,
        valid_window: int = 2,
        now: Optional[Callable[[], datetime]] = None,
    ):
        self.digits = digits
        self.interval = interval
        self.valid_window = valid_window
        self._now = now or utcnow

    @classmethod
    def from_config(cls, config, now: Optional[Callable[[], datetime]] = None):
        return cls(
            digits=config.TOTP_DIGITS,
            interval=config.TOTP_INTERVAL_SECONDS,
            valid_window=config.TOTP_VALID_WINDOW,
            now=now,
        )

    @staticmethod
    def generate_secret() -> str:
        return pyotp.random_base32()

    def _totp(self, secret: str, purpose: CodePurpose) -> pyotp.TOTP:
        key = base64.b32decode(secret, casefold=True)
        derived = hmac.new(key, purpose.value.encode("utf-8"), hashlib.sha1).digest()
        return pyotp.TOTP(
            base64.b32encode(derived).decode("ascii"),
            digits=self.digits,
            interval=self.interval,
        )

    def generate(
        self, secret: str, purpose: CodePurpose, at: Optional[datetime] = None
    ) -> str:
        """Code for the time step containing `at` (defaults to now)."""
        return self._totp(secret, purpose).at(to_timestamp(at or self._now()))

    def verify(
        self,
        code: str,
        secret: str,
        purpose: CodePurpose,
        at: Optional[datetime] = None,
    ) -> bool:
        """True when code matches a step within valid_window steps of `at`."""
        if not code or not code.isdigit() or len(code) != self.digits:
            return False
        return self._totp(secret, purpose).verify(
            code,
            for_time=to_timestamp(at or self._now()),
            valid_window=self.valid_window,
        )
