from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


class OAuthExchangeError(Exception):
    """Raised when the provider rejects the code or returns unusable claims"""


@dataclass(frozen=True)
class OAuthIdentity:
    provider_id: str
    email: str
    name: str
    verified: bool
    picture: Optional[str] = None


class IOAuthProvider(ABC):
    """Federated identity provider interface - application layer"""

    @abstractmethod
    async def exchange_code(self, code: str) -> OAuthIdentity:
        """
        Exchange an authorization code for identity claims.

        Raises:
            OAuthExchangeError: code rejected or identity incomplete
        """
        pass

    async def close(self) -> None:
        """Release transport resources"""
        return None
