from typing import Dict

from saas_auth.app.services.oauth_provider import (
    IOAuthProvider,
    OAuthExchangeError,
    OAuthIdentity,
)


class FakeOAuthProvider(IOAuthProvider):
    """Maps known authorization codes to identities"""

    def __init__(self, identities: Dict[str, OAuthIdentity] = None):
        self.identities = dict(identities or {})

    async def exchange_code(self, code: str) -> OAuthIdentity:
        if code not in self.identities:
            raise OAuthExchangeError(f"unknown code {code}")
        return self.identities[code]
