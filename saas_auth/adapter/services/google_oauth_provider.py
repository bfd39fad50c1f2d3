import logging
from typing import Optional

import httpx

from saas_auth.app.services.oauth_provider import (
    IOAuthProvider,
    OAuthExchangeError,
    OAuthIdentity,
)

logger = logging.getLogger(__name__)

GOOGLE_TOKEN_URL = "https://oauth2.googleapis.com/token"
GOOGLE_USERINFO_URL = "https://www.googleapis.com/oauth2/v2/userinfo"


class GoogleOAuthProvider(IOAuthProvider):
    """Authorization-code exchange against Google's OAuth2 endpoints"""

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        redirect_uri: str,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uri = redirect_uri
        self._client = client or httpx.AsyncClient(timeout=10)

    async def exchange_code(self, code: str) -> OAuthIdentity:
        try:
            token_resp = await self._client.post(
                GOOGLE_TOKEN_URL,
                data={
                    "code": code,
                    "client_id": self.client_id,
                    "client_secret": self.client_secret,
                    "redirect_uri": self.redirect_uri,
                    "grant_type": "authorization_code",
                },
                headers={"Accept": "application/json"},
            )
            token_resp.raise_for_status()
            access_token = token_resp.json().get("access_token")
            if not access_token:
                raise OAuthExchangeError("No access token from Google")

            user_resp = await self._client.get(
                GOOGLE_USERINFO_URL,
                headers={"Authorization": f"Bearer {access_token}"},
            )
            user_resp.raise_for_status()
            info = user_resp.json()
        except httpx.HTTPError as e:
            logger.warning(f"Google code exchange failed: {e}")
            raise OAuthExchangeError("Google code exchange failed") from e

        if not info.get("id") or not info.get("email"):
            raise OAuthExchangeError("Google identity is missing id or email")

        return OAuthIdentity(
            provider_id=str(info["id"]),
            email=info["email"].lower(),
            name=info.get("name") or "",
            verified=bool(info.get("verified_email", False)),
            picture=info.get("picture"),
        )

    async def close(self) -> None:
        await self._client.aclose()
