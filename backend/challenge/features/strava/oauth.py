"""
Strava OAuth flow.

Handles:
- Code exchange for tokens
- Token refresh

Each call is a single request with no retry; callers decide the policy.
"""

import logging
from typing import Optional

import httpx

from challenge.config import settings
from challenge.shared.errors import UpstreamError

from .schemas import TokenSet

logger = logging.getLogger(__name__)


class StravaOAuth:
    """
    Strava OAuth handler.

    Usage:
        oauth = StravaOAuth()
        tokens = await oauth.exchange_code(code)
        tokens = await oauth.refresh_token(tokens.refresh_token)
    """

    TOKEN_URL = "https://www.strava.com/oauth/token"

    def __init__(
        self,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: Optional[float] = None,
    ):
        self.client_id = settings.strava_client_id
        self.client_secret = settings.strava_client_secret
        self._transport = transport
        self._timeout = timeout or settings.strava_timeout_seconds

    async def _token_request(self, grant: dict, action: str) -> TokenSet:
        payload = {
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            **grant,
        }
        try:
            async with httpx.AsyncClient(
                transport=self._transport, timeout=self._timeout
            ) as client:
                response = await client.post(self.TOKEN_URL, data=payload)
        except httpx.HTTPError as e:
            logger.error(f"Strava {action} failed: {e!r}")
            raise UpstreamError(f"{action} failed: {e}", message=f"Strava {action} failed")

        if response.status_code != 200:
            logger.error(f"Strava {action} failed: {response.status_code} {response.text}")
            raise UpstreamError(
                error_detail(response),
                message=f"Strava {action} failed",
            )

        try:
            return TokenSet.from_response(response.json())
        except (KeyError, TypeError, ValueError) as e:
            logger.error(f"Strava {action} returned malformed body: {e!r}")
            raise UpstreamError(
                "Malformed token response", message=f"Strava {action} failed"
            )

    async def exchange_code(self, code: str) -> TokenSet:
        """
        Exchange authorization code for tokens.

        Args:
            code: Authorization code from Strava redirect

        Returns:
            TokenSet including the athlete id

        Raises:
            UpstreamError: If token exchange fails
        """
        return await self._token_request(
            {"code": code, "grant_type": "authorization_code"},
            "token exchange",
        )

    async def refresh_token(self, refresh_token: str) -> TokenSet:
        """
        Refresh an expired access token.

        Strava may rotate the refresh token; the returned one must replace
        whatever is stored.

        Raises:
            UpstreamError: If token refresh fails
        """
        return await self._token_request(
            {"refresh_token": refresh_token, "grant_type": "refresh_token"},
            "token refresh",
        )


def error_detail(response: httpx.Response) -> str:
    """Pull Strava's error message out of a failed response."""
    try:
        body = response.json()
    except ValueError:
        return f"HTTP {response.status_code}: {response.text[:200]}"
    if isinstance(body, dict) and body.get("message"):
        return f"HTTP {response.status_code}: {body['message']}"
    return f"HTTP {response.status_code}"
