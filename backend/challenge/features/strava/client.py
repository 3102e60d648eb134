"""
Strava API client.

Thin async wrapper around the three endpoints the challenge needs:
token exchange/refresh (delegated to StravaOAuth), the athlete profile and
the athlete activity list. No retries and no local rate limiting; Strava
enforces its own limits and a 429 surfaces as UpstreamError.
"""

import logging
from datetime import datetime
from typing import Optional

import httpx
from pydantic import ValidationError as PydanticValidationError

from challenge.config import settings
from challenge.shared.errors import UpstreamError

from .oauth import StravaOAuth, error_detail
from .schemas import RawActivity, TokenSet

logger = logging.getLogger(__name__)


class StravaClient:
    """
    Async client for Strava API.

    Usage:
        client = StravaClient()
        tokens = await client.exchange_code(code)
        activities = await client.fetch_activities(tokens.access_token)
    """

    API_URL = "https://www.strava.com/api/v3"

    # Strava caps per_page at 200
    MAX_PER_PAGE = 200

    def __init__(
        self,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: Optional[float] = None,
    ):
        self._transport = transport
        self._timeout = timeout or settings.strava_timeout_seconds
        self._oauth = StravaOAuth(transport=transport, timeout=self._timeout)

    # -------------------------------------------------------------------------
    # OAuth Flow (delegated to StravaOAuth)
    # -------------------------------------------------------------------------

    async def exchange_code(self, code: str) -> TokenSet:
        """Exchange authorization code for tokens."""
        return await self._oauth.exchange_code(code)

    async def refresh(self, refresh_token: str) -> TokenSet:
        """Refresh an expired access token."""
        return await self._oauth.refresh_token(refresh_token)

    # -------------------------------------------------------------------------
    # API Calls
    # -------------------------------------------------------------------------

    async def _api_request(
        self,
        endpoint: str,
        access_token: str,
        params: Optional[dict] = None
    ):
        """
        Make an authenticated GET request.

        Raises:
            UpstreamError: On network failure or any non-200 status
        """
        try:
            async with httpx.AsyncClient(
                transport=self._transport, timeout=self._timeout
            ) as client:
                response = await client.get(
                    f"{self.API_URL}{endpoint}",
                    headers={"Authorization": f"Bearer {access_token}"},
                    params=params,
                )
        except httpx.HTTPError as e:
            logger.error(f"Strava GET {endpoint} failed: {e!r}")
            raise UpstreamError(str(e) or type(e).__name__)

        if "X-RateLimit-Limit" in response.headers:
            logger.debug(
                f"Strava rate limit: {response.headers.get('X-RateLimit-Usage')} "
                f"/ {response.headers.get('X-RateLimit-Limit')}"
            )

        if response.status_code != 200:
            logger.error(
                f"Strava GET {endpoint} failed: {response.status_code} {response.text[:200]}"
            )
            raise UpstreamError(error_detail(response))

        return response.json()

    async def get_athlete(self, access_token: str) -> dict:
        """Get authenticated athlete profile."""
        return await self._api_request("/athlete", access_token)

    async def fetch_activities(
        self,
        access_token: str,
        after: Optional[int | datetime] = None,
        before: Optional[int | datetime] = None,
        per_page: int = 30,
    ) -> list[RawActivity]:
        """
        Get athlete activities (first page only).

        Args:
            access_token: Valid access token
            after: Only activities after this epoch second / time
            before: Only activities before this epoch second / time
            per_page: Results per page (max 200)
        """
        params: dict = {"per_page": min(per_page, self.MAX_PER_PAGE)}
        if after is not None:
            params["after"] = _epoch(after)
        if before is not None:
            params["before"] = _epoch(before)

        payload = await self._api_request("/athlete/activities", access_token, params)
        if not isinstance(payload, list):
            raise UpstreamError("Unexpected activities payload")

        try:
            return [RawActivity.model_validate(item) for item in payload]
        except PydanticValidationError as e:
            logger.error(f"Strava returned malformed activity: {e}")
            raise UpstreamError("Malformed activity in Strava response")


def _epoch(value: int | datetime) -> int:
    if isinstance(value, datetime):
        return int(value.timestamp())
    return int(value)
