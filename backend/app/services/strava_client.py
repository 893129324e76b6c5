"""Strava API client with access-token refresh.

Tokens start from settings and live in memory; a refresh replaces both the
access and refresh token for the rest of the process lifetime.
"""
import logging
from typing import Any, Optional

import httpx

from app.config import settings

logger = logging.getLogger(__name__)


class StravaAPIError(Exception):
    """Strava answered with a non-2xx status after any refresh attempt."""

    def __init__(self, status_code: int, body: str):
        super().__init__(f"Strava API error ({status_code}): {body}")
        self.status_code = status_code
        self.body = body


class StravaClient:
    def __init__(
        self,
        client_id: str,
        client_secret: str,
        access_token: str,
        refresh_token: str,
        api_url: str = "https://www.strava.com/api/v3",
        oauth_url: str = "https://www.strava.com/oauth/token",
        per_page: int = 50,
        http: Optional[httpx.Client] = None,
    ):
        self.client_id = client_id
        self.client_secret = client_secret
        self.access_token = access_token
        self.refresh_token = refresh_token
        self.api_url = api_url.rstrip("/")
        self.oauth_url = oauth_url
        self.per_page = per_page
        self.http = http or httpx.Client(timeout=settings.STRAVA_TIMEOUT_SECONDS)

    @classmethod
    def from_settings(cls, http: Optional[httpx.Client] = None) -> "StravaClient":
        return cls(
            client_id=settings.STRAVA_CLIENT_ID,
            client_secret=settings.STRAVA_CLIENT_SECRET,
            access_token=settings.STRAVA_ACCESS_TOKEN,
            refresh_token=settings.STRAVA_REFRESH_TOKEN,
            api_url=settings.STRAVA_API_URL,
            oauth_url=settings.STRAVA_OAUTH_URL,
            per_page=settings.STRAVA_ACTIVITIES_PER_PAGE,
            http=http,
        )

    def _get_activities(self) -> httpx.Response:
        return self.http.get(
            f"{self.api_url}/athlete/activities",
            params={"per_page": self.per_page},
            headers={"Authorization": f"Bearer {self.access_token}"},
        )

    def refresh_access_token(self) -> bool:
        """Exchange the refresh token for a new access token.

        Failures are logged and the current tokens kept; returns whether the
        tokens were replaced.
        """
        try:
            response = self.http.post(
                self.oauth_url,
                data={
                    "client_id": self.client_id,
                    "client_secret": self.client_secret,
                    "grant_type": "refresh_token",
                    "refresh_token": self.refresh_token,
                },
            )
            data = response.json()
        except (httpx.HTTPError, ValueError):
            logger.exception("Error refreshing Strava token")
            return False

        if not data.get("access_token"):
            logger.error("Failed to refresh Strava token: %s", data)
            return False

        self.access_token = data["access_token"]
        self.refresh_token = data.get("refresh_token", self.refresh_token)
        logger.info("Strava token refreshed successfully")
        return True

    def list_activities(self) -> list[dict[str, Any]]:
        """Fetch the athlete's recent activities, refreshing the token once on 401."""
        response = self._get_activities()
        if response.status_code == 401:
            self.refresh_access_token()
            response = self._get_activities()

        if not response.is_success:
            raise StravaAPIError(response.status_code, response.text)
        return response.json()
