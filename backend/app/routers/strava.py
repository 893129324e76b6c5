"""Strava proxy routes."""
import logging
from functools import lru_cache
from typing import Any

import httpx
from fastapi import APIRouter, Depends, HTTPException, status

from app.services.strava_client import StravaAPIError, StravaClient

logger = logging.getLogger(__name__)
router = APIRouter()


@lru_cache
def get_strava_client() -> StravaClient:
    """One client per process so refreshed tokens survive between requests."""
    return StravaClient.from_settings()


@router.get("/activities")
def list_activities(client: StravaClient = Depends(get_strava_client)) -> list[dict[str, Any]]:
    """Proxy the authenticated athlete's recent activities."""
    try:
        return client.list_activities()
    except (StravaAPIError, httpx.HTTPError, ValueError):
        logger.exception("Error fetching Strava activities")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch Strava activities",
        )
