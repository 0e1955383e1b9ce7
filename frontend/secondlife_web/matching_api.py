"""HTTP client for the matching endpoints of the backend"""

from typing import Any, Dict, Optional

import httpx
import structlog

logger = structlog.get_logger(__name__)


def empty_recommendations() -> Dict[str, Any]:
    return {"recommendations": [], "total": 0}


def default_preferences() -> Dict[str, Any]:
    return {
        "preferences": {
            "user_id": None,
            "preferred_categories": [],
            "disliked_categories": [],
            "preferred_conditions": [],
            "locale": None,
            "country": None,
            "radius_km": None,
        }
    }


class MatchingApiClient:
    """
    Calls /matching on the backend

    Two failures are absorbed so pages keep rendering: an unauthenticated
    recommendations call yields an empty list and a missing preferences
    record yields the default structure. Every other error is raised as
    httpx.HTTPStatusError or httpx.TransportError.
    """

    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        self.client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "MatchingApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.client.aclose()

    async def get_recommendations(self, limit: int = 20, offset: int = 0) -> Dict[str, Any]:
        response = await self.client.get(
            "/matching/recommendations",
            params={"limit": limit, "offset": offset}
        )
        if response.status_code == 401:
            logger.warning("Unauthenticated user, returning empty recommendations")
            return empty_recommendations()

        response.raise_for_status()
        return response.json()

    async def get_preferences(self) -> Dict[str, Any]:
        response = await self.client.get("/matching/preferences")
        if response.status_code == 404:
            logger.warning("Preferences not found, returning defaults")
            return default_preferences()

        response.raise_for_status()
        return response.json()

    async def save_preferences(self, data: Dict[str, Any]) -> Dict[str, Any]:
        response = await self.client.post("/matching/preferences", json=data)
        response.raise_for_status()
        return response.json()
