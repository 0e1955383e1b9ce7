"""
Web front for SecondLife Exchange

Renders item listings and the matching page (recommendation cards with
tier labels and reason tooltips, preferences form).
"""

from fastapi import FastAPI, Request, Form
from fastapi.templating import Jinja2Templates
from fastapi.responses import HTMLResponse, RedirectResponse
from pathlib import Path
from typing import List, Optional
import httpx
import structlog

from .config import web_settings
from .matching_api import MatchingApiClient, empty_recommendations, default_preferences
from .presentation import match_tier, format_score, reasons_tooltip

logger = structlog.get_logger(__name__)

CATEGORIES = [
    "CLOTHING", "ELECTRONICS", "BOOKS", "HOME", "TOOLS", "TOYS",
    "SPORTS", "ART", "VINTAGE", "HANDCRAFT", "OTHER",
]
CONDITIONS = ["NEW", "GOOD", "FAIR", "TO_REPAIR"]

app = FastAPI(
    title="SecondLife Exchange - Frontend",
    version="1.0.0",
    description="Web interface for SecondLife Exchange"
)

# Tests swap in an httpx.MockTransport here
app.state.backend_transport = None

templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))
templates.env.globals.update(
    match_tier=match_tier,
    format_score=format_score,
    reasons_tooltip=reasons_tooltip,
)


def matching_client(request: Request) -> MatchingApiClient:
    """Client authenticated with the caller's token cookie, if any"""
    return MatchingApiClient(
        web_settings.BACKEND_URL,
        token=request.cookies.get(web_settings.TOKEN_COOKIE_NAME),
        timeout=web_settings.BACKEND_TIMEOUT,
        transport=request.app.state.backend_transport,
    )


@app.get("/", response_class=HTMLResponse)
async def home(request: Request):
    """Home page"""
    return templates.TemplateResponse(request, "index.html", {})


@app.get("/items", response_class=HTMLResponse)
async def list_items(request: Request, category: Optional[str] = None, q: Optional[str] = None):
    """Browse available items"""

    params = {k: v for k, v in {"category": category, "q": q}.items() if v}
    error = None

    async with httpx.AsyncClient(
        base_url=web_settings.BACKEND_URL,
        timeout=web_settings.BACKEND_TIMEOUT,
        transport=request.app.state.backend_transport,
    ) as client:
        try:
            response = await client.get("/items/", params=params)
            response.raise_for_status()
            page = response.json()
        except httpx.HTTPError as e:
            logger.error("Failed to load items", error=str(e))
            page = {"items": [], "total": 0}
            error = "Impossible de charger les objets"

    return templates.TemplateResponse(
        request,
        "items.html",
        {
            "page": page,
            "categories": CATEGORIES,
            "selected_category": category,
            "q": q or "",
            "error": error,
        }
    )


@app.get("/matching", response_class=HTMLResponse)
async def matching_page(request: Request, limit: int = 20, offset: int = 0):
    """Recommendations and preferences of the current visitor"""

    error = None
    async with matching_client(request) as client:
        try:
            recommendations = await client.get_recommendations(limit=limit, offset=offset)
        except httpx.HTTPError as e:
            logger.error("Failed to load recommendations", error=str(e))
            recommendations = empty_recommendations()
            error = "Impossible de charger les recommandations"

        preferences = default_preferences()
        if request.cookies.get(web_settings.TOKEN_COOKIE_NAME):
            try:
                preferences = await client.get_preferences()
            except httpx.HTTPError as e:
                logger.error("Failed to load preferences", error=str(e))
                error = error or "Impossible de charger les préférences"

    return templates.TemplateResponse(
        request,
        "matching.html",
        {
            "recommendations": recommendations,
            "preferences": preferences["preferences"],
            "categories": CATEGORIES,
            "conditions": CONDITIONS,
            "error": error,
        }
    )


@app.post("/matching/preferences")
async def save_preferences(
    request: Request,
    preferred_categories: List[str] = Form([]),
    disliked_categories: List[str] = Form([]),
    preferred_conditions: List[str] = Form([]),
    country: str = Form(""),
):
    """Submit the preferences form"""

    data = {
        "preferred_categories": preferred_categories,
        "disliked_categories": disliked_categories,
        "preferred_conditions": preferred_conditions,
        "country": country.strip() or None,
    }

    async with matching_client(request) as client:
        await client.save_preferences(data)

    return RedirectResponse(url="/matching", status_code=303)


@app.get("/health")
async def health_check():
    """Health check endpoint"""

    async with httpx.AsyncClient(timeout=web_settings.BACKEND_TIMEOUT) as client:
        try:
            response = await client.get(f"{web_settings.BACKEND_URL.replace('/api/v1', '')}/health")
            backend_status = response.json() if response.status_code == 200 else {"status": "unhealthy"}
        except httpx.HTTPError:
            backend_status = {"status": "unreachable"}

    return {
        "status": "healthy",
        "backend": backend_status
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "secondlife_web.main:app",
        host="0.0.0.0",
        port=8001,
        reload=True
    )
