"""API routes"""

from fastapi import APIRouter
from .users import router as users_router
from .items import router as items_router
from .exchanges import router as exchanges_router
from .matching import router as matching_router

api_router = APIRouter()

api_router.include_router(users_router, prefix="/users", tags=["users"])
api_router.include_router(items_router, prefix="/items", tags=["items"])
api_router.include_router(exchanges_router, prefix="/exchanges", tags=["exchanges"])
api_router.include_router(matching_router, prefix="/matching", tags=["matching"])
