from fastapi import APIRouter

from app.api.v1.endpoints import health, places, user_places

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(places.router, prefix="/places", tags=["places"])
api_router.include_router(user_places.router, prefix="/user-places", tags=["user-places"])
