from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, status

from app.core.config import settings
from app.schemas.health import HealthCheckResponse
from app.services.session import PlacePickerSession, get_session

router = APIRouter()


@router.get("/health")
async def health_check(session: PlacePickerSession = Depends(get_session)) -> HealthCheckResponse:
    """
    Health check endpoint that verifies the places store is reachable.

    Returns 200 if the store is healthy, 503 otherwise.
    """
    places_store_health = await session.store.health_check()

    response = HealthCheckResponse(
        service="placepicker-backend",
        version=settings.VERSION,
        timestamp=datetime.now(timezone.utc).isoformat(),
        healthy=places_store_health.healthy,
        places_store=places_store_health,
    )

    if response.healthy:
        return response
    raise HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=response.model_dump()
    )
