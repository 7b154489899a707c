from pydantic import BaseModel


class ServiceHealth(BaseModel):
    healthy: bool
    message: str


class HealthCheckResponse(BaseModel):
    service: str
    version: str
    timestamp: str
    healthy: bool
    places_store: ServiceHealth
