"""Health check routes."""

from datetime import datetime

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter
from pydantic import BaseModel

from sso.config import ProviderSettings

router = APIRouter(tags=["health"], route_class=DishkaRoute)


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    timestamp: datetime
    version: str
    provider: str


@router.get("/health", response_model=HealthResponse)
async def health_check(
    provider_settings: FromDishka[ProviderSettings],
) -> HealthResponse:
    """Report that the service is up and which provider it serves."""
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(),
        version="0.1.0",
        provider=provider_settings.name,
    )
