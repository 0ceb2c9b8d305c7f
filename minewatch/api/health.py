from fastapi import APIRouter
from pydantic import BaseModel

from minewatch.core.config import settings

router = APIRouter()


class HealthResponse(BaseModel):
    status: str = "ok"
    app: str
    environment: str


@router.get("/health", response_model=HealthResponse, tags=["health"])
async def health_check():
    """Liveness probe; does not touch the database."""
    return HealthResponse(app=settings.APP_NAME, environment=settings.ENVIRONMENT)
