from fastapi import APIRouter

from image_gateway.models.responses import HealthResponse
from image_gateway.services.storage import health_check

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return health_check()
