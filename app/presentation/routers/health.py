from fastapi import APIRouter

from app.schemas.responses import HealthOut

router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthOut)
async def get_health() -> HealthOut:
    return HealthOut()
