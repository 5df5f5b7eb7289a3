from fastapi import APIRouter

from app.presentation.routers.email import router as email_router
from app.presentation.routers.health import router as health_router
from app.presentation.routers.webhooks import router as webhooks_router

api = APIRouter()

# Add all routers here
routers = (email_router, health_router, webhooks_router)
for router in routers:
    api.include_router(router, prefix="/api")
