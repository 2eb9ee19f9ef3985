from fastapi import APIRouter

from urbix.api.v1 import ai, auth, dashboard, health, reports, users
from urbix.core.config import settings

api_router = APIRouter(prefix=settings.API_V1_PREFIX)

api_router.include_router(health.router, tags=['health'])
api_router.include_router(auth.router)
api_router.include_router(users.router)
api_router.include_router(reports.router)
api_router.include_router(dashboard.router)
api_router.include_router(ai.router)
