from fastapi import APIRouter

from api.v1.routes import (
    health,
)
from packages.metering.routes import plans, usage
from packages.places.routes import search

api_router = APIRouter()

# Health check (no auth required)
api_router.include_router(health.router, prefix="/health", tags=["health"])

# Plans (no auth - public pricing info)
api_router.include_router(plans.router, prefix="/plans", tags=["plans"])

# Protected routes (bearer credential resolved per endpoint)
api_router.include_router(usage.router, prefix="/usage", tags=["usage"])
api_router.include_router(search.router, prefix="/places", tags=["places"])
