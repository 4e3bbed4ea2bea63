from fastapi import APIRouter
from fittrack.api import (
    auth,
    workouts,
    goals,
    profile,
    user_settings,
    stats,
    analytics,
    export
)

api_router = APIRouter()

# Include all routers
api_router.include_router(auth.router)
api_router.include_router(workouts.router)
api_router.include_router(goals.router)
api_router.include_router(profile.router)
api_router.include_router(user_settings.router)
api_router.include_router(stats.router)
api_router.include_router(analytics.router)
api_router.include_router(export.router)
