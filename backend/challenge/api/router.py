"""
API Router

Combines all route modules. Paths are served from the root, the frontend
calls them without a version prefix.
"""

from fastapi import APIRouter

from challenge.api.routes import activities, auth, participants, strava, users

api_router = APIRouter()

api_router.include_router(auth.router, prefix="/auth", tags=["Auth"])
api_router.include_router(users.router, prefix="/users", tags=["Users"])
api_router.include_router(strava.router, prefix="/strava", tags=["Strava"])
api_router.include_router(participants.router, tags=["Leaderboard"])
api_router.include_router(activities.router, prefix="/activities", tags=["Activities"])
