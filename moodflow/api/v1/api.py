"""
API router aggregating all endpoint modules.
"""
from fastapi import APIRouter

from moodflow.api.v1.endpoints import health, moods, users

api_router = APIRouter()
api_router.include_router(health.router)
api_router.include_router(users.router)
api_router.include_router(moods.router)
