"""
Top-level router for version 1 of the API.

Aggregates the domain routers under a single router that ``main``
mounts at ``settings.api_prefix``.
"""

from fastapi import APIRouter

from .endpoints import health, users

router = APIRouter()

router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(health.router, tags=["health"])
