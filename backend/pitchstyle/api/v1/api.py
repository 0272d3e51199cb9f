"""API v1: aggregates all routers under a single prefix."""

from fastapi import APIRouter

from pitchstyle.api.v1.routers import styling

router = APIRouter()
router.include_router(styling.router)
