"""API v1 routes."""

from fastapi import APIRouter

from nutricare.api.v1 import auth, header, health

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(header.router, prefix="/header", tags=["header"])
