"""
API router that includes all frame routers.
"""
from fastapi import APIRouter
from app.api.endpoints import (
    home,
    profile,
    fan_token,
    owned_tokens
)

# Create main router
router = APIRouter()

# Include all endpoint routers
router.include_router(home.router, tags=["Home"])
router.include_router(profile.router, tags=["Profile"])
router.include_router(fan_token.router, tags=["Fan Tokens"])
router.include_router(owned_tokens.router, tags=["Owned Fan Tokens"])
