"""API router configuration."""

from fastapi import APIRouter

from aries_jstor.modules.aries.interfaces.router import router as aries_router

api_router = APIRouter()

api_router.include_router(aries_router)
