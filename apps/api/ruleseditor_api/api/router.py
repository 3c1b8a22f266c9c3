"""API router."""

from fastapi import APIRouter

from . import rules

api_router = APIRouter(prefix="/api")

api_router.include_router(rules.router)
