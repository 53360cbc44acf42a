"""Pingboard API Router - aggregates all API routes."""

from fastapi import APIRouter

from pingboard.api import auth, blacklist, pings

# Main API router - all routes will be prefixed with /api
api_router = APIRouter(prefix="/api")

api_router.include_router(auth.router)
api_router.include_router(pings.router)
api_router.include_router(blacklist.router)
