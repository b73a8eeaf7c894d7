"""API v1 router aggregator."""

from fastapi import APIRouter

from gainai.api.v1 import bulk

api_router = APIRouter(tags=["API v1"])

# Include all API routers
api_router.include_router(bulk.router, prefix="/bulk", tags=["Bulk Import"])
