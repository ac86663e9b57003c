"""API router aggregation."""

from fastapi import APIRouter

from src.api.classify import router as classify_router
from src.api.dashboard import router as dashboard_router
from src.api.export import router as export_router
from src.api.health import router as health_router
from src.api.incidents import router as incidents_router
from src.api.responses import router as responses_router

api_router = APIRouter()
api_router.include_router(health_router)
# Live view and incident history
api_router.include_router(dashboard_router)
api_router.include_router(incidents_router)
# Manual entries
api_router.include_router(responses_router)
# CSV downloads of the dashboard tables
api_router.include_router(export_router)
# Stateless parser and matcher
api_router.include_router(classify_router)
