"""Health check and utility routes"""

from fastapi import APIRouter
import logging

from adapters import push_adapter
from api.responses import HealthResponse
from app.config import settings

router = APIRouter(tags=["Health"])
logger = logging.getLogger("messmate.api.health")


@router.get("/health-check", response_model=HealthResponse)
def health_check():
    """Basic health check endpoint"""
    return HealthResponse(
        status="ok",
        service=settings.app_name,
        version=settings.app_version,
        push_connected=push_adapter.is_connected(),
    )
