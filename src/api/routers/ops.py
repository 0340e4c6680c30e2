import logging
from datetime import datetime

from fastapi import APIRouter, Depends, Response
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST

from api.dependencies import get_parser
from extraction.natural_language_parser import NaturalLanguageParser

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/api/health")
async def health_check(parser: NaturalLanguageParser = Depends(get_parser)) -> dict:
    """Health check endpoint for container orchestration."""
    return {
        "status": "ok",
        "timestamp": datetime.now().isoformat(),
        "dateEngine": type(parser.date_engine).__name__,
        "defaultToScheduled": parser.config.default_to_scheduled,
    }


@router.get("/metrics")
async def metrics() -> Response:
    """
    Prometheus scrape endpoint.
    """
    data = generate_latest()
    return Response(content=data, media_type=CONTENT_TYPE_LATEST)
