"""
Service info, health and monitoring endpoints.
"""
import logging
from fastapi import APIRouter
from fastapi.responses import HTMLResponse, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from bin_tracker import __version__
from bin_tracker.api.models import HealthStatus
from bin_tracker.utils.timestamp_utils import utc_now_iso

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])

ENDPOINTS = [
    ("GET /bins", "List all waste bins"),
    ("GET /bins/{id}", "Get a specific bin by ID"),
    ("POST /bins", "Add new waste bins"),
    ("PUT /bins/{id}", "Update a bin's properties"),
    ("DELETE /bins/{id}", "Delete a waste bin"),
    ("POST /bins/collect-sensor-data", "Simulate sensor data collection"),
    ("GET /optimize-route", "Get optimized collection route"),
    ("GET /dashboard/stats", "Get dashboard statistics"),
    ("POST /admin/load-data", "Reload bins from the snapshot file"),
    ("POST /admin/save-data", "Write bins to the snapshot file"),
    ("GET /health", "API health check"),
    ("GET /metrics", "Prometheus metrics"),
]

_PAGE_STYLE = (
    "body { font-family: Arial, sans-serif; margin: 40px; line-height: 1.6; }"
    "h1 { color: #2c3e50; }"
    "h2 { color: #3498db; }"
    "code { background: #f4f4f4; padding: 2px 5px; border-radius: 3px; }"
    "ul { list-style-type: none; padding-left: 20px; }"
    "li { margin-bottom: 10px; }"
)


def render_info_page() -> str:
    items = "".join(f"<li><code>{route}</code> - {text}</li>" for route, text in ENDPOINTS)
    return (
        "<html>"
        f"<head><title>Smart Waste Management API</title><style>{_PAGE_STYLE}</style></head>"
        "<body>"
        "<h1>Smart Waste Management System API</h1>"
        f"<p>Version {__version__}</p>"
        "<h2>Available Endpoints:</h2>"
        f"<ul>{items}</ul>"
        "</body></html>"
    )


@router.get("/", response_class=HTMLResponse)
def info_page():
    return HTMLResponse(render_info_page())


@router.get("/health", response_model=HealthStatus)
def get_health_status():
    """Liveness check; reported outside the response envelope."""
    return HealthStatus(status="ok", timestamp=utc_now_iso(), version=__version__)


@router.get("/metrics")
def get_metrics():
    """Prometheus metrics endpoint."""
    try:
        return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)
    except Exception as e:
        logger.error(f"Error generating metrics: {str(e)}")
        return Response("# Error generating metrics\n", media_type="text/plain")
