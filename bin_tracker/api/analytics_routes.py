"""
Collection route and dashboard API endpoints.
The registry is snapshotted under its lock; everything computed here runs lock-free.
"""
from fastapi import APIRouter

from bin_tracker.api.dependencies import RegistryDep
from bin_tracker.api.models import ApiResponse, DashboardStatsResponse, RouteResponse
from bin_tracker.api.response_utils import success_response
from bin_tracker.registry import compute_collection_route, compute_dashboard_stats

router = APIRouter(tags=["analytics"])


@router.get("/optimize-route", response_model=ApiResponse[RouteResponse])
def optimize_route(registry: RegistryDep):
    """Bins needing collection, ordered by fill level (highest first)."""
    route = compute_collection_route(registry.list_all())
    data = {"binsToCollect": len(route), "route": [stop.to_dict() for stop in route]}
    if not route:
        return success_response(data, "No bins need collection right now")
    return success_response(data, f"Found {len(route)} bins needing collection")


@router.get("/dashboard/stats", response_model=ApiResponse[DashboardStatsResponse])
def dashboard_stats(registry: RegistryDep):
    stats = compute_dashboard_stats(registry.list_all())
    if stats.totalBins == 0:
        return success_response(stats.to_dict(), "No bins available")
    return success_response(stats.to_dict(), "Dashboard statistics retrieved successfully")
