"""Bin registry: entity, store, snapshot persistence and analytics."""
from .models import Bin, COLLECTION_THRESHOLD, MIN_FILL_LEVEL, MAX_FILL_LEVEL
from .errors import (
    BinRegistryError,
    ValidationError,
    NotFound,
    EmptyRegistry,
    CorruptSnapshot,
    IOFailure,
)
from .persistence import SnapshotStore
from .store import BinRegistry
from .analytics import (
    RouteStop,
    DashboardStats,
    FillLevelDistribution,
    compute_collection_route,
    compute_dashboard_stats,
)

__all__ = [
    "Bin",
    "COLLECTION_THRESHOLD",
    "MIN_FILL_LEVEL",
    "MAX_FILL_LEVEL",
    "BinRegistryError",
    "ValidationError",
    "NotFound",
    "EmptyRegistry",
    "CorruptSnapshot",
    "IOFailure",
    "SnapshotStore",
    "BinRegistry",
    "RouteStop",
    "DashboardStats",
    "FillLevelDistribution",
    "compute_collection_route",
    "compute_dashboard_stats",
]
