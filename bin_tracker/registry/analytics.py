"""
Derived views over a point-in-time list of bins: collection route and dashboard statistics.

Pure functions; callers pass a snapshot copy obtained from the registry.
"""
from dataclasses import dataclass, asdict, field
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, List, Sequence

from .models import Bin

# Upper bounds (exclusive) of the low, medium and high buckets; the rest is critical
LOW_UPPER = 25
MEDIUM_UPPER = 50
HIGH_UPPER = 75


@dataclass
class RouteStop:
    id: int
    location: str
    fillLevel: int
    lastUpdated: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class FillLevelDistribution:
    low: int = 0
    medium: int = 0
    high: int = 0
    critical: int = 0

    def total(self) -> int:
        return self.low + self.medium + self.high + self.critical


@dataclass
class DashboardStats:
    totalBins: int = 0
    binsNeedingCollection: int = 0
    averageFillLevel: float = 0.0
    fillLevelDistribution: FillLevelDistribution = field(default_factory=FillLevelDistribution)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def compute_collection_route(bins: Sequence[Bin]) -> List[RouteStop]:
    """
    Bins flagged for collection, fullest first.

    The sort is stable, so bins with equal fill levels keep their registry order.
    """
    to_collect = [b for b in bins if b.needsCollection]
    to_collect.sort(key=lambda b: b.fillLevel, reverse=True)
    return [
        RouteStop(id=b.id, location=b.location, fillLevel=b.fillLevel, lastUpdated=b.lastUpdated)
        for b in to_collect
    ]


def bucket_for(fill_level: int) -> str:
    """Name of the half-open distribution bucket holding ``fill_level``."""
    if fill_level < LOW_UPPER:
        return "low"
    if fill_level < MEDIUM_UPPER:
        return "medium"
    if fill_level < HIGH_UPPER:
        return "high"
    return "critical"


def round_half_away_from_zero(value: Decimal, places: int = 1) -> float:
    quantum = Decimal(1).scaleb(-places)
    magnitude = abs(value).quantize(quantum, rounding=ROUND_HALF_UP)
    return float(magnitude if value >= 0 else -magnitude)


def compute_dashboard_stats(bins: Sequence[Bin]) -> DashboardStats:
    """Fleet totals, mean fill level (one decimal) and the fill-level distribution.

    An empty fleet yields the all-zero stats rather than an error.
    """
    stats = DashboardStats()
    if not bins:
        return stats

    total_fill = 0
    for b in bins:
        total_fill += b.fillLevel
        if b.needsCollection:
            stats.binsNeedingCollection += 1
        bucket = bucket_for(b.fillLevel)
        setattr(stats.fillLevelDistribution, bucket, getattr(stats.fillLevelDistribution, bucket) + 1)

    stats.totalBins = len(bins)
    stats.averageFillLevel = round_half_away_from_zero(Decimal(total_fill) / Decimal(stats.totalBins))
    return stats
