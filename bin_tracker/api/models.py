"""
Pydantic models for API request/response schemas.
"""
from pydantic import BaseModel, Field
from typing import List, Optional, Generic, TypeVar

# Type variable for generic response types
T = TypeVar('T')


class ApiResponse(BaseModel, Generic[T]):
    """
    Standard response envelope shared by every bin endpoint.
    ``data`` is omitted from the JSON body when there is nothing to return.
    """
    success: bool = Field(..., description="Whether the operation succeeded")
    message: str = Field(..., description="Human-readable message")
    data: Optional[T] = Field(None, description="Response data payload")


class BinResponse(BaseModel):
    """Schema for a bin in responses and in the snapshot file."""
    id: int
    location: str
    fillLevel: int = Field(..., ge=0, le=100)
    needsCollection: bool
    lastUpdated: str = Field(..., description="UTC timestamp, e.g. 2025-09-01T18:05:10.123Z")


class RouteStopResponse(BaseModel):
    id: int
    location: str
    fillLevel: int
    lastUpdated: str


class RouteResponse(BaseModel):
    """Collection route: bins needing collection, fullest first."""
    binsToCollect: int
    route: List[RouteStopResponse] = Field(default_factory=list)


class FillLevelDistribution(BaseModel):
    low: int = Field(0, description="Fill level in [0, 25)")
    medium: int = Field(0, description="Fill level in [25, 50)")
    high: int = Field(0, description="Fill level in [50, 75)")
    critical: int = Field(0, description="Fill level in [75, 100]")


class DashboardStatsResponse(BaseModel):
    totalBins: int
    binsNeedingCollection: int
    averageFillLevel: float
    fillLevelDistribution: FillLevelDistribution


class HealthStatus(BaseModel):
    """Schema for health check response."""
    status: str = Field(..., description="Overall service status")
    timestamp: str
    version: str
