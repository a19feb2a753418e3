"""
Prometheus metrics for the bin tracker service.
"""
import logging
from prometheus_client import Counter, Gauge

logger = logging.getLogger(__name__)

# Registry mutations and reads, by operation name
BIN_OPERATIONS = Counter(
    "bin_operations_total",
    "Total registry operations executed",
    ["operation"]
)

# status: success, failed
SNAPSHOT_WRITES = Counter(
    "bin_snapshot_writes_total",
    "Total snapshot file writes",
    ["status"]
)

# status: success, empty, corrupt, failed
SNAPSHOT_LOADS = Counter(
    "bin_snapshot_loads_total",
    "Total snapshot file loads",
    ["status"]
)

BINS_REGISTERED = Gauge(
    "bins_registered",
    "Number of bins currently held in the registry"
)


def record_operation(operation: str, bin_count: int) -> None:
    """Count an operation and publish the current registry size."""
    try:
        BIN_OPERATIONS.labels(operation=operation).inc()
        BINS_REGISTERED.set(bin_count)
    except Exception as e:
        logger.debug("Failed to record metrics for %s: %s", operation, e)
