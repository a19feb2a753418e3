"""
Dependency injection for FastAPI.
"""
import os
import logging
from functools import lru_cache
from typing import Annotated, Optional

from fastapi import Depends, Request

from bin_tracker.registry import BinRegistry, SnapshotStore

logger = logging.getLogger(__name__)


class AppConfig:
    """Application configuration."""

    def __init__(self):
        # Snapshot file rewritten after every registry mutation
        self.data_file = os.getenv("BIN_DATA_FILE", "bin_data.json")

        # Server
        self.host = os.getenv("BIN_TRACKER_HOST", "0.0.0.0")
        self.port = int(os.getenv("BIN_TRACKER_PORT", "8080"))

        # Optional rotating log file
        self.log_file: Optional[str] = os.getenv("BIN_TRACKER_LOG_FILE") or None


@lru_cache()
def get_config() -> AppConfig:
    """Get application configuration (cached)."""
    return AppConfig()


def build_registry(config: AppConfig) -> BinRegistry:
    """Create an empty registry backed by the configured snapshot file."""
    logger.info("Using snapshot file %s", config.data_file)
    return BinRegistry(snapshot=SnapshotStore(config.data_file))


def get_registry(request: Request) -> BinRegistry:
    """The registry owned by the running application."""
    return request.app.state.registry


# Type aliases for dependency injection
RegistryDep = Annotated[BinRegistry, Depends(get_registry)]
