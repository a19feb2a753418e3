# tests/conftest.py
import random
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from bin_tracker.main import create_app
from bin_tracker.registry import BinRegistry, SnapshotStore
from bin_tracker.utils.timestamp_utils import format_timestamp

TIMESTAMP_PATTERN = r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z$"


class FakeClock:
    """Deterministic clock advancing one millisecond per call."""

    def __init__(self, start: datetime = datetime(2025, 1, 1, 8, 0, 0, tzinfo=timezone.utc)):
        self.current = start
        self.calls = 0

    def __call__(self) -> str:
        self.current += timedelta(milliseconds=1)
        self.calls += 1
        return format_timestamp(self.current)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def snapshot_path(tmp_path: Path) -> Path:
    return tmp_path / "data" / "bin_data.json"


@pytest.fixture
def snapshot(snapshot_path: Path) -> SnapshotStore:
    return SnapshotStore(snapshot_path)


@pytest.fixture
def registry(snapshot: SnapshotStore, clock: FakeClock) -> BinRegistry:
    """Snapshot-backed registry with a seeded random source."""
    return BinRegistry(snapshot=snapshot, rng=random.Random(1234), clock=clock)


@pytest.fixture
def memory_registry(clock: FakeClock) -> BinRegistry:
    return BinRegistry(rng=random.Random(1234), clock=clock)


@pytest.fixture
def client(registry: BinRegistry):
    app = create_app(registry=registry)
    with TestClient(app) as c:
        yield c
