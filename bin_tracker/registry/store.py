"""
In-memory bin registry guarded by a single lock.

Every public operation, including the snapshot write that follows a mutation,
runs inside the same critical section, so readers never see a half-applied write
and two mutations can never interleave their snapshot writes.
"""
import logging
import math
import random
import threading
from typing import Any, Callable, Iterable, List, Mapping, Optional

from bin_tracker.metrics import SNAPSHOT_LOADS, SNAPSHOT_WRITES, record_operation
from bin_tracker.utils.timestamp_utils import utc_now_iso
from .errors import CorruptSnapshot, EmptyRegistry, IOFailure, NotFound, ValidationError
from .models import Bin, COLLECTION_THRESHOLD, MAX_FILL_LEVEL, MIN_FILL_LEVEL, clamp_fill_level
from .persistence import SnapshotStore

logger = logging.getLogger(__name__)


class BinRegistry:
    """Authoritative store of bins and the id counter."""

    def __init__(
        self,
        snapshot: Optional[SnapshotStore] = None,
        rng: Optional[random.Random] = None,
        clock: Callable[[], str] = utc_now_iso,
    ):
        """
        Args:
            snapshot: Snapshot file written after every mutation; None keeps the registry memory-only
            rng: Default random source for sensor sweeps
            clock: Returns the timestamp string stamped on mutated bins
        """
        self._bins: List[Bin] = []
        self._next_id = 1
        self._lock = threading.Lock()
        self._snapshot = snapshot
        self._rng = rng or random.Random()
        self._clock = clock

    @property
    def snapshot(self) -> Optional[SnapshotStore]:
        return self._snapshot

    @property
    def next_id(self) -> int:
        with self._lock:
            return self._next_id

    # ------------------------------------------------------------------
    # Creation
    # ------------------------------------------------------------------

    @staticmethod
    def _validate_location(location: Any) -> str:
        if not isinstance(location, str) or not location:
            raise ValidationError("Each bin must have a location string")
        return location

    def create(self, location: Any) -> Bin:
        """Register a single bin at ``location``."""
        return self.create_many([location])[0]

    def create_many(self, locations: Iterable[Any]) -> List[Bin]:
        """
        Register one bin per location, all or nothing.

        Every location is validated before any id is allocated, so a failing
        batch neither adds bins nor advances the id counter.

        Raises:
            ValidationError: If any location is not a non-empty string
        """
        validated = [self._validate_location(loc) for loc in locations]
        if not validated:
            return []

        with self._lock:
            now = self._clock()
            created: List[Bin] = []
            for location in validated:
                new_bin = Bin(id=self._next_id, location=location, lastUpdated=now)
                self._next_id += 1
                self._bins.append(new_bin)
                created.append(new_bin.copy())
            self._persist()
            record_operation("create", len(self._bins))

        logger.info("Created %d bins (ids: %s)", len(created), [b.id for b in created])
        return created

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def list_all(self) -> List[Bin]:
        """Copies of all bins in insertion order."""
        with self._lock:
            return [b.copy() for b in self._bins]

    def get_by_id(self, bin_id: int) -> Bin:
        """
        Raises:
            NotFound: If no bin has ``bin_id``
        """
        with self._lock:
            return self._find(bin_id).copy()

    def _find(self, bin_id: int) -> Bin:
        for b in self._bins:
            if b.id == bin_id:
                return b
        raise NotFound(bin_id)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def update(self, bin_id: int, fields: Mapping[str, Any]) -> Bin:
        """
        Apply a partial update to a bin.

        Only well-typed known fields are applied: ``location`` (non-empty string),
        ``fillLevel`` (finite number, truncated and clamped to [0, 100]) and
        ``needsCollection`` (boolean). Anything else is ignored. The flag is never
        derived from the fill level here. ``lastUpdated`` is always refreshed.

        Raises:
            ValidationError: If ``fields`` is not a mapping
            NotFound: If no bin has ``bin_id``
        """
        if not isinstance(fields, Mapping):
            raise ValidationError("Update payload must be a JSON object")

        with self._lock:
            target = self._find(bin_id)

            location = fields.get("location")
            if isinstance(location, str) and location:
                target.location = location

            fill_level = fields.get("fillLevel")
            if _is_number(fill_level):
                target.fillLevel = clamp_fill_level(fill_level)

            needs_collection = fields.get("needsCollection")
            if isinstance(needs_collection, bool):
                target.needsCollection = needs_collection

            target.lastUpdated = self._clock()
            self._persist()
            record_operation("update", len(self._bins))
            updated = target.copy()

        logger.info("Updated bin %d", bin_id)
        return updated

    def delete_by_id(self, bin_id: int) -> bool:
        """Remove a bin; its id is never issued again. Returns whether it existed."""
        with self._lock:
            for index, b in enumerate(self._bins):
                if b.id == bin_id:
                    del self._bins[index]
                    self._persist()
                    record_operation("delete", len(self._bins))
                    logger.info("Deleted bin %d", bin_id)
                    return True
        return False

    def collect_sensor_data(self, rng: Optional[random.Random] = None) -> List[Bin]:
        """
        Simulate a sensor sweep over every bin.

        Each bin gets a uniform random fill level in [0, 100] and
        ``needsCollection = fillLevel >= COLLECTION_THRESHOLD``.

        Args:
            rng: Random source for this sweep; defaults to the registry's own

        Raises:
            EmptyRegistry: If no bins are registered
        """
        gen = rng or self._rng
        with self._lock:
            if not self._bins:
                raise EmptyRegistry()
            now = self._clock()
            for b in self._bins:
                b.fillLevel = gen.randint(MIN_FILL_LEVEL, MAX_FILL_LEVEL)
                b.needsCollection = b.fillLevel >= COLLECTION_THRESHOLD
                b.lastUpdated = now
            self._persist()
            record_operation("collect_sensor_data", len(self._bins))
            snapshot = [b.copy() for b in self._bins]

        logger.info("Collected sensor data for %d bins", len(snapshot))
        return snapshot

    # ------------------------------------------------------------------
    # Snapshot
    # ------------------------------------------------------------------

    def reload(self) -> int:
        """
        Replace the registry contents with the snapshot file.

        A missing file yields an empty registry. A corrupt or unreadable file is
        logged and also yields an empty registry. The id counter is reset to one
        past the highest loaded id.

        Returns:
            Number of bins loaded
        """
        with self._lock:
            bins: List[Bin] = []
            if self._snapshot is not None:
                try:
                    bins = self._snapshot.load()
                    SNAPSHOT_LOADS.labels(status="success" if bins else "empty").inc()
                except CorruptSnapshot as e:
                    logger.error(f"Corrupt snapshot, resetting to an empty registry: {e}")
                    SNAPSHOT_LOADS.labels(status="corrupt").inc()
                except IOFailure as e:
                    logger.error(f"Unreadable snapshot, resetting to an empty registry: {e}")
                    SNAPSHOT_LOADS.labels(status="failed").inc()

            self._bins = bins
            self._next_id = max((b.id for b in bins), default=0) + 1
            record_operation("load", len(self._bins))
            count = len(self._bins)

        logger.info("Loaded %d bins, next id %d", count, self._next_id)
        return count

    def save(self) -> int:
        """
        Force a snapshot write of the current state.

        Returns:
            Number of bins written

        Raises:
            IOFailure: If no snapshot file is configured or the write fails
        """
        with self._lock:
            if self._snapshot is None:
                raise IOFailure("No snapshot file configured")
            try:
                written = self._snapshot.save(self._bins)
            except IOFailure:
                SNAPSHOT_WRITES.labels(status="failed").inc()
                raise
            SNAPSHOT_WRITES.labels(status="success").inc()
            record_operation("save", len(self._bins))
            return written

    def _persist(self) -> None:
        """Write-after-mutate; a failed write leaves the in-memory state authoritative."""
        if self._snapshot is None:
            return
        try:
            self._snapshot.save(self._bins)
            SNAPSHOT_WRITES.labels(status="success").inc()
        except IOFailure as e:
            SNAPSHOT_WRITES.labels(status="failed").inc()
            logger.error(f"Snapshot write failed, keeping in-memory state: {e}")


def _is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return isinstance(value, int) or math.isfinite(value)
