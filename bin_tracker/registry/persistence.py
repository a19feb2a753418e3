"""
JSON file snapshot of the bin registry.

The snapshot is a JSON array of bin objects, rewritten wholesale on every save.
A missing file is a cold start; anything unparsable is reported as CorruptSnapshot.
"""
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import List, Sequence, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from .errors import CorruptSnapshot, IOFailure
from .models import Bin, clamp_fill_level

logger = logging.getLogger(__name__)


class SnapshotRecord(BaseModel):
    """Schema of a single persisted bin."""
    model_config = ConfigDict(strict=True, extra="ignore")

    id: int = Field(..., gt=0)
    location: str
    fillLevel: int
    needsCollection: bool
    lastUpdated: str


_records_adapter = TypeAdapter(List[SnapshotRecord])


class SnapshotStore:
    """Reads and writes the registry snapshot file."""

    def __init__(self, path: Union[str, Path] = "bin_data.json", indent: int = 4):
        self.path = Path(path)
        self.indent = indent

    def save(self, bins: Sequence[Bin]) -> int:
        """
        Overwrite the snapshot with ``bins`` in the given order.

        Returns:
            Number of bins written

        Raises:
            IOFailure: If the data cannot be serialized or the file cannot be written
        """
        try:
            payload = json.dumps([b.to_dict() for b in bins], indent=self.indent)
        except (TypeError, ValueError) as e:
            logger.error(f"Error serializing snapshot: {e}")
            raise IOFailure(f"Failed to serialize snapshot: {e}") from e

        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=str(self.path.parent)
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(tmp_name, self.path)
        except OSError as e:
            logger.error(f"Error saving data to {self.path}: {e}")
            if tmp_name and os.path.exists(tmp_name):
                try:
                    os.unlink(tmp_name)
                except OSError:
                    logger.warning("Could not remove temporary snapshot file %s", tmp_name)
            raise IOFailure(f"Failed to write snapshot {self.path}: {e}") from e

        logger.debug("Saved %d bins to %s", len(bins), self.path)
        return len(bins)

    def load(self) -> List[Bin]:
        """
        Read bins from the snapshot file.

        Returns:
            Bins in stored order; empty when the file does not exist

        Raises:
            CorruptSnapshot: If the file content is not a valid bin array
            IOFailure: If the file exists but cannot be read
        """
        try:
            raw = self.path.read_bytes()
        except FileNotFoundError:
            logger.info("No snapshot at %s, starting with an empty registry", self.path)
            return []
        except OSError as e:
            logger.error(f"Error reading snapshot {self.path}: {e}")
            raise IOFailure(f"Failed to read snapshot {self.path}: {e}") from e

        try:
            records = _records_adapter.validate_json(raw)
        except PydanticValidationError as e:
            logger.error(f"Error loading data from {self.path}: {e.error_count()} invalid entries")
            raise CorruptSnapshot(f"Snapshot {self.path} is malformed: {e}") from e

        bins: List[Bin] = []
        seen = set()
        for record in records:
            if record.id in seen:
                raise CorruptSnapshot(f"Snapshot {self.path} contains duplicate bin id {record.id}")
            seen.add(record.id)
            bins.append(
                Bin(
                    id=record.id,
                    location=record.location,
                    fillLevel=clamp_fill_level(record.fillLevel),
                    needsCollection=record.needsCollection,
                    lastUpdated=record.lastUpdated,
                )
            )
        return bins
