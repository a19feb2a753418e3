"""
Bin entity for the registry.
"""
from dataclasses import dataclass, asdict, replace
from typing import Any, Dict

MIN_FILL_LEVEL = 0
MAX_FILL_LEVEL = 100
# Bins at or above this fill percentage are flagged for collection by sensor sweeps
COLLECTION_THRESHOLD = 75


def clamp_fill_level(value: int) -> int:
    return max(MIN_FILL_LEVEL, min(MAX_FILL_LEVEL, int(value)))


@dataclass
class Bin:
    """A sensor-equipped waste collection bin."""
    id: int
    location: str
    fillLevel: int = 0
    needsCollection: bool = False
    lastUpdated: str = ""

    def copy(self) -> "Bin":
        return replace(self)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
