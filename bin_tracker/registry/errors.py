"""
Exceptions raised by the bin registry and its snapshot store.
"""
from typing import Optional


class BinRegistryError(Exception):
    """Base class for registry failures."""
    pass


class ValidationError(BinRegistryError):
    """Malformed or missing required input field."""
    pass


class NotFound(BinRegistryError):
    """Referenced bin id does not exist."""

    def __init__(self, bin_id: int, message: Optional[str] = None):
        self.bin_id = bin_id
        super().__init__(message or f"Bin with ID {bin_id} not found")


class EmptyRegistry(BinRegistryError):
    """Operation requires at least one registered bin."""

    def __init__(self, message: str = "No bins available"):
        super().__init__(message)


class CorruptSnapshot(BinRegistryError):
    """Snapshot file exists but cannot be parsed into bins."""
    pass


class IOFailure(BinRegistryError):
    """Snapshot file could not be read or written at the OS level."""
    pass
