"""Smart waste bin fleet tracker service."""

__version__ = "1.0.0"
