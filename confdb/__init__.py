"""Two-level JSON configuration database, diff and search tooling, and small utilities."""

__version__ = "0.1.0"