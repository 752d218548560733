"""Read-only aggregation of file-based task records for the mission control dashboard."""

__version__ = "0.2.0"
