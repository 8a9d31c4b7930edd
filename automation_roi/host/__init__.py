"""
Host layer for Automation ROI.

Provides the stateful session and CSV export around the core.
"""

from .export import render_csv, write_csv
from .session import RoiSession, Snapshot, UpdateResult

__all__ = ["RoiSession", "Snapshot", "UpdateResult", "render_csv", "write_csv"]
