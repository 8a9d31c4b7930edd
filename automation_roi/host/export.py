"""
CSV export of ROI snapshots.
"""

import logging
import math
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, List, Optional

from .session import Snapshot

logger = logging.getLogger(__name__)

CSV_HEADER = ["Type", "Metric", "Value"]

_NEEDS_QUOTING = re.compile(r'[",\n]')


def format_csv_number(value: Any) -> str:
    """Render a number the way it is shown in exported files.

    Whole floats drop the trailing .0; infinities and NaN are spelled out.
    """
    if value is None:
        return ""
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer():
            return str(int(value))
        return repr(value)
    return str(value)


def escape_csv_value(value: str) -> str:
    """Quote a cell when it contains a quote, comma or newline."""
    if _NEEDS_QUOTING.search(value):
        return '"' + value.replace('"', '""') + '"'
    return value


def snapshot_rows(snapshot: Snapshot) -> List[List[str]]:
    """Build header plus one row per input and output field."""
    rows = [list(CSV_HEADER)]
    for key, value in snapshot.inputs.to_dict().items():
        rows.append(["Input", key, format_csv_number(value)])
    for key, value in snapshot.outputs.to_dict().items():
        rows.append(["Output", key, format_csv_number(value)])
    return rows


def render_csv(snapshot: Snapshot) -> str:
    """Render a snapshot as CSV text, rows separated by newlines."""
    return "\n".join(
        ",".join(escape_csv_value(cell) for cell in row)
        for row in snapshot_rows(snapshot)
    )


def export_filename(now: Optional[datetime] = None) -> str:
    """Build a timestamped file name such as automation-roi-2024-05-01T10-00-00-000Z.csv."""
    utc = (now or datetime.now(timezone.utc)).astimezone(timezone.utc)
    timestamp = f"{utc:%Y-%m-%dT%H:%M:%S}.{utc.microsecond // 1000:03d}Z"
    return f"automation-roi-{re.sub(r'[:.]', '-', timestamp)}.csv"


def write_csv(
    snapshot: Optional[Snapshot],
    directory: str = ".",
    now: Optional[datetime] = None,
) -> Path:
    """Write a snapshot to a timestamped CSV file.

    Args:
        snapshot: Snapshot to export
        directory: Target directory, created if missing
        now: Timestamp for the file name (defaults to current UTC time)

    Returns:
        Path of the written file

    Raises:
        ValueError: If there is no snapshot to export
    """
    if snapshot is None:
        raise ValueError("No valid calculation to export")

    target_dir = Path(directory)
    target_dir.mkdir(parents=True, exist_ok=True)
    path = target_dir / export_filename(now)
    path.write_text(render_csv(snapshot), encoding="utf-8")
    logger.info("Exported ROI snapshot to %s", path)
    return path
