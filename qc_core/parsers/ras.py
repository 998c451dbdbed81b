"""Rigaku .ras diffraction scan parser."""

import logging
from pathlib import Path

import polars as pl

from ..errors import RasFormatError
from ..types import RAS_COLUMNS

logger = logging.getLogger(__name__)

# Header (*) and comment (#) lines
SKIP_PREFIXES = ("*", "#")


def parse_ras_line(line: str, line_num: int) -> list[str]:
    """Split a data line into its 2θ and intensity fields (kept as text)."""
    parts = line.split(" ")
    if len(parts) < 2:
        raise RasFormatError(f"line {line_num}: expected angle and intensity, got {line!r}")
    return parts[:2]


def read_ras_file(file_path: str | Path) -> pl.DataFrame:
    """Read the scan data of a .ras file.

    Args:
        file_path: Path to .ras file

    Returns:
        DataFrame with string columns ``#2theta`` and ``Intensity``

    Raises:
        ValueError: If the file is not a .ras file
        RasFormatError: If a data line has fewer than two fields
    """
    if not str(file_path).lower().endswith(".ras"):
        raise ValueError(f"Only RAS files are supported: {file_path}")

    rows = []
    with open(file_path, "r", errors="ignore") as f:
        for i, line in enumerate(f, start=1):
            line = line.rstrip("\r\n")
            if line.startswith(SKIP_PREFIXES):
                continue
            if not line.strip():
                continue
            rows.append(parse_ras_line(line, i))

    schema = {name: pl.String for name in RAS_COLUMNS}
    if not rows:
        logger.warning("no scan data found in %s", file_path)
        return pl.DataFrame(schema=schema)
    return pl.DataFrame(rows, schema=schema, orient="row")

