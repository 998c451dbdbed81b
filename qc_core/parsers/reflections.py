"""Reference reflection table reader (QC.csv / AC11.csv)."""

import csv
import logging
import math
from pathlib import Path
from typing import Iterator

from ..errors import TableFormatError, TableNotFoundError
from ..modes import mode_spec, select_mode
from ..types import Reflection, StructureMode, XpeakConfig

logger = logging.getLogger(__name__)


def reference_table_path(config: XpeakConfig) -> Path:
    """Path of the reference table for the configured mode."""
    return Path(config.table_dir) / select_mode(config).table_name


def parse_reflection(fields: list[str], arity: int, row_num: int) -> Reflection:
    """Build a Reflection from one table row.

    Raises:
        TableFormatError: Wrong column count, or an index that is not an integer
    """
    labels = tuple(f.strip() for f in fields)
    if len(labels) != arity:
        raise TableFormatError(f"row {row_num}: expected {arity} indices, got {len(labels)}")

    values = []
    for label in labels:
        try:
            value = float(label)
        except ValueError:
            raise TableFormatError(f"row {row_num}: index {label!r} is not a number") from None
        if not (math.isfinite(value) and value.is_integer()):
            raise TableFormatError(f"row {row_num}: index {label!r} is not an integer")
        values.append(value)
    return Reflection(labels=labels, values=tuple(values))


def read_reflections(path: str | Path, mode: StructureMode) -> Iterator[Reflection]:
    """Yield reflections from a reference table.

    Rows whose first field starts with ``#`` and blank lines are skipped.
    The file stays open until the generator is exhausted or closed.

    Args:
        path: Path to the CSV table
        mode: Structure mode, fixes the expected number of indices

    Raises:
        TableNotFoundError: If the table cannot be opened
        TableFormatError: On the first malformed row
    """
    arity = mode_spec(mode).arity

    try:
        f = open(path, newline="")
    except OSError as e:
        raise TableNotFoundError(f"cannot open reference table {path}: {e.strerror or e}") from e

    with f:
        logger.debug("reading %s reflections from %s", mode.name, path)
        for row_num, fields in enumerate(csv.reader(f), start=1):
            if not fields or not "".join(fields).strip():
                continue
            if fields[0].lstrip().startswith("#"):
                continue
            yield parse_reflection(fields, arity, row_num)


def open_reference_table(config: XpeakConfig) -> Iterator[Reflection]:
    """Reflections of the configured mode's reference table.

    The file is opened eagerly so a missing table is reported before the
    session starts prompting.
    """
    path = reference_table_path(config)
    if not path.is_file():
        raise TableNotFoundError(f"reference table not found: {path}")
    return read_reflections(path, config.mode)
