"""Peak table assembly and CSV output."""

import logging
import os
import tempfile
from pathlib import Path

import polars as pl

from .errors import OutputWriteError
from .modes import mode_spec
from .types import PeakRecord, StructureMode

logger = logging.getLogger(__name__)

PEAK_SUFFIX = "_peak.csv"

# Mode for new output files, as a plain open() would create them
_UMASK = os.umask(0)
os.umask(_UMASK)
FILE_MODE = 0o666 & ~_UMASK


def peak_table_path(input_path: str | Path) -> Path:
    """Output path for a peak table: ``<dir>/<stem>_peak.csv``."""
    p = Path(input_path)
    return p.with_name(p.stem + PEAK_SUFFIX)


def write_csv_atomic(df: pl.DataFrame, path: str | Path) -> Path:
    """Write ``df`` as CSV, replacing ``path`` only once the write succeeded.

    Raises:
        OutputWriteError: If the file cannot be written
    """
    path = Path(path)

    tmp_path = None
    try:
        with tempfile.NamedTemporaryFile(
            "wb", dir=path.parent, prefix=f".{path.name}.", suffix=".tmp", delete=False
        ) as tmp:
            tmp_path = tmp.name
            df.write_csv(tmp)
        os.chmod(tmp_path, FILE_MODE)
        os.replace(tmp_path, path)
    except OSError as e:
        raise OutputWriteError(f"cannot write {path}: {e.strerror or e}") from e
    finally:
        if tmp_path is not None and os.path.exists(tmp_path):
            os.unlink(tmp_path)

    return path


class PeakTable:
    """Append-only table of recorded peaks with a mode-specific header.

    Written exactly once, after the indexing session is done.
    """

    def __init__(self, mode: StructureMode):
        self.mode = mode
        self.header = mode_spec(mode).header
        self._records: list[PeakRecord] = []
        self._written_to: Path | None = None

    def __len__(self) -> int:
        return len(self._records)

    @property
    def records(self) -> tuple[PeakRecord, ...]:
        return tuple(self._records)

    def append(self, record: PeakRecord) -> None:
        """Add a record.

        Raises:
            ValueError: If the record's arity does not match the header
            RuntimeError: If the table was already written
        """
        if self._written_to is not None:
            raise RuntimeError(f"peak table already written to {self._written_to}")
        row = record.to_row()
        if len(row) != len(self.header):
            raise ValueError(f"record has {len(row)} fields, header has {len(self.header)}")
        self._records.append(record)

    def rows(self) -> list[list[str | None]]:
        """Header followed by every record, as lists of strings."""
        return [list(self.header)] + [r.to_row() for r in self._records]

    def to_dataframe(self) -> pl.DataFrame:
        schema = {name: pl.String for name in self.header}
        if not self._records:
            return pl.DataFrame(schema=schema)
        return pl.DataFrame([r.to_row() for r in self._records], schema=schema, orient="row")

    def write_csv(self, path: str | Path) -> Path:
        """Finalize the table to ``path``. Can only be called once."""
        if self._written_to is not None:
            raise RuntimeError(f"peak table already written to {self._written_to}")
        out = write_csv_atomic(self.to_dataframe(), path)
        self._written_to = out
        logger.info("wrote %d peaks to %s", len(self._records), out)
        return out
