"""DTA .ASC thermal-analysis log parser.

The log interleaves step descriptions and data rows (tab separated)::

    #HD  <name>  <start line>  <end line>  ...   step (HEATING / COOLING / HOLD)
    #GD  <n>     <temp>        <time>      <DTA> data row

Data rows are cut into one table per step at each step's end line.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

import polars as pl

from ..types import DTA_COLUMNS

logger = logging.getLogger(__name__)

STEP_PREFIX = "#HD"
DATA_PREFIX = "#GD"
HOLD_MARKER = "HOLD"

# Field positions in tab-separated rows
STEP_START_FIELD = 2
STEP_END_FIELD = 3
TEMP_FIELD = 2
DTA_FIELD = 4


@dataclass
class DtaStep:
    """Data rows of one heating or cooling step."""

    index: int  # 1-based position among the recorded steps
    df: pl.DataFrame  # String columns "#Temp." and "DTA"

    @property
    def temperatures(self) -> list[float]:
        return self.df[DTA_COLUMNS[0]].cast(pl.Float64).to_list()

    @property
    def signal(self) -> list[float]:
        return self.df[DTA_COLUMNS[1]].cast(pl.Float64).to_list()


def _parse_step_line(line: str, line_num: int) -> tuple[int, int]:
    parts = line.split("\t")
    try:
        return int(parts[STEP_START_FIELD]), int(parts[STEP_END_FIELD])
    except (IndexError, ValueError):
        raise ValueError(f"line {line_num}: malformed step line {line!r}") from None


def _parse_data_line(line: str, line_num: int) -> list[str]:
    parts = line.split("\t")
    if len(parts) <= DTA_FIELD:
        raise ValueError(f"line {line_num}: malformed data line {line!r}")
    return [parts[TEMP_FIELD].strip(), parts[DTA_FIELD].strip()]


def _to_frame(rows: list[list[str]]) -> pl.DataFrame:
    schema = {name: pl.String for name in DTA_COLUMNS}
    if not rows:
        return pl.DataFrame(schema=schema)
    return pl.DataFrame(rows, schema=schema, orient="row")


def split_dta_steps(file_path: str | Path) -> list[DtaStep]:
    """Split a DTA .ASC log into per-step tables.

    HOLD steps and the step starting at line 0 (initial heating) are
    ignored. Rows after the last step end are dropped.

    Args:
        file_path: Path to the .ASC file

    Returns:
        Steps in file order
    """
    steps: list[tuple[int, int]] = []
    result: list[DtaStep] = []
    rows: list[list[str]] = []

    with open(file_path, "r", errors="ignore") as f:
        for line_num, line in enumerate(f, start=1):
            line = line.rstrip("\r\n")

            if line.startswith(STEP_PREFIX):
                if HOLD_MARKER in line:
                    continue
                start, end = _parse_step_line(line, line_num)
                if start == 0:
                    continue
                steps.append((start, end))
                continue

            if not line.startswith(DATA_PREFIX):
                continue

            rows.append(_parse_data_line(line, line_num))

            index = None
            for i, (_, end) in enumerate(steps, start=1):
                if line_num == end:
                    index = i
            if index is not None:
                result.append(DtaStep(index=index, df=_to_frame(rows)))
                rows = []

    if rows:
        logger.debug("dropping %d rows after the last step in %s", len(rows), file_path)
    return result


def dta_base(file_path: str | Path) -> str:
    """Output base name: the input path without its extension."""
    return str(Path(file_path).with_suffix(""))


def dta_step_path(base: str, index: int) -> Path:
    return Path(f"{base}_{index}.csv")
