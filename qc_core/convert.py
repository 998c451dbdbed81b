"""File conversions: RAS scans and DTA logs to CSV (+ gnuplot script)."""

import logging
from pathlib import Path

from .codegen import DEFAULT_TEMP_RANGE, generate_dta_plot
from .errors import OutputWriteError
from .export import write_csv_atomic
from .parsers.dta import dta_base, dta_step_path, split_dta_steps
from .parsers.ras import read_ras_file

logger = logging.getLogger(__name__)


def ras_csv_path(file_path: str | Path) -> Path:
    """``sample.ras`` -> ``sample.csv`` in the same directory."""
    return Path(file_path).with_suffix(".csv")


def ras_to_csv(file_path: str | Path) -> Path:
    """Convert a .ras scan to CSV beside the input.

    Returns:
        Path of the written CSV
    """
    df = read_ras_file(file_path)
    out = write_csv_atomic(df, ras_csv_path(file_path))
    logger.info("wrote %d points to %s", df.height, out)
    return out


def dta_to_csv(
    file_path: str | Path,
    temp_range: tuple[float, float] = DEFAULT_TEMP_RANGE,
) -> list[Path]:
    """Split a DTA log into ``<base>_<i>.csv`` files and write ``<base>.plt``.

    Args:
        file_path: Path to the .ASC log
        temp_range: (min, max) temperature axis of the plot in °C

    Returns:
        Written paths, step CSVs first and the script last
    """
    base = dta_base(file_path)
    steps = split_dta_steps(file_path)
    logger.debug("found %d steps in %s", len(steps), file_path)

    written = []
    for step in steps:
        written.append(write_csv_atomic(step.df, dta_step_path(base, step.index)))

    script = generate_dta_plot(base, steps, temp_range)
    plt_path = Path(base + ".plt")
    try:
        plt_path.write_text(script, encoding="utf-8")
    except OSError as e:
        raise OutputWriteError(f"cannot write {plt_path}: {e.strerror or e}") from e
    written.append(plt_path)

    logger.info("wrote %d step files and %s", len(steps), plt_path)
    return written
