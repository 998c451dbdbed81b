"""Data types for qc_core."""

import enum
import os
from dataclasses import dataclass, field
from pathlib import Path

import pint

from .errors import ConfigurationError

# Initialize unit registry
ureg = pint.UnitRegistry()

# Cu K-alpha1 wavelength in angstrom
DEFAULT_WAVELENGTH = 1.540593

# Environment override for the reference table directory
TABLE_DIR_ENV = "QC_TABLE_DIR"


def convert_units(value: float, source_unit: str, target_unit: str) -> float:
    """Convert a value from source unit to target unit using pint.

    Args:
        value: The numeric value to convert
        source_unit: Unit string (e.g., "degree")
        target_unit: Target unit string (e.g., "radian")

    Returns:
        Converted value
    """
    if not source_unit or not target_unit or source_unit == target_unit:
        return value
    return (value * ureg(source_unit)).to(target_unit).magnitude


def default_table_dir() -> Path:
    """Directory holding the QC.csv / AC11.csv reference tables."""
    env = os.environ.get(TABLE_DIR_ENV)
    if env:
        return Path(env)
    return Path.home() / "qc"


class StructureMode(enum.Enum):
    """Indexing convention: 6-index quasicrystal or 3-index periodic crystal."""

    QC = "qc"
    AC = "ac"

    @classmethod
    def from_flag(cls, is_ac: bool) -> "StructureMode":
        return cls.AC if is_ac else cls.QC


@dataclass(frozen=True)
class XpeakConfig:
    """Settings for one peak indexing run.

    Built once from the command line and passed to every component.
    Lengths are in angstrom.
    """

    lattice_constant: float
    wavelength: float = DEFAULT_WAVELENGTH
    mode: StructureMode = StructureMode.QC
    table_dir: Path = field(default_factory=default_table_dir)

    def __post_init__(self):
        if self.lattice_constant is None:
            raise ConfigurationError("lattice constant is required")
        if not self.lattice_constant > 0:
            raise ConfigurationError(f"lattice constant must be positive, got {self.lattice_constant}")
        if not self.wavelength > 0:
            raise ConfigurationError(f"wavelength must be positive, got {self.wavelength}")
        if not isinstance(self.mode, StructureMode):
            raise ConfigurationError(f"unknown structure mode: {self.mode!r}")


@dataclass(frozen=True)
class Reflection:
    """Candidate reflection read from a reference table.

    Keeps the indices both as written in the table (for output) and as
    floats (for geometry).
    """

    labels: tuple[str, ...]
    values: tuple[float, ...]

    def __len__(self) -> int:
        return len(self.values)

    def describe(self) -> str:
        """Operator-facing form, e.g. ``(1, 0, 0)``."""
        return "(" + ", ".join(self.labels) + ")"


@dataclass(frozen=True)
class PeakRecord:
    """One recorded observation.

    ``nr`` and ``lattice_constant`` are None when the value could not be
    computed for the observed angle; they are written as empty fields.
    """

    labels: tuple[str, ...]
    two_theta: str
    nr: str | None
    lattice_constant: str | None

    def to_row(self) -> list[str | None]:
        return [*self.labels, self.two_theta, self.nr, self.lattice_constant]


# Index column names per mode
CRYSTAL_INDEX_COLUMNS = ("h", "k", "l")
QUASICRYSTAL_INDEX_COLUMNS = ("h", "k", "l", "m", "n", "o")

# Derived columns shared by both modes
PEAK_COLUMNS = ("2theta", "NR", "lattice constant")

CRYSTAL_HEADER = CRYSTAL_INDEX_COLUMNS + PEAK_COLUMNS
QUASICRYSTAL_HEADER = QUASICRYSTAL_INDEX_COLUMNS + PEAK_COLUMNS

# Column names of converted scan / thermal-analysis CSVs
RAS_COLUMNS = ("#2theta", "Intensity")
DTA_COLUMNS = ("#Temp.", "DTA")
