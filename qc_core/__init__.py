"""
qc_core - Quasicrystal analysis toolkit

Peak indexing for X-ray diffraction of quasicrystals (6-index) and
periodic crystals (3-index), plus converters for Rigaku RAS scans and
DTA ASC thermal-analysis logs. Used by the ``qc`` command-line tool.
"""

__version__ = "0.1.0"

# Types
from .types import (
    StructureMode,
    XpeakConfig,
    Reflection,
    PeakRecord,
    DEFAULT_WAVELENGTH,
)
from .errors import (
    QcError,
    ConfigurationError,
    TableNotFoundError,
    TableFormatError,
    GeometryDomainError,
    OutputWriteError,
    RasFormatError,
)

# Geometry
from .geometry import (
    squared_norm,
    crystal_norm,
    quasicrystal_norm,
    predicted_two_theta,
    inverse_lattice_constant,
    nelson_riley,
    format_float,
)

# Modes
from .modes import ModeSpec, select_mode

# Parsers
from .parsers import read_reflections, open_reference_table, read_ras_file, split_dta_steps

# Session
from .session import IndexingSession, SessionState, run_session

# Export
from .export import PeakTable, peak_table_path

# Conversion and code generation
from .convert import ras_to_csv, dta_to_csv
from .codegen import generate_dta_plot

__all__ = [
    "__version__",
    # Types
    "StructureMode",
    "XpeakConfig",
    "Reflection",
    "PeakRecord",
    "DEFAULT_WAVELENGTH",
    # Errors
    "QcError",
    "ConfigurationError",
    "TableNotFoundError",
    "TableFormatError",
    "GeometryDomainError",
    "OutputWriteError",
    "RasFormatError",
    # Geometry
    "squared_norm",
    "crystal_norm",
    "quasicrystal_norm",
    "predicted_two_theta",
    "inverse_lattice_constant",
    "nelson_riley",
    "format_float",
    # Modes
    "ModeSpec",
    "select_mode",
    # Parsers
    "read_reflections",
    "open_reference_table",
    "read_ras_file",
    "split_dta_steps",
    # Session
    "IndexingSession",
    "SessionState",
    "run_session",
    # Export
    "PeakTable",
    "peak_table_path",
    # Conversion
    "ras_to_csv",
    "dta_to_csv",
    "generate_dta_plot",
]
