"""Exception types for qc_core.

Library code raises these and lets them propagate; only the CLI turns
them into diagnostics and exit codes.
"""


class QcError(Exception):
    """Base class for all qc_core errors."""


class ConfigurationError(QcError, ValueError):
    """Invalid or missing configuration value."""


class TableNotFoundError(QcError, FileNotFoundError):
    """Reference reflection table is missing or unreadable."""


class TableFormatError(QcError, ValueError):
    """Reference reflection table has a malformed row."""


class GeometryDomainError(QcError, ArithmeticError):
    """A derived value is undefined for the given input (asin range, zero divisor)."""


class OutputWriteError(QcError, OSError):
    """Output file could not be written."""


class RasFormatError(QcError, ValueError):
    """RAS scan line does not hold an angle/intensity pair."""
