"""Parsers for reference tables and instrument exports."""

from .reflections import (
    open_reference_table,
    parse_reflection,
    read_reflections,
    reference_table_path,
)
from .ras import read_ras_file
from .dta import DtaStep, split_dta_steps


__all__ = [
    "open_reference_table",
    "parse_reflection",
    "read_reflections",
    "reference_table_path",
    "read_ras_file",
    "DtaStep",
    "split_dta_steps",
]
