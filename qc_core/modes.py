"""Per-mode settings for crystal (AC) and quasicrystal (QC) indexing."""

from dataclasses import dataclass
from typing import Callable

from .geometry import crystal_norm, quasicrystal_norm
from .types import (
    CRYSTAL_HEADER,
    CRYSTAL_INDEX_COLUMNS,
    QUASICRYSTAL_HEADER,
    QUASICRYSTAL_INDEX_COLUMNS,
    StructureMode,
    XpeakConfig,
)


@dataclass(frozen=True)
class ModeSpec:
    """Everything that differs between the two indexing conventions."""

    mode: StructureMode
    table_name: str  # Reference table file name
    index_columns: tuple[str, ...]
    header: tuple[str, ...]
    norm: Callable[..., float]

    @property
    def arity(self) -> int:
        return len(self.index_columns)


MODE_SPECS = {
    StructureMode.QC: ModeSpec(
        mode=StructureMode.QC,
        table_name="QC.csv",
        index_columns=QUASICRYSTAL_INDEX_COLUMNS,
        header=QUASICRYSTAL_HEADER,
        norm=quasicrystal_norm,
    ),
    StructureMode.AC: ModeSpec(
        mode=StructureMode.AC,
        table_name="AC11.csv",
        index_columns=CRYSTAL_INDEX_COLUMNS,
        header=CRYSTAL_HEADER,
        norm=crystal_norm,
    ),
}


def mode_spec(mode: StructureMode) -> ModeSpec:
    """Look up the settings for a structure mode."""
    return MODE_SPECS[mode]


def select_mode(config: XpeakConfig) -> ModeSpec:
    """Settings for the mode declared in ``config``."""
    return mode_spec(config.mode)
