import io

import pytest

from qc_core.types import StructureMode, XpeakConfig


@pytest.fixture
def table_dir(tmp_path):
    """Reference table directory holding a small AC11.csv and QC.csv."""
    d = tmp_path / "qc"
    d.mkdir()
    (d / "AC11.csv").write_text("#h,k,l\n1,0,0\n1,1,0\n")
    (d / "QC.csv").write_text("# h,k,l,m,n,o\n0,0,0,0,0,0\n1,0,0,0,0,0\n")
    return d


@pytest.fixture
def ac_config(table_dir):
    return XpeakConfig(lattice_constant=4.0, wavelength=1.540593, mode=StructureMode.AC, table_dir=table_dir)


@pytest.fixture
def qc_config(table_dir):
    return XpeakConfig(lattice_constant=4.0, wavelength=1.540593, mode=StructureMode.QC, table_dir=table_dir)


@pytest.fixture
def operator():
    """Build an operator input stream from lines."""

    def _make(*lines: str, eof_newline: bool = True) -> io.StringIO:
        text = "\n".join(lines)
        if eof_newline and lines:
            text += "\n"
        return io.StringIO(text)

    return _make


HEATING = [400.0 + 10 * i for i in range(57)]  # 400 .. 960
COOLING = list(reversed(HEATING))


def _dta_lines(signal: float = 1.0) -> list[str]:
    sweeps = [HEATING, COOLING, HEATING, COOLING]
    header = ["#FILE\tsample"]
    n_header = len(header) + 6
    step_lines = []
    data = []
    line = n_header + 1
    for sweep in sweeps:
        start = line
        for t in sweep:
            data.append(f"#GD\t{len(data)}\t{t:.1f}\t{len(data) * 6}\t{signal:.3f}")
            line += 1
        step_lines.append((start, line - 1))

    header.append("#HD\tHEATING\t0\t0")
    header.append("#HD\tHOLD\t1\t2")
    for i, (start, end) in enumerate(step_lines):
        name = "HEATING" if i % 2 == 0 else "COOLING"
        header.append(f"#HD\t{name}\t{start}\t{end}")
    return header + data


@pytest.fixture
def dta_log(tmp_path):
    path = tmp_path / "run1.ASC"
    path.write_text("\n".join(_dta_lines()) + "\n")
    return path


@pytest.fixture
def ras_scan(tmp_path):
    path = tmp_path / "scan.ras"
    path.write_text(
        "*RAS_DATA_START\n"
        "*RAS_HEADER_START\n"
        '*MEAS_SCAN_UNIT_X "deg"\n'
        "*RAS_HEADER_END\n"
        "*RAS_INT_START\n"
        "10.0000 120.0 1.0000\n"
        "10.0200 131.5 1.0000\n"
        "# comment\n"
        "10.0400 140.0 1.0000\n"
        "*RAS_INT_END\n"
        "*RAS_DATA_END\n"
    )
    return path
