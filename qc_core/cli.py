"""Command-line interface: ``qc xpeak | xcsv | dta``."""

import argparse
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from . import __version__
from .codegen import DEFAULT_TEMP_RANGE
from .convert import dta_to_csv, ras_to_csv
from .errors import QcError
from .export import peak_table_path
from .parsers.reflections import open_reference_table
from .session import run_session
from .types import DEFAULT_WAVELENGTH, StructureMode, XpeakConfig, default_table_dir

logger = logging.getLogger(__name__)

err_console = Console(stderr=True)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        format="%(message)s",
        level=logging.WARNING,
        handlers=[RichHandler(console=err_console, show_path=False, show_time=False)],
        force=True,
    )
    logging.getLogger("qc_core").setLevel(logging.DEBUG if verbose else logging.WARNING)


def _cmd_xpeak(ns: argparse.Namespace, console: Console) -> int:
    config = XpeakConfig(
        lattice_constant=ns.lc,
        wavelength=ns.wl,
        mode=StructureMode.from_flag(ns.ac),
        table_dir=ns.table_dir if ns.table_dir is not None else default_table_dir(),
    )
    logger.debug("xpeak config: %s", config)

    reflections = open_reference_table(config)
    table = run_session(config, reflections, stdin=sys.stdin, stdout=sys.stdout)
    out = table.write_csv(peak_table_path(ns.input))
    console.print(f"\n[green]Saved {len(table)} peaks →[/] {escape(str(out))}")
    return 0


def _cmd_xcsv(ns: argparse.Namespace, console: Console) -> int:
    out = ras_to_csv(ns.input)
    console.print(f"[green]Saved →[/] {escape(str(out))}")
    return 0


def _cmd_dta(ns: argparse.Namespace, console: Console) -> int:
    lo, hi = ns.range
    if not lo < hi:
        raise QcError(f"invalid temperature range: {lo} .. {hi}")
    for path in dta_to_csv(ns.input, (lo, hi)):
        console.print(f"[green]Saved →[/] {escape(str(path))}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser("qc", description="Quasicrystal analysis CLI tools")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    p.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    sub = p.add_subparsers(dest="command", required=True)

    xp = sub.add_parser("xpeak", help="XRD peak search")
    xp.add_argument("input", help="measurement file; <stem>_peak.csv is written beside it")
    xp.add_argument("-l", "--lc", type=float, required=True, help="lattice constant (Å)")
    xp.add_argument("-w", "--wl", type=float, default=DEFAULT_WAVELENGTH, help="wave length (Å)")
    xp.add_argument(
        "-a", "--ac", action="store_true", help='structure of peak search "AC11" (default QC)'
    )
    xp.add_argument(
        "--table-dir", type=Path, default=None, help="directory holding QC.csv / AC11.csv (default ~/qc)"
    )
    xp.set_defaults(func=_cmd_xpeak)

    xc = sub.add_parser("xcsv", help="RAS to CSV converter")
    xc.add_argument("input", help=".ras file")
    xc.set_defaults(func=_cmd_xcsv)

    dt = sub.add_parser("dta", help="Make csv and plt file from DTA ASC file")
    dt.add_argument("input", help="DTA .ASC file")
    dt.add_argument(
        "-r",
        "--range",
        type=float,
        nargs=2,
        metavar=("MIN", "MAX"),
        default=list(DEFAULT_TEMP_RANGE),
        help="range of Temp.",
    )
    dt.set_defaults(func=_cmd_dta)

    return p


def main(argv=None) -> int:
    ns = build_parser().parse_args(argv)
    _configure_logging(ns.verbose)
    console = Console()

    try:
        return ns.func(ns, console)
    except (QcError, OSError, ValueError) as e:
        err_console.print(f"[red]error:[/] {escape(str(e))}")
        return 1


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
