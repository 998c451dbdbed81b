"""gnuplot script generation for DTA heating/cooling curves."""

from .geometry import format_float
from .parsers.dta import DtaStep

DEFAULT_TEMP_RANGE = (400.0, 950.0)

# Heating curves are drawn shifted down by this many µV
HEATING_OFFSET = 50.0

# Arrow placement (°C)
HEATING_START_INSET = 50.0
COOLING_START_INSET = 20.0
ARROW_SPACING = 30.0
ARROW_LENGTH = 10.0
ARROW_HALF_WIDTH = 5.0

N_STEPS = 4

STEP_COLORS = ("#93003a", "#00429d", "#f4777f", "#73a2c6")

PLT_TEMPLATE = """PATH = "%PATH%"

set encoding utf8
set terminal pdfcairo enhanced font "Source Han Sans JP, 12" size 12cm, 9cm
set output PATH.".pdf"

# use csv file
set datafile separator ","

set xlabel "{/:Italic T} (℃)"
set ylabel "DTA (μV)"
set xrange [%XMIN%:%XMAX%]

%OBJ1%
set object 1 fc "%COLOR1%" fs noborder
%OBJ2%
set object 2 fc "%COLOR2%" fs noborder
%OBJ3%
set object 3 fc "%COLOR3%" fs noborder
%OBJ4%
set object 4 fc "%COLOR4%" fs noborder

plot PATH."_1.csv" using 1:($2 -50) title "1st Heating" with l lw 4 lc "%COLOR1%", \\
     PATH."_2.csv" title "1st Cooling" with l lw 4 lc "%COLOR2%", \\
     PATH."_3.csv" using 1:($2 -50) title "2nd Heating" with l lw 4 lc "%COLOR3%", \\
     PATH."_4.csv" title "2nd Cooling" with l lw 4 lc "%COLOR4%"



set terminal pngcairo enhanced font "Source Han Sans JP, 22" size 1000, 750
set output PATH.".png"
set key left

replot
"""


def _polygon(index: int, t: float, dta: float, dt: float, tip: float) -> str:
    return (
        f"set object {index} polygon from {t:f}, {dta:f} to {t:f}, {dta + ARROW_HALF_WIDTH:f} "
        f"to {t + dt:f}, {format_float(tip)} to {t:f}, {dta - ARROW_HALF_WIDTH:f} to {t:f}, {dta:f} front"
    )


def arrow_objects(steps: list[DtaStep], temp_range: tuple[float, float] = DEFAULT_TEMP_RANGE) -> list[str]:
    """One arrow polygon per step marking the direction of the sweep.

    Odd steps are heating, even steps cooling. A moving temperature marker
    starts near the low end for heating and near the high end for cooling
    and moves inwards after every arrow, so arrows do not overlap. Each
    arrow sits at the first point past the marker and points to the curve
    value ``ARROW_LENGTH`` degrees further along the sweep.

    Raises:
        ValueError: If fewer than four steps are given or a step never
            crosses its marker
    """
    if len(steps) < N_STEPS:
        raise ValueError(f"Need {N_STEPS} heating/cooling steps, found {len(steps)}")

    low = temp_range[0] + HEATING_START_INSET
    high = temp_range[1] - COOLING_START_INSET
    marker = low
    arrows = []

    for i, step in enumerate(steps[:N_STEPS], start=1):
        heating = i % 2 == 1
        offset = HEATING_OFFSET if heating else 0.0
        dt = ARROW_LENGTH if heating else -ARROW_LENGTH

        base = None
        for t, dta in zip(step.temperatures, step.signal):
            if (heating and t < marker) or (not heating and marker < t):
                continue

            if base is None:
                base = (t, dta - offset)
                marker += dt
                continue

            tip = dta - offset
            if heating:
                high -= ARROW_SPACING
                marker = high
            else:
                low += ARROW_SPACING
                marker = low
            arrows.append(_polygon(i, base[0], base[1], dt, tip))
            break
        else:
            raise ValueError(f"Could not place an arrow on step {i}")

    return arrows


def generate_dta_plot(
    base: str,
    steps: list[DtaStep],
    temp_range: tuple[float, float] = DEFAULT_TEMP_RANGE,
) -> str:
    """Generate a gnuplot script plotting ``<base>_1.csv`` .. ``<base>_4.csv``.

    Args:
        base: Path prefix of the step CSVs, also used for the .pdf/.png output
        steps: Parsed steps (first four are plotted)
        temp_range: (min, max) temperature axis in °C

    Returns:
        Script text
    """
    replacements = {
        "%PATH%": base,
        "%XMIN%": format_float(temp_range[0]),
        "%XMAX%": format_float(temp_range[1]),
    }
    for i, obj in enumerate(arrow_objects(steps, temp_range), start=1):
        replacements[f"%OBJ{i}%"] = obj
    for i, color in enumerate(STEP_COLORS, start=1):
        replacements[f"%COLOR{i}%"] = color

    script = PLT_TEMPLATE
    for key, value in replacements.items():
        script = script.replace(key, value)
    return script
