"""Interactive peak indexing session.

For every candidate reflection the predicted 2θ is shown and the operator
types the observed angle:

- a number records the peak with its NR term and lattice constant
- a blank line skips the reflection (no peak observed)
- anything else prints ``Retry:`` and asks again for the same reflection
- end of input finishes the session with the peaks recorded so far
"""

import enum
import logging
import math
import sys
from typing import Iterable, TextIO

from .errors import GeometryDomainError
from .export import PeakTable
from .geometry import format_float, inverse_lattice_constant, nelson_riley, predicted_two_theta
from .modes import select_mode
from .types import PeakRecord, Reflection, XpeakConfig

logger = logging.getLogger(__name__)

RETRY_PROMPT = "Retry: "


class SessionState(enum.Enum):
    AWAITING_REFLECTION = "awaiting_reflection"
    PREDICTING_ANGLE = "predicting_angle"
    AWAITING_OBSERVATION = "awaiting_observation"
    RECORDING = "recording"
    SKIPPING = "skipping"
    DONE = "done"


class _EndOfInput(Exception):
    """Operator closed the input stream."""


class IndexingSession:
    """Walks the reflection list and collects observed peaks.

    Args:
        config: Run configuration (mode, wavelength, lattice constant)
        reflections: Reflections in table order, typically from
            ``read_reflections``. Errors raised while iterating abort the run.
        stdin: Operator input, one observation per line (default sys.stdin)
        stdout: Operator-facing prompts (default sys.stdout)
    """

    def __init__(
        self,
        config: XpeakConfig,
        reflections: Iterable[Reflection],
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
    ):
        self.config = config
        self.spec = select_mode(config)
        self.reflections = reflections
        self.stdin = stdin if stdin is not None else sys.stdin
        self.stdout = stdout if stdout is not None else sys.stdout
        self.table = PeakTable(config.mode)
        self.state = SessionState.AWAITING_REFLECTION
        self.skipped = 0

    def run(self) -> PeakTable:
        """Run until the reflections or the operator input are exhausted."""
        try:
            for reflection in self.reflections:
                try:
                    self._step(reflection)
                except _EndOfInput:
                    logger.debug("end of input, stopping with %d peaks", len(self.table))
                    break
                self.state = SessionState.AWAITING_REFLECTION
        finally:
            close = getattr(self.reflections, "close", None)
            if close is not None:
                close()

        self.state = SessionState.DONE
        return self.table

    def _step(self, reflection: Reflection) -> None:
        if len(reflection) != self.spec.arity:
            raise ValueError(
                f"{self.spec.mode.name} mode needs {self.spec.arity} indices, got {reflection.describe()}"
            )

        self.state = SessionState.PREDICTING_ANGLE
        n = self.spec.norm(*reflection.values)
        self._write(self._prompt(reflection, n))

        self.state = SessionState.AWAITING_OBSERVATION
        observation = self._read_observation()
        if observation is None:
            self.state = SessionState.SKIPPING
            self.skipped += 1
            return

        self.state = SessionState.RECORDING
        text, theta = observation
        self.table.append(self._record(reflection, n, text, theta))

    def _prompt(self, reflection: Reflection, n: float) -> str:
        try:
            angle = f"{predicted_two_theta(n, self.config):.2f}"
        except GeometryDomainError as e:
            logger.warning("%s: no predicted angle (%s)", reflection.describe(), e)
            angle = "?"
        return f"{reflection.describe()} ~{angle}: "

    def _read_observation(self) -> tuple[str, float] | None:
        """Read lines until a blank line or a number; raise _EndOfInput at EOF.

        A whitespace-only line counts as blank and skips the reflection.
        """
        while True:
            line = self.stdin.readline()
            if not line:
                raise _EndOfInput()

            text = line.strip()
            if not text:
                return None

            try:
                theta = float(text)
            except ValueError:
                theta = math.nan
            if not math.isfinite(theta):
                self._write(RETRY_PROMPT)
                continue
            return text, theta

    def _record(self, reflection: Reflection, n: float, text: str, theta: float) -> PeakRecord:
        nr = self._derived(reflection, "NR", lambda: nelson_riley(theta))
        lc = self._derived(
            reflection, "lattice constant", lambda: inverse_lattice_constant(n, theta, self.config)
        )
        return PeakRecord(labels=reflection.labels, two_theta=text, nr=nr, lattice_constant=lc)

    def _derived(self, reflection, name, compute) -> str | None:
        try:
            return format_float(compute())
        except GeometryDomainError as e:
            logger.warning("%s: %s left empty (%s)", reflection.describe(), name, e)
            self._write(f"{name} not recorded: {e}\n")
            return None

    def _write(self, text: str) -> None:
        self.stdout.write(text)
        self.stdout.flush()


def run_session(
    config: XpeakConfig,
    reflections: Iterable[Reflection],
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
) -> PeakTable:
    """Run an indexing session and return the collected peak table."""
    return IndexingSession(config, reflections, stdin=stdin, stdout=stdout).run()
