# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import sys
import json
import time
import logging
import warnings
from pathlib import Path
import swarmopt.common.typing as tp

if tp.TYPE_CHECKING:
    from .solver import SwarmSolver

global_logger = logging.getLogger(__name__)

# -------------------------------------------------------------------------------------

class ProgressPrinter:
    """Printer to register as callback in a solver, drawing a progress bar
    updated in place on a single line of the terminal.

    Parameters
    ----------
    bar_width: int
        number of characters of the bar
    stream: file-like
        where to write (defaults to sys.stdout)

    Example
    -------

    .. code-block:: python

        printer = ProgressPrinter()
        solver.register_callback("step", printer)
        solver.register_callback("finish", printer.finish)
    """

    def __init__(self, bar_width: int = 28, stream: tp.Optional[tp.Any] = None) -> None:
        assert bar_width > 0
        self._bar_width = bar_width
        self._stream = stream
        self._used = False

    @property
    def stream(self) -> tp.Any:
        return sys.stdout if self._stream is None else self._stream

    def __call__(self, solver: "SwarmSolver") -> None:
        max_steps = solver.config.max_steps
        fraction = min(1.0, max(0.0, solver.step / max_steps)) if max_steps > 0 else 0.0
        filled = int(fraction * self._bar_width)
        bar = "#" * filled + "-" * (self._bar_width - filled)
        self.stream.write(
            f"\r[{bar}] {int(fraction * 100):3d}% | step {solver.step}/{max_steps} "
            f"| w={solver.inertia:.2f} | best={solver.best_error:.5e}"
        )
        self.stream.flush()
        self._used = True

    def finish(self, solver: "SwarmSolver") -> None:
        """Terminates the progress line and reports a reached goal"""
        if self._used:
            self.stream.write("\n")
            self._used = False
        if solver.status == "goal_reached":
            self.stream.write(f"Goal achieved @ step {solver.step} (error={solver.best_error:.3e}) :-)\n")
        self.stream.flush()

# -------------------------------------------------------------------------------------

class OptimizationLogger:
    """Logger to register as callback in a solver, for logging
    the progress regularly.

    Parameters
    ----------
    logger:
        given logger that callback will use to log
    log_level:
        log level that logger will write to
    log_interval_seconds:
        minimum number of seconds between two logs (0 logs at every call)
    """

    def __init__(
        self,
        *,
        logger: logging.Logger = global_logger,
        log_level: int = logging.INFO,
        log_interval_seconds: float = 0.0,
    ) -> None:
        assert log_interval_seconds >= 0
        self._logger = logger
        self._log_level = log_level
        self._log_interval_seconds = log_interval_seconds
        self._next_time = 0.0

    def __call__(self, solver: "SwarmSolver") -> None:
        if time.time() >= self._next_time:
            self._next_time = time.time() + self._log_interval_seconds
            self._logger.log(
                self._log_level,
                "Step %s/%s: inertia=%.4f, best error=%.6e",
                solver.step,
                solver.config.max_steps,
                solver.inertia,
                solver.best_error,
            )

# -------------------------------------------------------------------------------------

class HistoryRecorder:
    """Records the state of the run each time it is called, and optionally
    dumps it as json lines into a file.

    Parameters
    ----------
    record_swarm: bool
        whether to also record copies of positions, velocities and fitness of the particles
    filepath: str or pathlib.Path
        optional path of a file to dump data to (one json per line)
    append: bool
        whether to append the file (otherwise it replaces it)

    Example
    -------

    .. code-block:: python

        recorder = HistoryRecorder()
        solver.register_callback("step", recorder)
        solver.minimize(func)
        best_errors = [record["best_error"] for record in recorder.records]

    Note
    ----
    Arrays are converted to lists
    """

    def __init__(self, record_swarm: bool = False, filepath: tp.Optional[tp.Union[str, Path]] = None, append: bool = True) -> None:
        self.record_swarm = record_swarm
        self.records: tp.List[tp.Dict[str, tp.Any]] = []
        self._filepath = None if filepath is None else Path(filepath)
        if self._filepath is not None:
            if self._filepath.exists() and not append:
                self._filepath.unlink()
            self._filepath.parent.mkdir(exist_ok=True, parents=True)

    def __call__(self, solver: "SwarmSolver") -> None:
        data: tp.Dict[str, tp.Any] = {
            "step": solver.step,
            "inertia": solver.inertia,
            "best_error": solver.best_error,
            "best_position": solver.best_position.tolist(),
        }
        if self.record_swarm and solver.swarm is not None:
            swarm = solver.swarm
            data.update(
                positions=swarm.positions.tolist(),
                velocities=swarm.velocities.tolist(),
                fitness=swarm.fitness.tolist(),
                best_fitness=swarm.best_fitness.tolist(),
            )
        self.records.append(data)
        if self._filepath is not None:
            try:  # avoid bugging as much as possible
                with self._filepath.open("a") as f:
                    f.write(json.dumps(data) + "\n")
            except Exception as e:  # pylint: disable=broad-except
                warnings.warn(f"Failing to json data: {e}")

    def load(self) -> tp.List[tp.Dict[str, tp.Any]]:
        """Loads data from the log file"""
        data: tp.List[tp.Dict[str, tp.Any]] = []
        if self._filepath is not None and self._filepath.exists():
            with self._filepath.open("r") as f:
                for line in f.readlines():
                    data.append(json.loads(line))
        return data
