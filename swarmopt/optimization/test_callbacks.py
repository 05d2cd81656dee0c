# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import io
import logging
from pathlib import Path
import numpy as np
import swarmopt.common.typing as tp
from swarmopt.functions import corefuncs
from . import callbacks
from .config import Configuration
from .solver import SwarmSolver


def _make_solver(**kwargs: tp.Any) -> SwarmSolver:
    options = dict(goal=-1.0, max_steps=20, report_interval=5)
    options.update(kwargs)
    return SwarmSolver(Configuration(2, -1.0, 1.0, **options), random_state=12)


def test_progress_printer() -> None:
    stream = io.StringIO()
    printer = callbacks.ProgressPrinter(bar_width=10, stream=stream)
    solver = _make_solver()
    solver.register_callback("step", printer)
    solver.register_callback("finish", printer.finish)
    solver.minimize(corefuncs.sphere)
    text = stream.getvalue()
    assert text.count("\r") == 4
    assert "\r[#####-----]  50% | step 10/20 | w=" in text
    assert text.endswith("\n")
    assert "Goal achieved" not in text


def test_progress_printer_goal() -> None:
    stream = io.StringIO()
    printer = callbacks.ProgressPrinter(stream=stream)
    solver = _make_solver(goal=10.0)
    solver.register_callback("finish", printer.finish)
    solver.minimize(corefuncs.sphere)
    assert stream.getvalue().startswith("Goal achieved @ step 0 (error=")


def test_optimization_logger(caplog: tp.Any) -> None:
    logger = logging.getLogger("swarmopt.test")
    solver = _make_solver()
    solver.register_callback("step", callbacks.OptimizationLogger(logger=logger, log_level=logging.WARNING))
    with caplog.at_level(logging.WARNING, logger="swarmopt.test"):
        solver.minimize(corefuncs.sphere)
    messages = [record.getMessage() for record in caplog.records if record.name == "swarmopt.test"]
    assert len(messages) == 4
    assert messages[1].startswith("Step 5/20: inertia=")


def test_optimization_logger_interval(caplog: tp.Any) -> None:
    solver = _make_solver(report_interval=1)
    solver.register_callback("step", callbacks.OptimizationLogger(log_interval_seconds=3600.0))
    with caplog.at_level(logging.INFO, logger="swarmopt.optimization.callbacks"):
        solver.minimize(corefuncs.sphere)
    records = [record for record in caplog.records if record.name == "swarmopt.optimization.callbacks"]
    assert len(records) == 1


def test_history_recorder(tmp_path: Path) -> None:
    filepath = tmp_path / "history" / "logs.txt"
    recorder = callbacks.HistoryRecorder(record_swarm=True, filepath=filepath, append=False)
    solver = _make_solver()
    solver.register_callback("step", recorder)
    result = solver.minimize(corefuncs.sphere)
    assert [r["step"] for r in recorder.records] == [0, 5, 10, 15]
    assert len(recorder.records[0]["positions"]) == solver.config.swarm_size
    assert recorder.records[-1]["best_error"] >= result.best_error
    loaded = recorder.load()
    assert loaded == recorder.records
    # appending
    callbacks.HistoryRecorder(filepath=filepath)(_Snapshot())
    assert len(callbacks.HistoryRecorder(filepath=filepath).load()) == 5
    # deletion
    assert not callbacks.HistoryRecorder(filepath=filepath, append=False).load()


class _Snapshot:
    """Minimal stand-in exposing what observers read from a solver"""

    step = 12
    inertia = 0.5
    best_error = 1.0
    best_position = np.array([0.0, 1.0])
    swarm = None
