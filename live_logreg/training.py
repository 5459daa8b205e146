from __future__ import annotations

"""
Fixed-budget batch gradient descent that periodically renders the decision
boundary into a FrameMailbox and reports progress.
"""

import enum
import threading
from dataclasses import dataclass, field
from typing import Callable

import numpy as np

from .constants import (
    EPOCHS,
    LR_BIAS,
    LR_WEIGHTS,
    PLOT_X_RANGE,
    REPORT_INTERVAL,
    SPLIT_SEED,
    TRAIN_FRACTION,
)
from .data_prep import Split
from .logreg import ModelParameters, accuracy, gradient, predict
from .mailbox import FrameMailbox

BoundaryLine = tuple[np.ndarray, np.ndarray]


@dataclass(frozen=True)
class TrainingConfig:
    epochs: int = EPOCHS
    lr_weights: float = LR_WEIGHTS
    lr_bias: float = LR_BIAS
    report_interval: int = REPORT_INTERVAL
    train_fraction: float = TRAIN_FRACTION
    seed: int = SPLIT_SEED
    x_range: tuple[float, float] = PLOT_X_RANGE

    def __post_init__(self):
        if self.epochs < 0:
            raise ValueError(f"epochs must be >= 0, got {self.epochs}")
        if self.report_interval < 1:
            raise ValueError(f"report_interval must be >= 1, got {self.report_interval}")
        if self.lr_weights < 0 or self.lr_bias < 0:
            raise ValueError("Learning rates must be non-negative.")
        if not 0.0 <= self.train_fraction <= 1.0:
            raise ValueError(f"train_fraction must be within [0, 1], got {self.train_fraction}")
        if not self.x_range[0] < self.x_range[1]:
            raise ValueError(f"Invalid x_range: {self.x_range}")


class TrainerState(enum.Enum):
    INITIALIZED = "initialized"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass
class ProgressReport:
    iteration: int
    dw: np.ndarray
    db: float
    w: np.ndarray
    b: float
    train_accuracy: float


@dataclass
class TrainingResult:
    params: ModelParameters
    test_accuracy: float | None
    reports: list[ProgressReport] = field(default_factory=list)


def decision_boundary(
    params: ModelParameters, x_range: tuple[float, float] = PLOT_X_RANGE
) -> BoundaryLine | None:
    """
    Endpoints of w0*x1 + w1*x2 + b = 0 over x_range, solved for x2.
    None when the line is vertical (w1 == 0) or not finite.
    """
    w0, w1 = float(params.w[0]), float(params.w[1])
    if w1 == 0.0:
        return None
    xs = np.array(x_range, dtype=float)
    with np.errstate(over="ignore", invalid="ignore"):
        ys = -(w0 * xs + params.b) / w1
    if not np.all(np.isfinite(ys)):
        return None
    return xs, ys


def format_report(report: ProgressReport) -> str:
    return (
        f"Epoch #{report.iteration}\n"
        f"dw: {np.array2string(report.dw, precision=4)}, db: {report.db:.4f}\n"
        f"w: {np.array2string(report.w, precision=4)}, b: {report.b:.4f}\n"
        f"accuracy: {report.train_accuracy:.2f}"
    )


class Trainer:
    """
    Owns the model parameters for one pass over a fixed iteration budget.

    Every report_interval iterations the current boundary is handed to
    render_frame and the result published to the mailbox; progress lines go
    to report. The trainer never reads from the mailbox.
    """

    def __init__(
        self,
        split: Split,
        config: TrainingConfig | None = None,
        mailbox: FrameMailbox | None = None,
        render_frame: Callable[[BoundaryLine], np.ndarray] | None = None,
        report: Callable[[str], None] | None = print,
    ):
        if len(split.x_train) == 0:
            raise ValueError("Training set is empty; nothing to fit.")
        self.split = split
        self.config = config or TrainingConfig()
        self.mailbox = mailbox
        self.render_frame = render_frame
        self.report = report
        self.params = ModelParameters.zeros(split.x_train.shape[1])
        self.state = TrainerState.INITIALIZED
        self.iteration = -1
        self.frames_published = 0
        self.frames_skipped = 0

    def _step(self) -> tuple[np.ndarray, float]:
        """One gradient-descent update on the full training set."""
        x_train, y_train = self.split.x_train, self.split.y_train
        preds = predict(x_train, self.params.w, self.params.b)
        dw, db = gradient(x_train, y_train, preds)
        self.params.w = self.params.w - self.config.lr_weights * dw
        self.params.b = self.params.b - self.config.lr_bias * db
        return dw, db

    def run(self) -> TrainingResult:
        if self.state is not TrainerState.INITIALIZED:
            raise RuntimeError(f"Trainer cannot run from state {self.state.value}.")
        self.state = TrainerState.RUNNING
        try:
            result = self._train()
        except Exception:
            self.state = TrainerState.FAILED
            raise
        self.state = TrainerState.COMPLETED
        return result

    def _train(self) -> TrainingResult:
        reports = []
        for i in range(self.config.epochs + 1):
            self.iteration = i
            dw, db = self._step()
            if i % self.config.report_interval == 0:
                self._publish_frame()
                progress = ProgressReport(
                    iteration=i,
                    dw=dw,
                    db=db,
                    w=self.params.w.copy(),
                    b=float(self.params.b),
                    train_accuracy=accuracy(
                        self.split.x_train, self.split.y_train, self.params.w, self.params.b
                    ),
                )
                reports.append(progress)
                self._emit(format_report(progress))

        test_accuracy = self.evaluate()
        if test_accuracy is None:
            self._emit("Accuracy: n/a (empty test split)")
        else:
            self._emit(f"Accuracy: {test_accuracy:.2f}")

        return TrainingResult(params=self.params.copy(), test_accuracy=test_accuracy, reports=reports)

    def evaluate(self) -> float | None:
        """Held-out accuracy in percent, or None when the test split is empty."""
        if len(self.split.x_test) == 0:
            return None
        return accuracy(self.split.x_test, self.split.y_test, self.params.w, self.params.b)

    def _publish_frame(self):
        if self.mailbox is None or self.render_frame is None:
            return
        line = decision_boundary(self.params, self.config.x_range)
        if line is None:
            self.frames_skipped += 1
            return
        self.mailbox.publish(self.render_frame(line))
        self.frames_published += 1

    def _emit(self, message: str):
        if self.report is not None:
            self.report(message)


class TrainingThread(threading.Thread):
    """
    Runs a Trainer in the background and keeps its outcome, so the thread
    that owns the window can surface a failed run after joining.
    """

    def __init__(self, trainer: Trainer):
        super().__init__(name="trainer", daemon=True)
        self.trainer = trainer
        self.result: TrainingResult | None = None
        self.error: Exception | None = None

    def run(self):
        try:
            self.result = self.trainer.run()
        except Exception as err:
            self.error = err

    def join_result(self, timeout: float | None = None) -> TrainingResult:
        """Wait for the run; re-raise whatever stopped it."""
        self.join(timeout)
        if self.is_alive():
            raise TimeoutError("Training is still running.")
        if self.error is not None:
            raise self.error
        return self.result
