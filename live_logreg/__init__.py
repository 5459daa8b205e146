"""
Binary logistic regression on two features, trained with batch gradient
descent while a window shows the evolving decision boundary.

The training loop hands rendered frames to the display through a
single-slot FrameMailbox; see main.py for the entry point.
"""

from .data_prep import DatasetError, Example, Split, load_dataset, read_examples, split_dataset
from .logreg import ModelParameters, accuracy, dot, gradient, predict, score, sigmoid
from .mailbox import FrameMailbox
from .metrics import compute_classification_metrics
from .training import (
    ProgressReport,
    Trainer,
    TrainerState,
    TrainingConfig,
    TrainingResult,
    TrainingThread,
    decision_boundary,
    format_report,
)

__all__ = [
    "DatasetError",
    "Example",
    "Split",
    "load_dataset",
    "read_examples",
    "split_dataset",
    "ModelParameters",
    "accuracy",
    "dot",
    "gradient",
    "predict",
    "score",
    "sigmoid",
    "FrameMailbox",
    "compute_classification_metrics",
    "ProgressReport",
    "Trainer",
    "TrainerState",
    "TrainingConfig",
    "TrainingResult",
    "TrainingThread",
    "decision_boundary",
    "format_report",
]
