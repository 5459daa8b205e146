from __future__ import annotations

"""
Held-out classification summary printed after training.
"""

import numpy as np
from sklearn import metrics


def compute_classification_metrics(y_true, probs: np.ndarray, threshold: float = 0.5):
    """Standard binary metrics given probabilities; probs == threshold count as positive."""
    preds = (np.asarray(probs) >= threshold).astype(int)
    y_int = np.asarray(y_true).astype(int)
    precision, recall, f1, _ = metrics.precision_recall_fscore_support(
        y_int, preds, average="binary", zero_division=0
    )
    return {
        "accuracy": metrics.accuracy_score(y_int, preds),
        "precision": precision,
        "recall": recall,
        "f1": f1,
        "confusion_matrix": metrics.confusion_matrix(y_int, preds, labels=[0, 1]),
    }
