from __future__ import annotations

"""
Linear scoring and the logistic-loss gradient used by the batch GD trainer.
"""

from dataclasses import dataclass

import numpy as np


@dataclass
class ModelParameters:
    """Weight vector (one entry per feature) and scalar bias."""

    w: np.ndarray
    b: float = 0.0

    @classmethod
    def zeros(cls, n_features: int) -> "ModelParameters":
        return cls(w=np.zeros(n_features), b=0.0)

    def copy(self) -> "ModelParameters":
        return ModelParameters(w=self.w.copy(), b=float(self.b))


def sigmoid(z):
    z = np.clip(z, -500, 500)
    return 1.0 / (1.0 + np.exp(-z))


def dot(x, w) -> float:
    """Dot product of two equally sized vectors."""
    x_arr = np.asarray(x, dtype=float)
    w_arr = np.asarray(w, dtype=float)
    if x_arr.shape != w_arr.shape:
        raise ValueError(f"Length mismatch: {x_arr.shape} vs {w_arr.shape}")
    return float(np.dot(x_arr, w_arr))


def score(x, w, b: float) -> float:
    """P(y=1) for a single feature vector."""
    return float(sigmoid(dot(x, w) + b))


def predict(X, w, b: float) -> np.ndarray:
    """Row-wise score; output order follows X."""
    X_arr = np.asarray(X, dtype=float)
    w_arr = np.asarray(w, dtype=float)
    if X_arr.size == 0:
        return np.zeros(0)
    if X_arr.ndim != 2 or X_arr.shape[1] != w_arr.shape[0]:
        raise ValueError(f"Cannot score rows of shape {X_arr.shape} with {w_arr.shape[0]} weights")
    return sigmoid(X_arr @ w_arr + b)


def gradient(X, y, p) -> tuple[np.ndarray, float]:
    """
    Average gradient of the binary cross-entropy w.r.t. (w, b), given the
    current predictions p for X.
    """
    X_arr = np.asarray(X, dtype=float)
    y_arr = np.asarray(y, dtype=float)
    p_arr = np.asarray(p, dtype=float)
    m = len(X_arr)
    if m == 0:
        raise ValueError("Cannot compute a gradient over an empty batch.")
    if len(y_arr) != m or len(p_arr) != m:
        raise ValueError(
            f"Batch size mismatch: {m} rows, {len(y_arr)} labels, {len(p_arr)} predictions"
        )

    error = p_arr - y_arr
    dw = (X_arr.T @ error) / m
    db = float(error.sum() / m)
    return dw, db


def accuracy(X, y, w, b: float) -> float:
    """
    Percentage of rows whose rounded score matches the label. A score of
    exactly 0.5 rounds up to 1.
    """
    y_arr = np.asarray(y, dtype=float)
    if len(y_arr) == 0:
        raise ValueError("Cannot compute accuracy over an empty batch.")
    probs = predict(X, w, b)
    if len(probs) != len(y_arr):
        raise ValueError(f"Batch size mismatch: {len(probs)} rows, {len(y_arr)} labels")
    preds = np.floor(probs + 0.5)
    return float(np.mean(preds == y_arr) * 100)
