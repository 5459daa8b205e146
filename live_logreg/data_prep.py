from __future__ import annotations

"""
Data preparation: reading the two-feature CSV and the reproducible
train/test split.
"""

from pathlib import Path
from typing import NamedTuple

import numpy as np
import pandas as pd

from .constants import SPLIT_SEED, TRAIN_FRACTION


class DatasetError(ValueError):
    """Raised when the input data cannot be used for training."""


class Example(NamedTuple):
    x1: float
    x2: float
    label: float


class Split(NamedTuple):
    x_train: np.ndarray
    x_test: np.ndarray
    y_train: np.ndarray
    y_test: np.ndarray


def read_examples(csv_path: Path | str) -> list[Example]:
    """
    Parse a headerless CSV with feature-1, feature-2, label columns.
    Extra columns are ignored.
    """
    try:
        df = pd.read_csv(csv_path, header=None, dtype=str, skip_blank_lines=True)
    except pd.errors.EmptyDataError as err:
        raise DatasetError(f"{csv_path}: file is empty") from err
    except pd.errors.ParserError as err:
        raise DatasetError(f"{csv_path}: {err}") from err

    if df.shape[1] < 3:
        raise DatasetError(f"{csv_path}: expected at least 3 columns, got {df.shape[1]}")

    examples = []
    for row_number, row in enumerate(df.iloc[:, :3].itertuples(index=False), start=1):
        values = []
        for field in row:
            if pd.isna(field):
                raise DatasetError(f"{csv_path}, row {row_number}: missing field")
            try:
                value = float(field)
            except ValueError as err:
                raise DatasetError(
                    f"{csv_path}, row {row_number}: not a number: {field!r}"
                ) from err
            if not np.isfinite(value):
                raise DatasetError(f"{csv_path}, row {row_number}: non-finite value {field!r}")
            values.append(value)

        x1, x2, label = values
        if label not in (0.0, 1.0):
            raise DatasetError(f"{csv_path}, row {row_number}: label must be 0 or 1, got {label}")
        examples.append(Example(x1, x2, label))

    return examples


def load_dataset(csv_path: Path | str) -> tuple[np.ndarray, np.ndarray]:
    """Load the CSV as an (m, 2) feature matrix and an (m,) label vector."""
    examples = read_examples(csv_path)
    X = np.array([[ex.x1, ex.x2] for ex in examples], dtype=float).reshape(-1, 2)
    y = np.array([ex.label for ex in examples], dtype=float)
    return X, y


def split_dataset(
    X,
    y,
    train_fraction: float = TRAIN_FRACTION,
    seed: int = SPLIT_SEED,
) -> Split:
    """
    Reproducible train/test split.

    floor(len(X) * train_fraction) distinct indices are drawn from a seeded
    generator, redrawing whenever an index repeats. Drawn rows go to train,
    the rest to test; both keep the original row order.
    """
    X_arr = np.asarray(X, dtype=float)
    y_arr = np.asarray(y, dtype=float)
    n = len(X_arr)
    if n != len(y_arr):
        raise DatasetError(f"Feature/label count mismatch: {n} rows vs {len(y_arr)} labels")
    if n == 0:
        raise DatasetError("Cannot split an empty dataset.")
    if not 0.0 <= train_fraction <= 1.0:
        raise ValueError(f"train_fraction must be within [0, 1], got {train_fraction}")

    n_train = int(np.floor(n * train_fraction))
    rng = np.random.default_rng(seed)
    train_indices: set[int] = set()
    while len(train_indices) < n_train:
        train_indices.add(int(rng.integers(n)))

    train_mask = np.zeros(n, dtype=bool)
    train_mask[list(train_indices)] = True

    return Split(
        x_train=X_arr[train_mask],
        x_test=X_arr[~train_mask],
        y_train=y_arr[train_mask],
        y_test=y_arr[~train_mask],
    )
