from __future__ import annotations

"""
Default hyperparameters and plot settings for the live training run.
"""

from pathlib import Path

DEFAULT_CSV_PATH = Path("data/exams1.csv")

EPOCHS = 2000
REPORT_INTERVAL = 100
LR_WEIGHTS = 0.5e-3
LR_BIAS = 0.7

TRAIN_FRACTION = 0.8
SPLIT_SEED = 10

# plotted range of the first feature; the boundary line spans it
PLOT_X_RANGE = (0.0, 100.0)

WINDOW_SIZE = (640, 480)
WINDOW_TITLE = "Logistic Regression"
CLASS_COLORS = ("red", "green")
