from __future__ import annotations

"""
Frame rendering (off-screen Agg canvas) and the window that polls the
mailbox on a timer.
"""

from pathlib import Path

import matplotlib
import matplotlib.pyplot as plt
import numpy as np
from matplotlib.animation import FuncAnimation
from matplotlib.backends import BackendFilter, backend_registry
from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.figure import Figure

from .constants import CLASS_COLORS, PLOT_X_RANGE, WINDOW_SIZE, WINDOW_TITLE
from .mailbox import FrameMailbox

DPI = 100


class BoundaryPlotter:
    """Scatter of the whole dataset plus an optional boundary line, as RGBA."""

    def __init__(
        self,
        X,
        y,
        x_range: tuple[float, float] = PLOT_X_RANGE,
        size: tuple[int, int] = WINDOW_SIZE,
    ):
        X_arr = np.asarray(X, dtype=float)
        y_arr = np.asarray(y, dtype=float)
        self.negatives = X_arr[y_arr == 0]
        self.positives = X_arr[y_arr == 1]
        self.x_range = x_range
        self.size = size

    def render(self, line: tuple[np.ndarray, np.ndarray] | None = None) -> np.ndarray:
        # a fresh Figure per frame keeps this usable from the training thread
        width, height = self.size
        fig = Figure(figsize=(width / DPI, height / DPI), dpi=DPI)
        canvas = FigureCanvasAgg(fig)
        ax = fig.add_subplot()
        ax.grid(True)
        ax.scatter(self.negatives[:, 0], self.negatives[:, 1], color=CLASS_COLORS[0], s=12)
        ax.scatter(self.positives[:, 0], self.positives[:, 1], color=CLASS_COLORS[1], s=12)
        if line is not None:
            xs, ys = line
            ax.plot(xs, ys, color="black", lw=1.5)
        ax.set_xlim(*self.x_range)
        ax.autoscale(enable=True, axis="y")
        fig.tight_layout()
        canvas.draw()

        frame = np.asarray(canvas.buffer_rgba()).copy()
        frame.flags.writeable = False
        return frame


def save_frame(frame: np.ndarray, path: Path | str) -> None:
    plt.imsave(path, frame)


def has_interactive_backend() -> bool:
    """False for file-only backends (Agg, PDF, inline) where show() returns at once."""
    backend = matplotlib.get_backend().lower()
    if "inline" in backend:
        return False
    return backend not in backend_registry.list_builtin(BackendFilter.NON_INTERACTIVE)


class LiveDisplay:
    """
    Shows the most recent frame taken from the mailbox. Each timer tick polls
    the mailbox once; when nothing new arrived the previous frame stays up.
    """

    def __init__(
        self,
        mailbox: FrameMailbox,
        title: str = WINDOW_TITLE,
        size: tuple[int, int] = WINDOW_SIZE,
        interval_ms: int = 1000 // 60,
    ):
        self.mailbox = mailbox
        self.title = title
        self.size = size
        self.interval_ms = interval_ms
        self.last_frame: np.ndarray | None = None
        self._image = None

    def tick(self, _frame_number=None):
        frame = self.mailbox.take()
        if frame is not None:
            self.last_frame = frame
            if self._image is not None:
                self._image.set_data(frame)
        return () if self._image is None else (self._image,)

    def show(self):
        """Open the window and block until it is closed."""
        width, height = self.size
        fig = plt.figure(figsize=(width / DPI, height / DPI), dpi=DPI)
        fig.canvas.manager.set_window_title(self.title)
        ax = fig.add_axes((0, 0, 1, 1))
        ax.set_axis_off()
        blank = np.full((height, width, 4), 255, dtype=np.uint8)
        self._image = ax.imshow(self.last_frame if self.last_frame is not None else blank)

        # keep a reference, otherwise the timer is garbage collected
        self._animation = FuncAnimation(
            fig, self.tick, interval=self.interval_ms, cache_frame_data=False, blit=False
        )
        plt.show()
        self._image = None
        plt.close(fig)
