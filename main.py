from __future__ import annotations

"""
CLI entrypoint: train logistic regression on a two-feature CSV and watch the
decision boundary move. Use --headless to train without opening a window.
"""

import argparse
import sys
from pathlib import Path

import matplotlib

from live_logreg import (
    FrameMailbox,
    Trainer,
    TrainingConfig,
    TrainingThread,
    compute_classification_metrics,
    load_dataset,
    predict,
    split_dataset,
)
from live_logreg.constants import (
    DEFAULT_CSV_PATH,
    EPOCHS,
    LR_BIAS,
    LR_WEIGHTS,
    PLOT_X_RANGE,
    REPORT_INTERVAL,
    SPLIT_SEED,
    TRAIN_FRACTION,
)
from live_logreg.plotting import (
    BoundaryPlotter,
    LiveDisplay,
    has_interactive_backend,
    save_frame,
)


def print_metrics(label: str, metrics: dict):
    """Nicely format the metric dict produced by compute_classification_metrics."""
    cm = metrics["confusion_matrix"]
    print(
        f"[{label}] Acc {metrics['accuracy']:.3f} | "
        f"Prec {metrics['precision']:.3f} | Rec {metrics['recall']:.3f} | "
        f"F1 {metrics['f1']:.3f}"
    )
    print(f"    Confusion matrix [[TN, FP], [FN, TP]]: {cm.tolist()}")


def build_arg_parser():
    """CLI parser with knobs for the split, learning rates and display."""
    parser = argparse.ArgumentParser(
        description="Train logistic regression with batch GD and plot the decision boundary live."
    )
    parser.add_argument("--csv-path", type=Path, default=DEFAULT_CSV_PATH)
    parser.add_argument(
        "--epochs", type=int, default=EPOCHS, help="Last iteration index (iterations 0..epochs run)."
    )
    parser.add_argument("--lr-weights", type=float, default=LR_WEIGHTS)
    parser.add_argument("--lr-bias", type=float, default=LR_BIAS)
    parser.add_argument(
        "--report-interval",
        type=int,
        default=REPORT_INTERVAL,
        help="Render a frame and print progress every N iterations.",
    )
    parser.add_argument("--train-fraction", type=float, default=TRAIN_FRACTION)
    parser.add_argument("--seed", type=int, default=SPLIT_SEED, help="Seed for the train/test split.")
    parser.add_argument("--x-min", type=float, default=PLOT_X_RANGE[0])
    parser.add_argument("--x-max", type=float, default=PLOT_X_RANGE[1])
    parser.add_argument(
        "--headless", action="store_true", help="Do not open a window; train in the foreground."
    )
    parser.add_argument(
        "--save-frame", type=Path, default=None, help="Write the last rendered frame to this PNG."
    )
    return parser


def build_config(args: argparse.Namespace) -> TrainingConfig:
    return TrainingConfig(
        epochs=args.epochs,
        lr_weights=args.lr_weights,
        lr_bias=args.lr_bias,
        report_interval=args.report_interval,
        train_fraction=args.train_fraction,
        seed=args.seed,
        x_range=(args.x_min, args.x_max),
    )


def setup(args: argparse.Namespace):
    """Load, split and wire up the trainer. Any failure here is fatal."""
    config = build_config(args)
    X, y = load_dataset(args.csv_path)
    split = split_dataset(X, y, train_fraction=config.train_fraction, seed=config.seed)
    print(f"Loaded {len(X)} examples from {args.csv_path}")
    print(f"Train size: {len(split.x_train)}, Test size: {len(split.x_test)}")

    mailbox = FrameMailbox()
    render_frame = None
    # headless runs only need frames when the last one is saved
    if not args.headless or args.save_frame is not None:
        render_frame = BoundaryPlotter(X, y, x_range=config.x_range).render
    trainer = Trainer(split, config, mailbox=mailbox, render_frame=render_frame)
    return trainer, mailbox


def summarize(trainer: Trainer):
    split = trainer.split
    if len(split.y_test) == 0:
        return
    probs = predict(split.x_test, trainer.params.w, trainer.params.b)
    print_metrics("Held-out split", compute_classification_metrics(split.y_test, probs))


def run_windowed(trainer: Trainer, mailbox: FrameMailbox):
    """
    Train on a background thread while the window polls the mailbox.
    Returns (finished, last_frame); finished is False when the window was
    closed before training ended.
    """
    display = LiveDisplay(mailbox)
    worker = TrainingThread(trainer)
    worker.start()

    if has_interactive_backend():
        display.show()
        # the window governs process lifetime; an unfinished run is abandoned
        if worker.is_alive():
            print("Window closed before training finished.")
            return False, None
    else:
        print(
            f"warning: matplotlib backend {matplotlib.get_backend()!r} cannot open a window; "
            "training without one",
            file=sys.stderr,
        )

    worker.join_result()
    display.tick()
    return True, display.last_frame


def main(args: argparse.Namespace | None = None):
    """Set up, then train either behind the window or in the foreground."""
    args = args or build_arg_parser().parse_args()

    try:
        trainer, mailbox = setup(args)
    except (OSError, ValueError) as err:
        print(f"error: {err}", file=sys.stderr)
        raise SystemExit(1) from err

    try:
        if args.headless:
            trainer.run()
            last_frame = mailbox.take()
        else:
            finished, last_frame = run_windowed(trainer, mailbox)
            if not finished:
                return
    except Exception as err:
        print(f"error: training failed: {err!r}", file=sys.stderr)
        raise SystemExit(1) from err

    summarize(trainer)
    if args.save_frame is not None and last_frame is not None:
        save_frame(last_frame, args.save_frame)
        print(f"Saved last frame to {args.save_frame}")


if __name__ == "__main__":
    main()
