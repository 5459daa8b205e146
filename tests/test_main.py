import pathlib
import threading

import numpy as np
import pytest

import main
from live_logreg import plotting

DATA_PATH = pathlib.Path(__file__).resolve().parent.parent / "data" / "exams1.csv"


def _args(*extra):
    return main.build_arg_parser().parse_args(["--csv-path", str(DATA_PATH), *extra])


def test_parser_defaults_match_reference_run():
    args = main.build_arg_parser().parse_args([])
    config = main.build_config(args)
    assert config.epochs == 2000
    assert config.report_interval == 100
    assert config.lr_weights == 0.5e-3
    assert config.lr_bias == 0.7
    assert config.x_range == (0.0, 100.0)
    assert not args.headless


def test_headless_run_prints_progress_and_saves_frame(tmp_path, capsys):
    out_path = tmp_path / "last.png"
    main.main(_args("--headless", "--epochs", "200", "--report-interval", "100", "--save-frame", str(out_path)))

    out = capsys.readouterr().out
    assert "Train size: 80, Test size: 20" in out
    assert out.count("Epoch #") == 3
    assert "Accuracy:" in out
    assert "[Held-out split]" in out
    assert out_path.exists()


def test_missing_csv_exits_before_training(tmp_path, capsys):
    args = main.build_arg_parser().parse_args(["--csv-path", str(tmp_path / "missing.csv"), "--headless"])
    with pytest.raises(SystemExit) as excinfo:
        main.main(args)
    assert excinfo.value.code == 1
    captured = capsys.readouterr()
    assert "error:" in captured.err
    assert "Epoch #" not in captured.out


def test_invalid_config_exits(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main.main(_args("--headless", "--report-interval", "0"))
    assert excinfo.value.code == 1


def test_empty_training_split_exits(capsys):
    with pytest.raises(SystemExit):
        main.main(_args("--headless", "--train-fraction", "0"))


def test_windowed_run_without_gui_backend_still_trains(tmp_path, capsys):
    out_path = tmp_path / "last.png"
    main.main(_args("--epochs", "200", "--report-interval", "100", "--save-frame", str(out_path)))

    captured = capsys.readouterr()
    assert "cannot open a window" in captured.err
    assert captured.out.count("Epoch #") == 3
    assert "Accuracy:" in captured.out
    assert "[Held-out split]" in captured.out
    assert out_path.exists()


def _wait_for_trainer():
    for thread in threading.enumerate():
        if thread.name == "trainer":
            thread.join(timeout=30)


def test_windowed_run_summarizes_after_window_closes(monkeypatch, tmp_path, capsys):
    monkeypatch.setattr(main, "has_interactive_backend", lambda: True)
    # the window stays open until training is over
    monkeypatch.setattr(plotting.plt, "show", _wait_for_trainer)
    out_path = tmp_path / "last.png"

    main.main(_args("--epochs", "200", "--report-interval", "100", "--save-frame", str(out_path)))

    captured = capsys.readouterr()
    assert "cannot open a window" not in captured.err
    assert "Accuracy:" in captured.out
    assert "[Held-out split]" in captured.out
    assert out_path.exists()


def test_window_closed_early_abandons_training(monkeypatch, capsys):
    release = threading.Event()
    rendering = threading.Event()

    def slow_render(self, line=None):
        rendering.set()
        release.wait(timeout=30)
        return np.zeros((480, 640, 4), dtype=np.uint8)

    monkeypatch.setattr(main, "has_interactive_backend", lambda: True)
    monkeypatch.setattr(main.BoundaryPlotter, "render", slow_render)
    monkeypatch.setattr(plotting.plt, "show", lambda: rendering.wait(timeout=30))
    try:
        main.main(_args("--epochs", "200", "--report-interval", "100"))
    finally:
        release.set()
        _wait_for_trainer()

    out = capsys.readouterr().out
    assert "Window closed before training finished." in out
    assert "[Held-out split]" not in out


def test_training_failure_behind_window_exits_nonzero(monkeypatch, capsys):
    def broken_render(self, line=None):
        raise MemoryError("frame buffer exhausted")

    monkeypatch.setattr(main.BoundaryPlotter, "render", broken_render)
    with pytest.raises(SystemExit) as excinfo:
        main.main(_args("--epochs", "200", "--report-interval", "100"))

    assert excinfo.value.code == 1
    captured = capsys.readouterr()
    assert "training failed" in captured.err
    assert "[Held-out split]" not in captured.out


def test_headless_run_without_save_frame_renders_nothing(monkeypatch, capsys):
    def unexpected_render(self, line=None):
        raise AssertionError("headless run rendered a frame")

    monkeypatch.setattr(main.BoundaryPlotter, "render", unexpected_render)
    main.main(_args("--headless", "--epochs", "200", "--report-interval", "100"))

    assert "Accuracy:" in capsys.readouterr().out
