"""
Tests for the headless command-line runner.
"""

import json

from phasetube.__main__ import build_parser, main, run
from phasetube.controller.frame_driver import FrameDriver


def test_parser_defaults():
    args = build_parser().parse_args([])
    assert args.ticks == 300
    assert args.config is None
    assert args.screenshot is None


def test_run_advances_driver():
    driver = FrameDriver()
    ms = run(7, driver)
    assert ms >= 0.0
    assert driver.tick_count == 7
    assert len(driver.trajectory) == 21


def test_main_success(tmp_path):
    path = tmp_path / "cfg.json"
    path.write_text(json.dumps({"max_points": 20}))
    assert main(["--ticks", "5", "--config", str(path), "--log-level", "WARNING"]) == 0


def test_main_writes_log_file(tmp_path):
    log_file = tmp_path / "run.log"
    assert main(["--ticks", "2", "--log-file", str(log_file)]) == 0
    assert "2 ticks" in log_file.read_text()


def test_main_bad_config(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps({"epsilon": 10}))
    assert main(["--ticks", "1", "--config", str(path), "--log-level", "ERROR"]) == 2
