"""Tests for the run_tests.py helper."""
import sys

import pytest

import run_tests


def test_all_groups_by_default():
    cmd = run_tests.build_command([])

    assert cmd[:3] == [sys.executable, "-m", "pytest"]
    assert "tests/" in cmd
    assert not any(arg.startswith("--cov") for arg in cmd)


def test_selected_groups_with_coverage_and_extra_args():
    cmd = run_tests.build_command(["loader", "cli"], coverage=True, extra=["-k", "precedence"])

    assert cmd[3:5] == ["tests/test_loader.py", "tests/test_cli.py"]
    assert "--cov=propfile" in cmd
    assert cmd[-2:] == ["-k", "precedence"]


def test_unknown_group_rejected():
    with pytest.raises(SystemExit):
        run_tests.main(["nope"])


def test_main_passes_extra_args_through(monkeypatch):
    calls = []

    class Completed:
        returncode = 0

    monkeypatch.setattr(run_tests.subprocess, "run", lambda cmd, check: calls.append(cmd) or Completed())

    code = run_tests.main(["parser", "--", "-x"])

    assert code == 0
    assert calls[0][3] == "tests/test_parser.py"
    assert calls[0][-1] == "-x"
