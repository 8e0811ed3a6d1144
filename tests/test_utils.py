"""Tests for the logging helpers."""

from __future__ import annotations

import pytest

from calens.utils import configure_logging, log_debug, log_error, log_info


def test_log_helpers_mark_every_line(capsys: pytest.CaptureFixture[str]) -> None:
    configure_logging(debug=False)

    log_error("first problem\nsecond problem")
    log_info("")
    log_debug("hidden without --debug")

    lines = capsys.readouterr().err.splitlines()
    assert len(lines) == 3
    assert lines[0].endswith(" first problem")
    assert lines[1].endswith(" second problem")
    assert lines[0].split(" ")[0] == lines[1].split(" ")[0]
    assert "hidden" not in "".join(lines)


def test_configure_logging_debug_shows_debug_lines(capsys: pytest.CaptureFixture[str]) -> None:
    configure_logging(debug=True)
    configure_logging(debug=True)

    log_debug("listing releases")

    err = capsys.readouterr().err
    assert err.count("listing releases") == 1
