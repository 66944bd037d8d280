import json
import logging

import pytest

from reviewassign.logger import new_logger


def test_dev_logger_logs_debug():
    logger = new_logger("dev")
    assert logger.level == logging.DEBUG
    assert logger.isEnabledFor(logging.DEBUG)


def test_prod_logger_starts_at_info():
    logger = new_logger("prod")
    assert logger.level == logging.INFO
    assert not logger.isEnabledFor(logging.DEBUG)


@pytest.mark.parametrize("level", ["", "staging", "DEV"])
def test_unknown_level_falls_back_to_development(level):
    logger = new_logger(level)
    assert logger.level == logging.DEBUG


def test_prod_writes_json_lines(capsys):
    logger = new_logger("prod")
    logger.info("PR created", extra={"pr_id": "pr1"})
    line = capsys.readouterr().err.strip()
    entry = json.loads(line)
    assert entry["msg"] == "PR created"
    assert entry["level"] == "info"
    assert entry["pr_id"] == "pr1"


def test_prod_suppresses_debug(capsys):
    logger = new_logger("prod")
    logger.debug("hidden")
    assert capsys.readouterr().err == ""


def test_dev_output_is_coloured(capsys):
    logger = new_logger("dev")
    logger.warning("no reviewers available")
    out = capsys.readouterr().err
    assert "no reviewers available" in out
    assert "\x1b[" in out


def test_default_output_is_plain(capsys):
    logger = new_logger("other")
    logger.info("team added", extra={"team_name": "team1"})
    out = capsys.readouterr().err
    assert "\x1b[" not in out
    assert "team added" in out
    assert "team1" in out


def test_loggers_are_independent():
    first = new_logger("dev")
    second = new_logger("prod")
    assert first is not second
    assert first.level == logging.DEBUG
    assert len(first.handlers) == 1