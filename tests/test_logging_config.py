# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Tests for the structlog and stdlib logging bridge."""

from __future__ import annotations

import json
import logging
import sys

import pytest
import structlog

from themescout.logging_config import configure


@pytest.fixture(autouse=True)
def _reset_logging():
    """Ensure clean logging state before/after each test."""
    root = logging.getLogger()
    old_handlers = root.handlers[:]
    old_level = root.level
    yield
    root.handlers = old_handlers
    root.setLevel(old_level)
    structlog.reset_defaults()


class TestConsoleRenderer:
    def test_single_stderr_handler(self):
        configure(json_output=False)
        root = logging.getLogger()
        assert len(root.handlers) == 1
        assert root.handlers[0].stream is sys.stderr

    def test_output_is_human_readable(self, capsys):
        configure(json_output=False)
        logging.getLogger("test.console").info("hello world")
        err = capsys.readouterr().err
        assert "hello world" in err
        assert not err.strip().startswith("{")

    def test_warning_level_shown(self, capsys):
        configure(json_output=False)
        logging.getLogger("test.level").warning("Error fetching t3: Timeout")
        err = capsys.readouterr().err.lower()
        assert "warn" in err
        assert "t3" in err


class TestJSONRenderer:
    def test_output_is_valid_json(self, capsys):
        configure(json_output=True)
        logging.getLogger("test.json").info("json test")
        line = capsys.readouterr().err.strip().splitlines()[-1]
        data = json.loads(line)
        assert data["event"] == "json test"
        assert data["level"] == "info"
        assert data["logger"] == "test.json"
        assert "timestamp" in data

    def test_percent_args_formatted(self, capsys):
        configure(json_output=True)
        logging.getLogger("test.json").info("%d/%d: Fetching %s", 1, 10, "ananke")
        data = json.loads(capsys.readouterr().err.strip().splitlines()[-1])
        assert data["event"] == "1/10: Fetching ananke"


class TestLevels:
    def test_default_info(self):
        configure()
        assert logging.getLogger().level == logging.INFO

    def test_debug(self):
        configure(level="debug")
        assert logging.getLogger().level == logging.DEBUG

    def test_unknown_level_falls_back_to_info(self):
        configure(level="chatty")
        assert logging.getLogger().level == logging.INFO

    def test_noisy_loggers_quieted(self):
        configure(level="DEBUG")
        assert logging.getLogger("asyncio").level == logging.WARNING
