"""Tests for logging setup helpers."""

from __future__ import annotations

import logging

import structlog

from prospector.logging import _level_number, _renderer


class TestLevelNumber:
    def test_known_levels(self):
        assert _level_number("debug") == logging.DEBUG
        assert _level_number("WARNING") == logging.WARNING

    def test_unknown_level_falls_back_to_info(self):
        assert _level_number("chatty") == logging.INFO


class TestRenderer:
    def test_json(self):
        assert isinstance(_renderer("json"), structlog.processors.JSONRenderer)

    def test_console_default(self):
        assert isinstance(_renderer("console"), structlog.dev.ConsoleRenderer)
        assert isinstance(_renderer("plain"), structlog.dev.ConsoleRenderer)
