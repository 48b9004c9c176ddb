"""Unit tests for logging and timing helpers."""

import logging

import pytest

from lgssm.utils.utils import measure_time, setup_logging


class TestMeasureTime:
    """Tests for the timing context manager."""

    def test_populates_elapsed_time(self):
        with measure_time() as metrics:
            sum(range(1000))

        assert metrics["elapsed_time"] >= 0.0


class TestSetupLogging:
    """Tests for logging configuration."""

    def test_accepts_level_name(self, monkeypatch):
        calls = {}
        monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.update(kwargs))

        setup_logging("debug")

        assert calls["level"] == logging.DEBUG


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
