"""Tests for logging module."""

from __future__ import annotations

import logging
from pathlib import Path

from loguru import logger

from ffu_stats.logging import InterceptHandler, get_logger, setup_logging


class TestSetupLogging:
    """Tests for setup_logging function."""

    def test_setup_logging_creates_directory(self, tmp_path: Path) -> None:
        """setup_logging should create log directory if it doesn't exist."""
        log_dir = tmp_path / "nested" / "logs"
        setup_logging(log_dir=str(log_dir))

        assert log_dir.exists()

    def test_setup_logging_accepts_path_object(self, tmp_path: Path) -> None:
        log_dir = tmp_path / "logs"
        setup_logging(level="DEBUG", log_dir=log_dir)

        assert log_dir.exists()

    def test_setup_logging_all_parameters(self, tmp_path: Path) -> None:
        """setup_logging should accept all custom parameters."""
        log_dir = tmp_path / "logs"
        setup_logging(
            level="WARNING",
            log_dir=str(log_dir),
            rotation="10 MB",
            retention="14 days",
            serialize=False,
        )

        assert log_dir.exists()

    def test_messages_reach_the_log_file(self, tmp_path: Path) -> None:
        log_dir = tmp_path / "logs"
        setup_logging(level="INFO", log_dir=log_dir, serialize=False)

        get_logger("ffu_stats.test").info("Aggregated {} franchises", 42)
        logger.complete()

        contents = "".join(p.read_text() for p in log_dir.glob("ffu_stats_*.log"))
        assert "Aggregated 42 franchises" in contents

    def test_stdlib_logging_is_intercepted(self, tmp_path: Path) -> None:
        log_dir = tmp_path / "logs"
        setup_logging(level="INFO", log_dir=log_dir, serialize=False)

        assert any(isinstance(h, InterceptHandler) for h in logging.getLogger().handlers)

        logging.getLogger("third.party").warning("stdlib says hello")
        logger.complete()

        contents = "".join(p.read_text() for p in log_dir.glob("ffu_stats_*.log"))
        assert "stdlib says hello" in contents


class TestGetLogger:
    """Tests for get_logger function."""

    def test_get_logger_returns_logger(self) -> None:
        """get_logger should return a logger instance."""
        log = get_logger(__name__)

        assert log is not None

    def test_get_logger_can_log_with_formatting(self, tmp_path: Path) -> None:
        """Logger should support brace-style formatting."""
        setup_logging(log_dir=str(tmp_path / "logs"))
        log = get_logger("test")

        # Should not raise
        log.info("Loaded {} {} with {} teams", "PREMIER", "2024", 12)


class TestLoggerExports:
    """Tests for module exports."""

    def test_logger_is_exported(self) -> None:
        """Base logger should be exported."""
        from ffu_stats.logging import logger as exported_logger

        assert exported_logger is logger

    def test_all_exports_available(self) -> None:
        from ffu_stats.logging import __all__

        assert "setup_logging" in __all__
        assert "get_logger" in __all__
        assert "logger" in __all__
