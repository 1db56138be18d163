"""Tests for structured logging configuration."""

from __future__ import annotations

import json
import logging
import sys
from collections.abc import Iterator
from io import StringIO
from pathlib import Path

import pytest

from gemini_image_creator.logging_config import StructuredFormatter, configure_logging


@pytest.fixture(autouse=True)
def _restore_root_logger() -> Iterator[None]:
    """configure_logging replaces root handlers; put the originals back."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        if handler not in handlers:
            handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


class TestStructuredFormatter:
    """Tests for StructuredFormatter JSON output."""

    @pytest.fixture
    def formatter(self) -> StructuredFormatter:
        return StructuredFormatter()

    @pytest.fixture
    def log_record(self) -> logging.LogRecord:
        return logging.LogRecord(
            name="gemini_image_creator.dispatcher",
            level=logging.INFO,
            pathname="dispatcher.py",
            lineno=42,
            msg="Handling tools/list request",
            args=(),
            exc_info=None,
        )

    def test_basic_json_output(
        self, formatter: StructuredFormatter, log_record: logging.LogRecord
    ) -> None:
        """Output is valid JSON with required fields."""
        data = json.loads(formatter.format(log_record))

        assert "timestamp" in data
        assert data["level"] == "INFO"
        assert data["logger"] == "gemini_image_creator.dispatcher"
        assert data["message"] == "Handling tools/list request"
        assert data["category"] == "rpc"

    @pytest.mark.parametrize(
        ("logger_name", "category"),
        [
            ("gemini_image_creator.gemini", "gemini"),
            ("gemini_image_creator.tool_server", "tool"),
            ("gemini_image_creator.use_case", "tool"),
            ("gemini_image_creator.transport", "rpc"),
            ("gemini_image_creator.config", "system"),
            ("httpx", "http"),
            ("some.other.logger", "system"),
        ],
    )
    def test_category_detection(
        self, formatter: StructuredFormatter, logger_name: str, category: str
    ) -> None:
        record = logging.LogRecord(
            name=logger_name,
            level=logging.INFO,
            pathname="x.py",
            lineno=1,
            msg="Test",
            args=(),
            exc_info=None,
        )
        assert json.loads(formatter.format(record))["category"] == category

    def test_request_id_included(
        self, formatter: StructuredFormatter, log_record: logging.LogRecord
    ) -> None:
        log_record.request_id = 0  # type: ignore[attr-defined]
        data = json.loads(formatter.format(log_record))
        assert data["request_id"] == 0
        assert "extra" not in data

    def test_request_id_excluded_when_none(
        self, formatter: StructuredFormatter, log_record: logging.LogRecord
    ) -> None:
        log_record.request_id = None  # type: ignore[attr-defined]
        data = json.loads(formatter.format(log_record))
        assert "request_id" not in data

    def test_extra_fields(
        self, formatter: StructuredFormatter, log_record: logging.LogRecord
    ) -> None:
        """Serializable extras pass through; others are stringified."""
        log_record.method = "tools/call"  # type: ignore[attr-defined]
        log_record.custom_obj = object()  # type: ignore[attr-defined]
        data = json.loads(formatter.format(log_record))
        assert data["extra"]["method"] == "tools/call"
        assert isinstance(data["extra"]["custom_obj"], str)

    def test_exception_info(self, formatter: StructuredFormatter) -> None:
        try:
            raise ValueError("Test error")
        except ValueError:
            exc_info = sys.exc_info()

        record = logging.LogRecord(
            name="test",
            level=logging.ERROR,
            pathname="test.py",
            lineno=1,
            msg="Error occurred",
            args=(),
            exc_info=exc_info,
        )
        data = json.loads(formatter.format(record))
        assert "ValueError" in data["exception"]
        assert "Test error" in data["exception"]


class TestConfigureLogging:
    """Tests for configure_logging function."""

    def test_json_format_output(self) -> None:
        output = StringIO()
        configure_logging(json_format=True, log_level=logging.INFO, stream=output)

        logging.getLogger("test.json").info("Test message")

        data = json.loads(output.getvalue().strip())
        assert data["message"] == "Test message"

    def test_plain_format_output(self) -> None:
        output = StringIO()
        configure_logging(json_format=False, log_level=logging.INFO, stream=output)

        logging.getLogger("test.plain").info("Test message")

        content = output.getvalue()
        assert "Test message" in content
        assert "INFO" in content
        with pytest.raises(json.JSONDecodeError):
            json.loads(content.strip())

    def test_level_name(self) -> None:
        """Level names from configuration are accepted."""
        output = StringIO()
        configure_logging(log_level="warning", stream=output)

        logger = logging.getLogger("test.level")
        logger.info("Info message")
        logger.warning("Warning message")

        content = output.getvalue()
        assert "Info message" not in content
        assert "Warning message" in content

    def test_unknown_level_name_falls_back_to_info(self) -> None:
        configure_logging(log_level="chatty", stream=StringIO())
        assert logging.getLogger().level == logging.INFO

    def test_log_file(self, tmp_path: Path) -> None:
        log_file = tmp_path / "logs" / "server.log"
        configure_logging(json_format=True, log_file=str(log_file), stream=StringIO())

        logging.getLogger("test.file").info("To disk")
        for handler in logging.getLogger().handlers:
            handler.flush()

        assert json.loads(log_file.read_text().strip())["message"] == "To disk"

    def test_noisy_loggers_silenced(self) -> None:
        configure_logging(stream=StringIO())

        for name in ("httpx", "httpcore"):
            assert logging.getLogger(name).level >= logging.WARNING, f"{name} should be silenced"
