import logging
from pathlib import Path

from hunkwise.config import LogLevel
from hunkwise.logging import LOGGER_NAME, _to_logging_level, configure_file_logger


def test_configure_file_logger_creates_file_and_logs(tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "hunkwise.log"
    logger = configure_file_logger(log_file, log_level=LogLevel.INFO)

    logging.getLogger("hunkwise.engine").info("hello world")

    assert logger.name == LOGGER_NAME
    assert logger.propagate is False
    assert "hello world" in log_file.read_text(encoding="utf-8")


def test_configure_file_logger_is_idempotent(tmp_path: Path) -> None:
    log_file = tmp_path / "dup.log"
    logger1 = configure_file_logger(log_file)
    logger2 = configure_file_logger(log_file, log_level=LogLevel.ERROR)

    assert logger1 is logger2
    assert len(logger1.handlers) == 1
    assert logger1.handlers[0].level == logging.ERROR


def test_oversized_log_is_truncated(tmp_path: Path) -> None:
    log_file = tmp_path / "big.log"
    log_file.write_text("x" * 100, encoding="utf-8")

    configure_file_logger(log_file, max_bytes=10)

    assert log_file.read_text(encoding="utf-8") == ""


def test_small_log_is_kept(tmp_path: Path) -> None:
    log_file = tmp_path / "small.log"
    log_file.write_text("keep\n", encoding="utf-8")

    configure_file_logger(log_file, max_bytes=1000)

    assert log_file.read_text(encoding="utf-8").startswith("keep")


def test_log_level_mapping(tmp_path: Path) -> None:
    logger = configure_file_logger(tmp_path / "lvl.log", log_level=LogLevel.DEBUG)

    assert logger.level == logging.DEBUG


def test_unknown_log_level_string_defaults_to_warning(tmp_path: Path) -> None:
    logger = configure_file_logger(tmp_path / "unknown.log", log_level="verbose")

    assert logger.level == logging.WARNING


def test_to_logging_level_handles_enum_and_string() -> None:
    assert _to_logging_level(LogLevel.ERROR) == logging.ERROR
    assert _to_logging_level("debug") == logging.DEBUG
    assert _to_logging_level(123) == logging.WARNING  # type: ignore[arg-type]
