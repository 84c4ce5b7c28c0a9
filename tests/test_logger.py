import logging

import pytest

from confdb.logger import LogLevel, LogType, Logger, get_logger


@pytest.fixture
def memory_logger():
    log = Logger()
    assert log.set_log_type(LogType.MEMORY)
    return log


def test_memory_line_format_with_args(memory_logger):
    assert memory_logger.info("MAIN", "hello %s", "world")
    assert memory_logger.memory_log() == "[info] MAIN hello world\n"


def test_memory_line_format_without_args(memory_logger):
    memory_logger.debug("plain")
    assert memory_logger.memory_log() == "[debug]  plain\n"


def test_verbose_is_not_written_to_memory(memory_logger):
    assert memory_logger.verbose("hidden %d", 1) is False
    assert memory_logger.is_empty()


def test_level_filtering(memory_logger):
    memory_logger.level = LogLevel.ERROR
    assert memory_logger.warning("MAIN", "skipped") is False
    assert memory_logger.is_empty()
    assert memory_logger.error("MAIN", "boom")
    assert memory_logger.is_exist_log("error", "boom")
    assert not memory_logger.is_exist_log("info", "boom")
    assert not memory_logger.is_empty()


def test_too_long_line_is_rejected(memory_logger):
    assert memory_logger.info("MAIN", "%s", "x" * 2000) is False
    assert memory_logger.memory_log() == ""


def test_file_output(tmp_path):
    log = Logger()
    path = tmp_path / "log.txt"
    assert log.set_log_type(LogType.FILE, path)
    assert log.log_type == LogType.FILE
    assert log.log_file_path == str(path)
    assert log.is_empty()
    log.info("MAIN", "started %d", 7)
    log.verbose("detail")
    assert log.is_exist_log("info", "started 7")
    assert log.is_exist_log("verbose", "detail")
    assert not log.is_empty()
    assert "started 7" in path.read_text()


def test_file_type_needs_path():
    log = Logger()
    assert log.set_log_type(LogType.FILE) is False
    assert log.log_type == LogType.CONSOLE


def test_file_type_rejects_directory(tmp_path):
    log = Logger()
    assert log.set_log_type(LogType.FILE, tmp_path) is False
    assert log.log_type == LogType.CONSOLE


def test_clear_resets(memory_logger):
    memory_logger.info("MAIN", "text")
    memory_logger.clear()
    assert memory_logger.log_type == LogType.PMLOG
    assert memory_logger.level == LogLevel.DEBUG
    assert memory_logger.memory_log() == ""
    assert memory_logger.log_file_path == ""


def test_console_output(capsys):
    log = Logger()
    log.info("MAIN", "value %d", 5)
    out = capsys.readouterr().out
    assert "[info   ]" in out
    assert "MAIN" in out
    assert out.rstrip().endswith("value 5")


def test_system_log_output(caplog):
    log = Logger()
    log.clear()
    with caplog.at_level(logging.DEBUG, logger="configd"):
        assert log.warning("MAIN", "disk %s", "full")
    assert any("disk full" in record.getMessage() for record in caplog.records)


def test_get_logger_is_shared():
    first = get_logger()
    saved = first.level
    try:
        first.level = LogLevel.WARNING
        assert get_logger().level == LogLevel.WARNING
        first.level = LogLevel.INFO
        assert get_logger().level == LogLevel.INFO
    finally:
        first.level = saved