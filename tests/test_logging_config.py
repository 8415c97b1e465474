from __future__ import annotations

import logging
from pathlib import Path

import pytest

from filter_studio.core.logging_config import (
    DEFAULT_LOG_FILENAME,
    LoggingConfigurator,
    LoggingOptions,
)


@pytest.fixture()
def restore_root_logger():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in list(root.handlers):
        root.removeHandler(handler)
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


def _flush() -> None:
    for handler in logging.getLogger().handlers:
        handler.flush()


def test_configure_writes_component_to_log_file(tmp_path: Path, restore_root_logger) -> None:
    configurator = LoggingConfigurator(LoggingOptions(log_directory=tmp_path, enable_console=False))

    log_path = configurator.configure()
    logging.getLogger("filter_studio.test").info("hello", extra={"component": "Pipeline"})
    _flush()

    assert log_path == tmp_path / DEFAULT_LOG_FILENAME
    contents = log_path.read_text(encoding="utf-8")
    assert "| INFO | Pipeline | hello" in contents
    configurator.shutdown()


def test_missing_component_falls_back_to_logger_name(tmp_path: Path, restore_root_logger) -> None:
    configurator = LoggingConfigurator(LoggingOptions(log_directory=tmp_path, enable_console=False))

    log_path = configurator.configure()
    logging.getLogger("filter_studio.other").warning("careful")
    _flush()

    assert "filter_studio.other | careful" in log_path.read_text(encoding="utf-8")
    configurator.shutdown()


def test_home_directory_is_masked(tmp_path: Path, restore_root_logger) -> None:
    configurator = LoggingConfigurator(LoggingOptions(log_directory=tmp_path, enable_console=False))

    log_path = configurator.configure()
    logging.getLogger("filter_studio.test").info("opened %s", Path.home() / "secret.png")
    _flush()

    contents = log_path.read_text(encoding="utf-8")
    assert str(Path.home()) not in contents
    assert "~" in contents
    configurator.shutdown()


def test_developer_diagnostics_enable_debug(tmp_path: Path, restore_root_logger) -> None:
    configurator = LoggingConfigurator(
        LoggingOptions(log_directory=tmp_path, enable_console=True, developer_diagnostics=True)
    )

    configurator.configure()

    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert len(root.handlers) == 2
    configurator.shutdown()
    assert root.handlers == []


def test_log_path_defaults_to_home(restore_root_logger) -> None:
    configurator = LoggingConfigurator()

    assert configurator.log_path.name == DEFAULT_LOG_FILENAME
    assert configurator.log_path.parent.parent.parent == Path.home()
