import logging
import logging.handlers
import sys
from pathlib import Path

import pytest

from fsm_interpreter.config import LoggingConfig
from fsm_interpreter.infra import configure_logging, install_exception_hook


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    level = root.level
    yield root
    for handler in list(root.handlers):
        if isinstance(handler, (logging.FileHandler, logging.NullHandler)) or type(handler) is logging.StreamHandler:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
    for name in ("fsm.engine", "fsm.driver"):
        logging.getLogger(name).setLevel(logging.NOTSET)


def test_configure_logging_writes_rotating_file(tmp_path: Path, restore_root_logger) -> None:
    log_path = tmp_path / "nested" / "fsm.log"
    configure_logging(LoggingConfig(level="DEBUG", filepath=log_path, console=False))

    logging.getLogger("fsm.engine").debug("hello from the engine")
    for handler in restore_root_logger.handlers:
        handler.flush()

    assert restore_root_logger.level == logging.DEBUG
    assert [type(h) for h in restore_root_logger.handlers] == [logging.handlers.RotatingFileHandler]
    content = log_path.read_text(encoding="utf-8")
    assert "| DEBUG    | fsm.engine | hello from the engine" in content


def test_configure_logging_adds_console_handler(tmp_path: Path, restore_root_logger) -> None:
    configure_logging(LoggingConfig(level="warning", filepath=tmp_path / "fsm.log", console=True))

    assert restore_root_logger.level == logging.WARNING
    assert len(restore_root_logger.handlers) == 2


def test_configure_logging_without_filepath_is_console_only(tmp_path: Path, monkeypatch, restore_root_logger) -> None:
    monkeypatch.chdir(tmp_path)

    handlers = configure_logging(LoggingConfig(filepath=None, console=True))

    assert [type(h) for h in handlers] == [logging.StreamHandler]
    assert handlers[0] in restore_root_logger.handlers
    assert list(tmp_path.iterdir()) == []


def test_configure_logging_with_no_outputs_discards_records(restore_root_logger) -> None:
    handlers = configure_logging(LoggingConfig(filepath=None, console=False))

    assert [type(h) for h in handlers] == [logging.NullHandler]


def test_per_logger_levels_override_root_level(tmp_path: Path, restore_root_logger) -> None:
    log_path = tmp_path / "fsm.log"
    configure_logging(
        LoggingConfig(level="WARNING", filepath=log_path, console=False, loggers={"fsm.engine": "DEBUG"})
    )

    logging.getLogger("fsm.engine").debug("outcome traced")
    logging.getLogger("fsm.driver").info("driver chatter")
    for handler in restore_root_logger.handlers:
        handler.flush()

    content = log_path.read_text(encoding="utf-8")
    assert "| DEBUG    | fsm.engine | outcome traced" in content
    assert "driver chatter" not in content
    assert logging.getLogger("statemachine").level == logging.WARNING


def test_exception_hook_logs_and_chains(monkeypatch, caplog) -> None:
    calls = []
    monkeypatch.setattr(sys, "excepthook", lambda *exc_info: calls.append(exc_info[0]))

    install_exception_hook()
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        with caplog.at_level(logging.CRITICAL, logger="app.exceptions"):
            sys.excepthook(*sys.exc_info())

    assert calls == [RuntimeError]
    assert "Unhandled exception: boom" in caplog.text
