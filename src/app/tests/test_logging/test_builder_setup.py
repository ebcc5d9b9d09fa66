# src/app/tests/test_logging/test_builder_setup.py
import logging

from app.core.logging.builder import make_dict_config, setup_logging
from app.core.logging.formatters import ColorFormatter

from ..test_fixtures.settings import make_test_settings


def test_file_logging_adds_rotating_handlers(tmp_path):
    settings = make_test_settings(LOG_TO_STDOUT=False, LOG_DIR=tmp_path, LOG_FORMAT="json")

    cfg = make_dict_config(settings)

    assert set(cfg["handlers"]) == {"console", "file", "error_file"}
    assert cfg["handlers"]["file"]["filename"] == str(tmp_path / "app.log")
    assert cfg["handlers"]["console"]["formatter"] == "json"
    # error files stay JSON whatever LOG_FORMAT says
    assert cfg["handlers"]["error_file"]["formatter"] == "json"


def test_stdout_logging_uses_error_console(tmp_path):
    cfg = make_dict_config(make_test_settings(LOG_TO_STDOUT=True, LOG_DIR=tmp_path))

    assert set(cfg["handlers"]) == {"console", "error_console"}


def test_text_format_uses_color_formatter():
    cfg = make_dict_config(make_test_settings(LOG_FORMAT="text"))

    assert cfg["formatters"]["standard"]["()"] is ColorFormatter
    assert cfg["handlers"]["console"]["formatter"] == "standard"


def test_sql_logging_is_quiet_unless_enabled():
    quiet = make_dict_config(make_test_settings(ENABLE_SQL_LOGGING=False))
    loud = make_dict_config(make_test_settings(ENABLE_SQL_LOGGING=True))

    assert quiet["loggers"]["sqlalchemy.engine"]["level"] == "WARNING"
    assert loud["loggers"]["sqlalchemy.engine"]["level"] == "DEBUG"


def test_every_handler_redacts_and_stamps_request_id(tmp_path):
    cfg = make_dict_config(make_test_settings(LOG_TO_STDOUT=False, LOG_DIR=tmp_path))

    for handler in cfg["handlers"].values():
        assert handler["filters"] == ["request_id", "redact"]


def test_setup_logging_creates_log_dir(tmp_path):
    log_dir = tmp_path / "logs"
    assert not log_dir.exists()

    setup_logging(make_test_settings(LOG_TO_STDOUT=False, LOG_DIR=log_dir))
    try:
        assert log_dir.exists()
        assert logging.getLogger().handlers
    finally:
        # back to console-only logging for the rest of the session
        setup_logging(make_test_settings())
