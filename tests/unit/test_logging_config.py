"""Unit tests for clinicsim logging configuration."""

from __future__ import annotations

import json
import logging
from unittest import mock

import clinicsim
from clinicsim.logging_config import LOGGER_NAME, JsonFormatter, _clear_handlers, _get_level, _get_logger


class TestSilentByDefault:
    def test_import_produces_no_log_output(self, capfd):
        import importlib

        importlib.reload(clinicsim)

        captured = capfd.readouterr()
        assert captured.out == ""
        assert captured.err == ""

    def test_logger_has_null_handler(self):
        logger = logging.getLogger(LOGGER_NAME)
        assert any(isinstance(h, logging.NullHandler) for h in logger.handlers)

    def test_simulation_is_quiet(self, capfd, deterministic_config):
        clinicsim.simulate(deterministic_config)
        captured = capfd.readouterr()
        assert captured.err == ""


class TestEnableConsoleLogging:
    def test_sets_level_and_outputs_to_stderr(self, capfd):
        clinicsim.enable_console_logging(level="DEBUG")
        assert _get_logger().level == logging.DEBUG

        logging.getLogger(f"{LOGGER_NAME}.test").info("test message")
        assert "test message" in capfd.readouterr().err

    def test_custom_format(self, capfd):
        clinicsim.enable_console_logging(level="INFO", format="[CUSTOM] %(message)s")
        logging.getLogger(f"{LOGGER_NAME}.test").info("hello")
        assert "[CUSTOM] hello" in capfd.readouterr().err

    def test_run_is_logged(self, capfd, deterministic_config):
        clinicsim.enable_console_logging(level="INFO")
        clinicsim.simulate(deterministic_config)
        err = capfd.readouterr().err
        assert "Starting clinic run" in err
        assert "Clinic run finished" in err


class TestEnableFileLogging:
    def test_creates_file_and_parents(self, tmp_path):
        path = tmp_path / "nested" / "clinic.log"
        handler = clinicsim.enable_file_logging(path, level="INFO")

        logging.getLogger(f"{LOGGER_NAME}.test").info("file message")
        handler.flush()

        assert "file message" in path.read_text()


class TestJsonLogging:
    def test_formatter_emits_json(self):
        record = logging.LogRecord(LOGGER_NAME, logging.WARNING, __file__, 1, "queue %s full", ("O-1",), None)
        payload = json.loads(JsonFormatter().format(record))
        assert payload["level"] == "WARNING"
        assert payload["logger"] == LOGGER_NAME
        assert payload["message"] == "queue O-1 full"

    def test_json_file(self, tmp_path):
        path = tmp_path / "clinic.jsonl"
        handler = clinicsim.enable_json_logging(level="INFO", path=path)
        logging.getLogger(f"{LOGGER_NAME}.test").info("structured")
        handler.flush()

        line = path.read_text().strip().splitlines()[-1]
        assert json.loads(line)["message"] == "structured"


class TestConfigureFromEnv:
    def test_no_env_no_handlers(self):
        with mock.patch.dict("os.environ", {}, clear=True):
            clinicsim.configure_from_env()
        handlers = [h for h in _get_logger().handlers if not isinstance(h, logging.NullHandler)]
        assert handlers == []

    def test_level_from_env(self):
        with mock.patch.dict("os.environ", {"CLINICSIM_LOGGING": "warning"}, clear=True):
            clinicsim.configure_from_env()
        assert _get_logger().level == logging.WARNING

    def test_file_from_env(self, tmp_path):
        path = tmp_path / "env.log"
        with mock.patch.dict("os.environ", {"CLINICSIM_LOG_FILE": str(path)}, clear=True):
            clinicsim.configure_from_env()
        assert path.exists()


class TestLevels:
    def test_get_level(self):
        assert _get_level("debug") == logging.DEBUG
        assert _get_level(logging.ERROR) == logging.ERROR
        assert _get_level("nonsense") == logging.INFO

    def test_set_level(self):
        clinicsim.set_level("ERROR")
        assert _get_logger().level == logging.ERROR

    def test_set_module_level(self):
        clinicsim.set_module_level("core.scheduler", "DEBUG")
        assert logging.getLogger(f"{LOGGER_NAME}.core.scheduler").level == logging.DEBUG
        logging.getLogger(f"{LOGGER_NAME}.core.scheduler").setLevel(logging.NOTSET)

    def test_disable_logging(self, capfd):
        clinicsim.enable_console_logging(level="DEBUG")
        clinicsim.disable_logging()
        logging.getLogger(f"{LOGGER_NAME}.test").critical("should not appear")
        assert "should not appear" not in capfd.readouterr().err

    def test_clear_handlers_keeps_null_handler(self):
        clinicsim.enable_console_logging()
        _clear_handlers()
        assert all(isinstance(h, logging.NullHandler) for h in _get_logger().handlers)
