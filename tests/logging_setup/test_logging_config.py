"""
Tests for logging setup and the runner's logging options

Covers:
- Production, development and testing presets (handlers and levels)
- Subsystem overrides
- log_exception folding engine error codes into the message
- main.py option handling and its error exit
"""

import logging
from logging.handlers import RotatingFileHandler

import pytest

import main
from logging_config import (
    ColoredFormatter, log_exception, setup_development_logging,
    setup_offseason_logging, setup_playoff_logging, setup_production_logging,
    setup_testing_logging
)
from shared.league_exceptions import DataIntegrityError


SUBSYSTEM_LOGGERS = ("playoff_system", "standings", "season_calendar", "game_cycle",
                     "offseason", "salary_cap")


@pytest.fixture
def root_logger():
    """Root logger, restored (handlers closed) after the test."""
    root = logging.getLogger()
    saved_handlers = list(root.handlers)
    saved_level = root.level
    yield root
    for handler in root.handlers:
        if handler not in saved_handlers:
            handler.close()
    root.handlers[:] = saved_handlers
    root.setLevel(saved_level)
    for name in SUBSYSTEM_LOGGERS:
        logging.getLogger(name).setLevel(logging.NOTSET)


def file_handlers(logger):
    return [h for h in logger.handlers if isinstance(h, RotatingFileHandler)]


def console_handlers(logger):
    return [h for h in logger.handlers if not isinstance(h, RotatingFileHandler)]


class TestPresets:

    def test_testing_preset_is_quiet(self, root_logger):
        setup_testing_logging()
        assert root_logger.level == logging.WARNING
        assert not file_handlers(root_logger)
        assert len(console_handlers(root_logger)) == 1

    def test_production_preset_writes_files_only(self, root_logger, tmp_path):
        setup_production_logging(str(tmp_path))
        assert root_logger.level == logging.INFO
        assert not console_handlers(root_logger)
        assert len(file_handlers(root_logger)) == 3
        assert (tmp_path / "season_engine.log").exists()
        assert (tmp_path / "season_engine_error.log").exists()

    def test_development_preset_is_verbose(self, root_logger, tmp_path):
        setup_development_logging(str(tmp_path))
        assert root_logger.level == logging.DEBUG
        console, = console_handlers(root_logger)
        assert isinstance(console.formatter, ColoredFormatter)
        assert len(file_handlers(root_logger)) == 3


class TestSubsystemLogging:

    def test_offseason_override(self, root_logger):
        setup_offseason_logging("DEBUG")
        assert logging.getLogger("offseason").level == logging.DEBUG
        assert logging.getLogger("salary_cap").level == logging.DEBUG
        assert logging.getLogger("offseason.offseason_orchestrator").isEnabledFor(logging.DEBUG)

    def test_playoff_override(self, root_logger):
        setup_playoff_logging("ERROR")
        assert logging.getLogger("playoff_system").level == logging.ERROR
        assert logging.getLogger("standings").level == logging.ERROR


class TestLogException:

    def test_error_code_and_context(self, caplog):
        logger = logging.getLogger("tests.log_exception")
        error = DataIntegrityError("Unknown player", player_id=999)
        with caplog.at_level(logging.ERROR, logger="tests.log_exception"):
            log_exception(logger, error, {"week": 3})

        record, = caplog.records
        assert record.levelno == logging.ERROR
        assert "week=3" in record.getMessage()
        assert "error_code=LEAGUE_INTEGRITY_001" in record.getMessage()
        assert "DataIntegrityError: Unknown player" in record.getMessage()
        assert record.exc_info[1] is error

    def test_custom_level_plain_exception(self, caplog):
        logger = logging.getLogger("tests.log_exception")
        with caplog.at_level(logging.WARNING, logger="tests.log_exception"):
            log_exception(logger, ValueError("bad value"), level="warning")

        record, = caplog.records
        assert record.levelno == logging.WARNING
        assert record.getMessage() == "Exception occurred: ValueError: bad value"


class TestRunnerLogging:

    def test_preset_and_subsystem_flags(self, root_logger, tmp_path):
        args = main.build_parser().parse_args([
            "--log-preset", "production", "--log-dir", str(tmp_path),
            "--debug-subsystem", "playoffs", "--debug-subsystem", "calendar",
        ])
        main.configure_logging(args)
        assert len(file_handlers(root_logger)) == 3
        assert logging.getLogger("playoff_system").level == logging.DEBUG
        assert logging.getLogger("game_cycle").level == logging.DEBUG
        assert logging.getLogger("offseason").level == logging.NOTSET

    def test_level_flags_without_preset(self, root_logger):
        args = main.build_parser().parse_args(["--log-level", "ERROR"])
        main.configure_logging(args)
        assert root_logger.level == logging.ERROR
        assert not file_handlers(root_logger)

    def test_unknown_preset_rejected(self):
        with pytest.raises(SystemExit):
            main.build_parser().parse_args(["--log-preset", "verbose"])

    def test_engine_error_exits_nonzero(self, root_logger, monkeypatch, capsys):
        def fail(controller):
            raise DataIntegrityError("Simulator reported an unknown team", team_id=99)

        monkeypatch.setattr(main.SeasonCycleController, "simulate_full_year", fail)
        assert main.main(["--log-preset", "testing"]) == 1
        assert "Simulation stopped at" in capsys.readouterr().out
