"""Unit tests for biblion.logging."""

import logging

import pytest

from biblion import config
from biblion import logging as biblion_logging

# pylint: disable=magic-value-comparison


def make_record(name: str = "biblion.service_layer.library") -> logging.LogRecord:
    """Build a bare INFO record for the given logger name."""
    return logging.LogRecord(name, logging.INFO, __file__, 1, "message", None, None)


class TestRecordContextFilter:
    """Tests for the prefix and step attributes."""

    @staticmethod
    @pytest.mark.parametrize(
        ("name", "prefix"),
        [
            ("biblion.entrypoints.cli.replay", ""),
            ("click_extra.colorize", "[click_extra] "),
            ("root", "[root] "),
        ],
    )
    def test_prefix(name, prefix):
        """Only records from other libraries get a bracketed prefix."""
        record = make_record(name)
        assert biblion_logging.RecordContextFilter().filter(record)
        assert record.prefix == prefix

    @staticmethod
    def test_step_outside_replay():
        """Records logged outside a replay are tagged with "-"."""
        record = make_record()
        biblion_logging.RecordContextFilter().filter(record)
        assert record.step == "-"

    @staticmethod
    def test_step_inside_replay():
        """Records logged inside replay_step carry its number."""
        record = make_record()
        with biblion_logging.replay_step(7):
            biblion_logging.RecordContextFilter().filter(record)
        assert record.step == "7"


class TestReplayStep:
    """Tests for the replay_step context manager."""

    @staticmethod
    def test_nested_steps_restore_outer():
        """Leaving a block restores the previous step."""
        with biblion_logging.replay_step(1):
            with biblion_logging.replay_step(2):
                assert biblion_logging.current_step() == "2"
            assert biblion_logging.current_step() == "1"
        assert biblion_logging.current_step() == "-"

    @staticmethod
    def test_reset_on_error():
        """An exception inside the block still resets the step."""
        with pytest.raises(RuntimeError):
            with biblion_logging.replay_step(3):
                raise RuntimeError("boom")
        assert biblion_logging.current_step() == "-"


class TestFlightRecorder:
    """Tests for config_flight_recorder."""

    @staticmethod
    def test_dumps_tagged_records_on_warning(tmp_path):
        """Buffered records are written with their step once a WARNING arrives."""
        path = tmp_path / "recorder.log"
        recorder = biblion_logging.config_flight_recorder(path, capacity=10)
        logger = logging.getLogger("biblion.tests.recorder")
        logger.addHandler(recorder)
        logger.setLevel(logging.DEBUG)
        logger.propagate = False
        try:
            with biblion_logging.replay_step(3):
                logger.debug("checking copy")
            assert path.read_text(encoding="utf-8") == ""
            logger.warning("step missed")
            content = path.read_text(encoding="utf-8")
        finally:
            logger.removeHandler(recorder)
            logger.propagate = True
            target = recorder.target
            recorder.close()
            target.close()

        debug_line, warning_line = content.splitlines()
        assert "[step 3] DEBUG biblion.tests.recorder:" in debug_line
        assert debug_line.endswith("checking copy")
        assert "[step -] WARNING" in warning_line

    @staticmethod
    def test_close_without_force_flush_drops_buffer(tmp_path):
        """Without flush_on_close, buffered DEBUG records never reach the file."""
        path = tmp_path / "recorder.log"
        recorder = biblion_logging.config_flight_recorder(path, capacity=10)
        recorder.handle(make_record())
        target = recorder.target
        recorder.close()
        target.close()
        assert path.read_text(encoding="utf-8") == ""


class TestLogStartup:
    """Tests for log_startup."""

    @staticmethod
    def test_banner_and_policy(caplog, monkeypatch):
        """The banner is INFO; the policy from the environment is a DEBUG line."""
        monkeypatch.setenv(config.LOAN_PERIOD_ENV, "7")
        monkeypatch.delenv(config.MAX_ACTIVE_LOANS_ENV, raising=False)
        logger = logging.getLogger("biblion.tests.startup")
        with caplog.at_level(logging.DEBUG, logger="biblion.tests.startup"):
            biblion_logging.log_startup(
                logger, app_version="1.2.3", level=logging.WARNING, handlers=[]
            )

        banner = caplog.records[0]
        assert banner.levelno == logging.INFO
        assert banner.getMessage() == "BIBLION 1.2.3 - console=WARNING, flight-recorder=OFF"
        messages = [r.getMessage() for r in caplog.records]
        assert "Lending policy: loan_period_days=7, max_active_loans=3" in messages
        assert "Per-logger overrides: <none>" in messages
        assert not any(m.startswith("Flight recorder:") for m in messages)

    @staticmethod
    def test_invalid_policy_is_reported_not_raised(caplog, monkeypatch):
        """A bad policy variable is described; the command raises it later."""
        monkeypatch.setenv(config.MAX_ACTIVE_LOANS_ENV, "zero")
        logger = logging.getLogger("biblion.tests.startup")
        with caplog.at_level(logging.DEBUG, logger="biblion.tests.startup"):
            biblion_logging.log_startup(
                logger, app_version="1.2.3", level=logging.INFO, handlers=[]
            )

        (policy_line,) = [
            r.getMessage() for r in caplog.records if r.getMessage().startswith("Lending policy")
        ]
        assert policy_line.startswith("Lending policy: <invalid: BIBLION_MAX_ACTIVE_LOANS")
