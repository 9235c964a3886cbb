"""Unit tests for logging configuration."""

import sys
from pathlib import Path

import pytest
from loguru import logger

pytestmark = pytest.mark.fast

from roai.config.schemas import EngineConfig, LoggingConfig
from roai.utils.logging_config import configure_logging_from_config, log_stage, setup_logging


@pytest.fixture(autouse=True)
def restore_test_sink():
    """Put the test stderr sink back after each test reconfigures loguru."""
    yield
    logger.remove()
    logger.add(sys.stderr, level="INFO")


def read_log(path: Path) -> str:
    logger.remove()
    return path.read_text(encoding="utf-8")


class TestSetupLogging:
    """Test logging setup functionality."""

    def test_setup_logging_with_file(self, tmp_path: Path):
        """Test log records reach the rotating file sink."""
        log_file = tmp_path / "logs" / "roai.log"

        setup_logging(level="INFO", format_type="text", file_path=str(log_file))
        logger.info("file sink check")

        assert "file sink check" in read_log(log_file)

    def test_setup_logging_json(self, tmp_path: Path):
        """Test json format serializes records."""
        log_file = tmp_path / "roai.json"

        setup_logging(level="INFO", format_type="json", file_path=str(log_file))
        logger.info("structured")

        assert '"message": "structured"' in read_log(log_file)

    def test_setup_logging_invalid_level(self, tmp_path: Path):
        """Test an unknown level name falls back to INFO."""
        log_file = tmp_path / "roai.log"

        setup_logging(level="INVALID", file_path=str(log_file))
        logger.debug("hidden")
        logger.info("shown")

        content = read_log(log_file)
        assert "falling back to 'INFO'" in content
        assert "shown" in content
        assert "hidden" not in content

    def test_lowercase_level_accepted(self, tmp_path: Path):
        log_file = tmp_path / "roai.log"

        setup_logging(level="debug", file_path=str(log_file))
        logger.debug("detail")

        content = read_log(log_file)
        assert "detail" in content
        assert "falling back" not in content

    def test_columns_can_be_dropped(self, tmp_path: Path):
        """Test text output omits the stage and run id columns when disabled."""
        log_file = tmp_path / "roai.log"

        setup_logging(
            file_path=str(log_file),
            include_stage=False,
            include_run_id=False,
            include_timestamps=False,
        )
        logger.info("bare")

        assert read_log(log_file).strip() == "INFO     | bare"

    def test_stdout_untouched(self, tmp_path: Path, capsys):
        """Test records go to stderr so stdout stays free for command output."""
        setup_logging(level="INFO")
        logger.info("to stderr")

        captured = capsys.readouterr()
        assert "to stderr" not in captured.out


class TestConfigureLoggingFromConfig:
    """Test configuration-driven logging setup."""

    def test_uses_given_config(self, tmp_path: Path):
        """Test level and file path come from the logging section."""
        log_file = tmp_path / "engine.log"
        config = EngineConfig(logging=LoggingConfig(level="WARNING", file_path=str(log_file)))

        configure_logging_from_config(config)
        logger.info("quiet")
        logger.warning("loud")

        content = read_log(log_file)
        assert "loud" in content
        assert "quiet" not in content

    def test_level_override(self, tmp_path: Path):
        """Test an explicit level wins over the configured one."""
        log_file = tmp_path / "engine.log"
        config = EngineConfig(logging=LoggingConfig(level="WARNING", file_path=str(log_file)))

        configure_logging_from_config(config, level="DEBUG")
        logger.debug("verbose detail")

        assert "verbose detail" in read_log(log_file)

    def test_defaults_to_loaded_config(self):
        """Test setup without arguments reads the cached configuration."""
        configure_logging_from_config()


class TestLogStage:
    """Test stage and run id tagging."""

    def test_stage_and_run_id_tagged(self, tmp_path: Path):
        log_file = tmp_path / "roai.log"
        setup_logging(level="INFO", file_path=str(log_file))

        with log_stage("sensitivity", run_id="abc12345"):
            logger.info("ranked")

        line = read_log(log_file).strip()
        assert "| sensitivity " in line
        assert "| abc12345 " in line

    def test_tags_reset_after_block(self, tmp_path: Path):
        """Test records outside the block fall back to the placeholder columns."""
        log_file = tmp_path / "roai.log"
        setup_logging(level="INFO", file_path=str(log_file), include_timestamps=False)

        with log_stage("monte_carlo"):
            logger.info("inside")
        logger.info("outside")

        lines = read_log(log_file).splitlines()
        assert "monte_carlo" in lines[0]
        assert lines[1].startswith("INFO     | -            | -        | outside")
