"""Tests for logging setup."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from cpsearch.config.settings import ObservabilitySettings
from cpsearch.observability.logging import get_logger, setup_logging


@pytest.fixture(autouse=True)
def _restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers, root.level = handlers, level


class TestSetupLogging:
    def test_log_file_receives_component_lines(self, tmp_path: Path) -> None:
        log_file = tmp_path / "cpsearch.log"
        setup_logging(ObservabilitySettings(log_level="debug", log_file=str(log_file)))

        get_logger("elasticsearch").info("index_created", index="postal_codes")
        for handler in logging.getLogger().handlers:
            handler.flush()

        line = log_file.read_text().strip().splitlines()[-1]
        assert '"component": "elasticsearch"' in line
        assert '"event": "index_created"' in line
        assert '"timestamp"' in line
        assert '"lineno"' in line

    def test_unopenable_log_file_is_reported(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        missing_dir = tmp_path / "missing" / "cpsearch.log"

        setup_logging(ObservabilitySettings(log_file=str(missing_dir)))

        assert "cannot open log file" in capsys.readouterr().err
        assert not any(isinstance(h, logging.FileHandler) for h in logging.getLogger().handlers)

    def test_level_applied(self) -> None:
        setup_logging(ObservabilitySettings(log_level="warning"))
        assert logging.getLogger().level == logging.WARNING

    def test_stdlib_logger_lines_are_tagged(self, tmp_path: Path) -> None:
        log_file = tmp_path / "cpsearch.log"
        setup_logging(ObservabilitySettings(log_file=str(log_file)))

        logging.getLogger("cpsearch.adapters.opensearch.adapter").info("Created document %s", "abc")
        for handler in logging.getLogger().handlers:
            handler.flush()

        line = log_file.read_text().strip().splitlines()[-1]
        assert '"event": "Created document abc"' in line
        assert '"component": "cpsearch.adapters.opensearch.adapter"' in line
        assert '"level": "info"' in line
        assert '"timestamp"' in line
        assert '"lineno"' in line
