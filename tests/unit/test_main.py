"""Tests for CLI logging setup."""

import logging
import os

import pytest

from findar.__main__ import setup_logging
from findar.core.config import Config


@pytest.fixture
def project(tmp_path, monkeypatch):
    for key in list(os.environ):
        if key.startswith("FINDAR_"):
            monkeypatch.delenv(key)

    config_dir = tmp_path / "project" / "config"
    config_dir.mkdir(parents=True)
    (config_dir / "default.yaml").write_text(
        "logging:\n"
        "  level: DEBUG\n"
        "  file: logs/findar.log\n",
        encoding="utf-8",
    )

    elsewhere = tmp_path / "elsewhere"
    elsewhere.mkdir()
    monkeypatch.chdir(elsewhere)
    return config_dir


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    saved_handlers = root.handlers[:]
    saved_level = root.level
    yield root
    for handler in root.handlers:
        if handler not in saved_handlers:
            handler.close()
    root.handlers[:] = saved_handlers
    root.setLevel(saved_level)


class TestSetupLogging:
    def test_log_file_under_project_root(self, project, restore_root_logger):
        setup_logging(Config(project))

        expected = project.parent / "logs" / "findar.log"
        file_handlers = [
            h for h in restore_root_logger.handlers if isinstance(h, logging.FileHandler)
        ]
        assert [h.baseFilename for h in file_handlers] == [str(expected)]
        assert expected.parent.is_dir()
        assert not (project.parent.parent / "elsewhere" / "logs").exists()
        assert restore_root_logger.level == logging.DEBUG

    def test_empty_log_file_disables_file_handler(self, project, monkeypatch, restore_root_logger):
        monkeypatch.setenv("FINDAR_LOGGING_FILE", "")
        setup_logging(Config(project))

        assert not any(
            isinstance(h, logging.FileHandler) for h in restore_root_logger.handlers
        )
