"""Tests for logging setup."""

import logging
import os

import pytest

from sigwarden.config import RegistryConfig, load_config
from sigwarden.logging_config import get_logger, level_for, setup_logging


@pytest.fixture
def restore_level():
    """setup_logging changes the package logger level; put it back."""
    logger = logging.getLogger("sigwarden")
    level = logger.level
    yield
    logger.setLevel(level)


@pytest.fixture
def isolated_config(monkeypatch, tmp_path):
    """Keep user and project config files and SIGWARDEN_* vars out of load_config."""
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.chdir(tmp_path)
    for key in list(os.environ):
        if key.startswith("SIGWARDEN_"):
            monkeypatch.delenv(key)


class TestGetLogger:
    """Test logger naming."""

    def test_root_logger(self):
        assert get_logger().name == "sigwarden"

    def test_prefixes_foreign_names(self):
        assert get_logger("registry").name == "sigwarden.registry"

    def test_keeps_package_names(self):
        assert get_logger("sigwarden.signatures.registry").name == "sigwarden.signatures.registry"


class TestSetupLogging:
    """Test verbosity levels."""

    def test_level_for(self):
        assert level_for("quiet") == logging.ERROR
        assert level_for("normal") == logging.INFO
        assert level_for("verbose") == logging.DEBUG

    def test_levels(self, restore_level):
        assert setup_logging(RegistryConfig(verbosity="verbose")).level == logging.DEBUG
        assert setup_logging(RegistryConfig(verbosity="quiet")).level == logging.ERROR
        assert setup_logging().level == logging.INFO

    def test_loaded_verbosity_reaches_registry_logger(self, restore_level, isolated_config):
        """load_config(verbose=True) makes registry debug records visible."""
        registry_logger = get_logger("sigwarden.signatures.registry")

        setup_logging(load_config(verbose=True))
        assert registry_logger.isEnabledFor(logging.DEBUG)

        setup_logging(load_config(quiet=True))
        assert not registry_logger.isEnabledFor(logging.WARNING)
        assert registry_logger.isEnabledFor(logging.ERROR)
