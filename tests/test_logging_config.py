"""Tests for logging setup."""

import logging

import pytest

from antsim.logging_config import (
    ENTITY_LOG_LEVEL_ENV_VAR,
    ENTITY_LOGGERS,
    LOG_LEVEL_ENV_VAR,
    configure_logging,
)

TOUCHED = ("antsim", "main", *ENTITY_LOGGERS)


@pytest.fixture(autouse=True)
def restore_levels(monkeypatch):
    monkeypatch.delenv(LOG_LEVEL_ENV_VAR, raising=False)
    monkeypatch.delenv(ENTITY_LOG_LEVEL_ENV_VAR, raising=False)
    saved = {name: logging.getLogger(name).level for name in TOUCHED}
    yield
    for name, level in saved.items():
        logging.getLogger(name).setLevel(level)


class TestConfigureLogging:
    def test_defaults_to_info(self) -> None:
        app_logger = configure_logging()

        assert app_logger.name == "antsim"
        assert app_logger.level == logging.INFO
        assert logging.getLogger("antsim.entities.ant").getEffectiveLevel() == logging.INFO

    def test_entity_loggers_follow_the_package_level(self) -> None:
        configure_logging(level="debug")

        for name in ENTITY_LOGGERS:
            assert logging.getLogger(name).level == logging.NOTSET
        assert logging.getLogger("antsim.behavior.actions").getEffectiveLevel() == logging.DEBUG

    def test_entity_level_quiets_per_ant_messages(self) -> None:
        configure_logging(level="DEBUG", entity_level="warning")

        assert logging.getLogger("antsim.entities.ant").getEffectiveLevel() == logging.WARNING
        assert logging.getLogger("antsim.behavior.actions").getEffectiveLevel() == logging.WARNING
        assert logging.getLogger("antsim.systems.colony").getEffectiveLevel() == logging.DEBUG

    def test_levels_from_environment(self, monkeypatch) -> None:
        monkeypatch.setenv(LOG_LEVEL_ENV_VAR, "warning")
        monkeypatch.setenv(ENTITY_LOG_LEVEL_ENV_VAR, "ERROR")

        configure_logging()

        assert logging.getLogger("antsim").level == logging.WARNING
        assert logging.getLogger("antsim.entities").level == logging.ERROR

    def test_explicit_level_beats_environment(self, monkeypatch) -> None:
        monkeypatch.setenv(LOG_LEVEL_ENV_VAR, "ERROR")
        configure_logging(level="DEBUG", extra_loggers=["main"])

        assert logging.getLogger("antsim").level == logging.DEBUG
        assert logging.getLogger("main").level == logging.DEBUG
