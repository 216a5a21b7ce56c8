"""Centralized logging configuration for simulation runs.

Per-ant loggers (``antsim.entities`` and ``antsim.behavior``) report
every death, kill and drowning, which drowns out the system loggers in
a long run at DEBUG. They can be given their own level.
"""

from __future__ import annotations

import logging
import os
from typing import Iterable

DEFAULT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"
LOG_LEVEL_ENV_VAR = "ANTSIM_LOG_LEVEL"
ENTITY_LOG_LEVEL_ENV_VAR = "ANTSIM_ENTITY_LOG_LEVEL"

PACKAGE_LOGGER = "antsim"
ENTITY_LOGGERS = ("antsim.entities", "antsim.behavior")


def _resolve(explicit: str | None, env_var: str) -> str | None:
    raw = explicit if explicit is not None else os.getenv(env_var)
    return raw.upper() if raw else None


def configure_logging(
    *,
    level: str | None = None,
    entity_level: str | None = None,
    format: str = DEFAULT_FORMAT,
    datefmt: str = DEFAULT_DATEFMT,
    extra_loggers: Iterable[str] | None = None,
) -> logging.Logger:
    """Configure simulation logging.

    Args:
        level: Level for the ``antsim`` package. Falls back to
            ``ANTSIM_LOG_LEVEL`` or INFO.
        entity_level: Level for the per-ant loggers. Falls back to
            ``ANTSIM_ENTITY_LOG_LEVEL``; when neither is set they follow
            the package level.
        format: Log format string.
        datefmt: Date format string.
        extra_loggers: Additional logger names to align with the package level.

    Returns:
        The package logger (``antsim``).
    """
    resolved_level = _resolve(level, LOG_LEVEL_ENV_VAR) or "INFO"
    logging.basicConfig(level=resolved_level, format=format, datefmt=datefmt)

    app_logger = logging.getLogger(PACKAGE_LOGGER)
    app_logger.setLevel(resolved_level)

    resolved_entity_level = _resolve(entity_level, ENTITY_LOG_LEVEL_ENV_VAR)
    for logger_name in ENTITY_LOGGERS:
        # NOTSET defers to the package logger
        logging.getLogger(logger_name).setLevel(resolved_entity_level or logging.NOTSET)

    if extra_loggers:
        for logger_name in extra_loggers:
            logging.getLogger(logger_name).setLevel(resolved_level)

    app_logger.debug(
        "Logging configured",
        extra={"level": resolved_level, "entity_level": resolved_entity_level or resolved_level},
    )
    return app_logger
