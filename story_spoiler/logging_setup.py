"""Logging for suite runs.

One stdout handler on the root logger carries the per-request lines from
`story_spoiler.http` and the per-scenario verdicts from `story_spoiler.logic`.
httpx and httpcore log every request themselves; they are held at WARNING so
each call shows up once.
"""
from __future__ import annotations
import logging
from logging.config import dictConfig
from typing import Any, Dict

_QUIET_LIBRARIES = ("httpx", "httpcore")


def _suite_config(level: str) -> Dict[str, Any]:
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "suite": {"format": "%(asctime)s %(levelname)s:%(name)s:%(message)s"},
        },
        "handlers": {
            "stdout": {
                "class": "logging.StreamHandler",
                "formatter": "suite",
                "stream": "ext://sys.stdout",
            }
        },
        "root": {"level": level, "handlers": ["stdout"]},
        "loggers": {name: {"level": "WARNING"} for name in _QUIET_LIBRARIES},
    }


def configure_logging(level: str = "INFO") -> None:
    """Install the suite handler unless a runner already owns the root logger.

    pytest and behave install their own capture handlers; adding ours on top
    would print every line twice.
    """
    if logging.getLogger().handlers:
        return
    dictConfig(_suite_config(level))
