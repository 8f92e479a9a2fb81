from __future__ import annotations

import logging
import logging.config
from pathlib import Path

from menu_bridge.core.config import settings


def build_logging_config(log_dir: Path) -> dict:
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "verbose": {
                "format": "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            }
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": "INFO",
                "formatter": "verbose",
            },
            "menu_file": {
                "class": "logging.handlers.RotatingFileHandler",
                "level": "DEBUG",
                "formatter": "verbose",
                "filename": str(log_dir / "menu_bridge.log"),
                "maxBytes": 5 * 1024 * 1024,
                "backupCount": 5,
                "encoding": "utf-8",
            },
        },
        "loggers": {
            "": {
                "handlers": ["console", "menu_file"],
                "level": "INFO",
            },
            "menu_bridge": {
                "level": "DEBUG" if settings.MENU_DEBUG else "INFO",
            },
            "uvicorn": {
                "handlers": ["console", "menu_file"],
                "level": "INFO",
                "propagate": False,
            },
            "uvicorn.access": {
                "handlers": ["console", "menu_file"],
                "level": "INFO",
                "propagate": False,
            },
        },
    }


def configure_logging(log_dir: Path | None = None) -> Path:
    """Configure application-wide logging with a rotating file handler."""

    target_dir = log_dir or settings.MENU_LOG_DIR
    target_dir.mkdir(parents=True, exist_ok=True)
    logging.captureWarnings(True)
    logging.config.dictConfig(build_logging_config(target_dir))
    return target_dir


__all__ = ["build_logging_config", "configure_logging"]
