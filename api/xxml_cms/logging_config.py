"""Logging setup shared by the API and the command line scripts."""

import logging
import logging.config


def configure_logging(level: str = "INFO", fmt: str | None = None) -> None:
    """
    Configure root logging with a single console handler.

    Args:
        level: Log level name for the xxml_cms loggers
        fmt: Optional format string (scripts pass a bare "%(message)s")
    """
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {
                    "format": fmt or "%(asctime)s %(levelname)s [%(name)s] %(message)s",
                },
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "default",
                    "stream": "ext://sys.stdout",
                },
            },
            "loggers": {
                "xxml_cms": {"level": level.upper(), "handlers": ["console"], "propagate": False},
                "sqlalchemy.engine": {"level": "WARNING"},
            },
            "root": {"level": "WARNING", "handlers": ["console"]},
        }
    )
