"""Process-wide logging setup."""
import logging.config

from handbook.core.config import Settings


def configure_logging(settings: Settings) -> None:
    level = "DEBUG" if settings.debug else settings.log_level.upper()
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "generic": {
                    "format": "%(asctime)s %(levelname)-5.5s [%(name)s] %(message)s",
                    "datefmt": "%H:%M:%S",
                },
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "generic",
                    "stream": "ext://sys.stderr",
                },
            },
            "loggers": {
                "handbook": {"level": level, "handlers": ["console"], "propagate": False},
                "sqlalchemy.engine": {"level": "INFO" if settings.debug else "WARNING"},
            },
            "root": {"level": "WARNING", "handlers": ["console"]},
        }
    )
