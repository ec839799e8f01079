import logging
from logging.config import dictConfig

from .config import get_settings

DEFAULT_LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
TELEMETRY_LOG_FORMAT = "%(asctime)s %(message)s"


def configure_logging() -> None:
    """Route application logs to stderr and telemetry lines to their own handler."""
    level = get_settings().log_level.upper()
    if not isinstance(logging.getLevelName(level), int):
        level = "INFO"

    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "app": {"format": DEFAULT_LOG_FORMAT},
                "telemetry": {"format": TELEMETRY_LOG_FORMAT},
            },
            "handlers": {
                "app": {
                    "class": "logging.StreamHandler",
                    "formatter": "app",
                },
                "telemetry": {
                    "class": "logging.StreamHandler",
                    "formatter": "telemetry",
                },
            },
            "loggers": {
                "bdd_coach.telemetry": {
                    "handlers": ["telemetry"],
                    "level": "INFO",
                    "propagate": False,
                },
            },
            "root": {
                "handlers": ["app"],
                "level": level,
            },
        }
    )

    # Request lines duplicate the telemetry events outside of debugging.
    if level != "DEBUG":
        logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
