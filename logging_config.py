"""
Logging configuration for the tariff cost dashboard.

Modules obtain loggers with ``logging.getLogger(__name__)``; this module wires
the root logger to a console handler once per process.
"""

import logging

# Standard log format with module name and line number
LOG_FORMAT = "%(asctime)s - %(name)s:%(lineno)d - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_LOGGING_CONFIGURED = False


def setup_logging(level: str = "INFO") -> None:
    """
    Configure console logging for the application.

    Args:
        level: Name of the root log level, e.g. "INFO" or "DEBUG"
    """
    global _LOGGING_CONFIGURED

    if _LOGGING_CONFIGURED:
        return

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    root_logger.addHandler(console_handler)

    # Werkzeug request logs are noisy at INFO
    logging.getLogger("werkzeug").setLevel(logging.WARNING)

    _LOGGING_CONFIGURED = True
    logging.getLogger(__name__).debug("Logging configured at %s", level.upper())
