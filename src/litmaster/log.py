"""Rich console logging for the service and scripts.

setup_logging() is called once by each entry point (API module, CLI);
library modules only call get_logger().
"""

import logging
from typing import Optional

from rich.logging import RichHandler

from .config import get_settings

# Client libraries that log every request at INFO
QUIET_LOGGERS = ("httpx", "openai", "mlflow", "urllib3")


def setup_logging(level: Optional[str] = None):
    """Configure the root logger; `level` overrides LOG_LEVEL from settings."""
    level = (level or get_settings().LOG_LEVEL).upper()
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
        force=True,
    )
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(f"litmaster.{name}")
