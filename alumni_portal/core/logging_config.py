"""
Logging setup.

Configures the root logger with a console handler, plus a file handler
when settings.log_file is set.
Called once from the FastAPI app factory; repeated calls are no-ops.
"""

import logging
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """
    Configure the root logger.

    Args:
        level: Logging level name, case insensitive ("DEBUG", "INFO", ...)
        logfile: Optional path of an extra file handler
    """
    root = logging.getLogger()
    if root.handlers:
        # Already configured (uvicorn, pytest, or a second create_app call)
        return

    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    console = logging.StreamHandler()
    console.setFormatter(formatter)
    root.addHandler(console)

    if logfile:
        file_handler = logging.FileHandler(logfile, encoding="utf-8")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)
