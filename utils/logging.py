import logging
import sys
from typing import Iterable, Optional

# Third-party loggers that are too chatty at INFO for day-to-day use
NOISY_LOGGERS = ("sqlalchemy.engine", "aiosqlite", "multipart")


def setup_logging(level: Optional[str] = "INFO", quiet: Iterable[str] = NOISY_LOGGERS) -> None:
    """
    Configure application-wide logging on stdout, in a format close to Uvicorn's.
    Loggers listed in `quiet` are held at WARNING unless the app runs at DEBUG.
    """
    log_level = getattr(logging, str(level).upper(), logging.INFO)
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Clear existing handlers to avoid duplicates in reloads
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root_logger.addHandler(handler)

    if log_level > logging.DEBUG:
        for name in quiet:
            logging.getLogger(name).setLevel(logging.WARNING)
