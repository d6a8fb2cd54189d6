import logging
import os
import sys
from logging.handlers import RotatingFileHandler

LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'


def setup_logging(log_path: str = "daily_stocks.log", level: int = logging.INFO) -> None:
    """Configure root logging for a run.

    In Scheduled Task mode stdout is already tee'd to a log file by the wrapper,
    so the file handler is skipped to avoid two writers on one file.
    """
    scheduled_mode = os.environ.get("SCHEDULED_TASK_MODE") == "1" or os.environ.get("BOT_TEE_LOG") == "1"

    handlers = [logging.StreamHandler(sys.stdout)]

    if not scheduled_mode and log_path:
        file_handler = RotatingFileHandler(log_path, maxBytes=5 * 1024 * 1024, backupCount=2, delay=True)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handlers.insert(0, file_handler)

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=handlers,
        force=True,
    )


def log_info(msg: str):
    logging.info(msg)


def log_warn(msg: str):
    logging.warning(msg)


def log_error(msg: str):
    logging.error(msg)
