import logging
import sys
from pathlib import Path
from typing import Optional, TextIO

PACKAGE_LOGGER_NAME = "data_calc"

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def setup_logger(
    name: str = PACKAGE_LOGGER_NAME,
    level: int = logging.WARNING,
    log_file: Optional[str | Path] = None,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """
    Attaches a console handler, and optionally a file handler, to a logger.

    Every module of the package logs through `logging.getLogger(__name__)`,
    so configuring `data_calc` covers all of them. Handlers from an earlier
    call are closed and replaced rather than stacked.

    Parameters
    ----------
    name : str, optional
        Logger name, by default the package logger.
    level : int, optional
        Level of the logger and its handlers, by default `logging.WARNING`.
    log_file : Optional[str | Path], optional
        If given, records are also appended to this file. Missing parent
        directories are created.
    stream : Optional[TextIO], optional
        Console stream, by default `sys.stdout`.

    Returns
    -------
    logging.Logger
        The configured logger.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
    handlers: list[logging.Handler] = [logging.StreamHandler(stream or sys.stdout)]

    if log_file is not None:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, mode='a', encoding='utf-8'))

    for handler in handlers:
        handler.setFormatter(formatter)
        handler.setLevel(level)
        logger.addHandler(handler)

    if log_file is not None:
        logger.debug(f"Logging to file: {log_file}")
    return logger
