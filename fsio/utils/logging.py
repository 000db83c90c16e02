# License: BSD 3 clause
"""
Functions related to logging in fsio.

Readers and writers log through ``logging.getLogger(__name__)`` unless they
are handed a logger; the command-line tools use :func:`get_fsio_logger` so
that their messages can also be captured in a log file.
"""
import logging
import re
import warnings
from functools import partial
from os.path import abspath, sep
from typing import Optional

orig_showwarning = warnings.showwarning
PANDAS_WARNINGS_RE = re.compile(re.escape(f"{sep}pandas{sep}"))
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def send_pandas_warnings_to_logger(
    logger, message, category, filename, lineno, file=None, line=None
):
    """
    Send `pandas`-specific warnings to a logger.

    Dates in ARFF and CSV files are parsed with pandas, which warns when it
    has to guess the day/month order. This function replaces
    ``warnings.showwarning`` (via `partial`, specifying a `logger` instance)
    so that those warnings end up next to the reader's own messages. All
    other warnings are shown as usual.
    """
    if PANDAS_WARNINGS_RE.search(filename):
        logger.warning(f"{filename}:{lineno}: {category.__name__}:{message}")
    else:
        orig_showwarning(message, category, filename, lineno, file=file, line=line)


def _has_file_handler(logger: logging.Logger, filepath: str) -> bool:
    target = abspath(filepath)
    return any(isinstance(handler, logging.FileHandler) and handler.baseFilename == target
               for handler in logger.handlers)


def get_fsio_logger(
    name: str, filepath: Optional[str] = None, log_level: int = logging.INFO
) -> logging.Logger:
    """
    Create and return logger instances appropriate for use in fsio code.

    Messages propagate to the root logger (and hence to STDERR once
    ``logging.basicConfig`` has been called) and, optionally, to a file.
    Calling this twice with the same name and file path returns the same
    logger without attaching a second file handler.

    Parameters
    ----------
    name : str
        The name to be used for the logger.
    filepath : Optional[str], default=None
        The file to be used for the logger via a FileHandler.
        Default: None in which case no file is attached to the
        logger.
    log_level : int, default=logging.INFO
        The level for logging messages

    Returns
    -------
    logger: logging.Logger
        A ``Logger`` instance.

    """
    logger = logging.getLogger(name)
    logger.setLevel(log_level)

    if filepath and not _has_file_handler(logger, filepath):
        file_handler = logging.FileHandler(filepath, mode="w")
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        file_handler.setLevel(log_level)
        logger.addHandler(file_handler)

    warnings.showwarning = partial(send_pandas_warnings_to_logger, logger)

    return logger


def close_and_remove_logger_handlers(logger: logging.Logger) -> None:
    """
    Close and remove any handlers attached to a logger instance.

    Parameters
    ----------
    logger : logging.Logger
        Logger instance

    """
    for handler in logger.handlers[:]:
        handler.close()
        logger.removeHandler(handler)
