"""
Tests for fsio logging utilities.
"""

import logging
import unittest
import warnings
from tempfile import NamedTemporaryFile
from unittest.mock import patch

from fsio.utils import logging as fsio_logging
from fsio.utils.logging import (
    close_and_remove_logger_handlers,
    get_fsio_logger,
    orig_showwarning,
    send_pandas_warnings_to_logger,
)
from tests.utils import unlink

TEMP_FILE_PATHS = []
LOGGERS = []


class TestLoggingUtils(unittest.TestCase):
    """Test class for logging utility tests."""

    def reset(self):
        for logger in LOGGERS:
            close_and_remove_logger_handlers(logger)
        LOGGERS.clear()
        for temp_file_path in TEMP_FILE_PATHS:
            unlink(temp_file_path)
        TEMP_FILE_PATHS.clear()
        warnings.showwarning = orig_showwarning

    def setUp(self):
        self.reset()

    def tearDown(self):
        self.reset()

    def make_log_file(self):
        temp_file = NamedTemporaryFile("w", suffix=".log", delete=False)
        temp_file.close()
        TEMP_FILE_PATHS.append(temp_file.name)
        return temp_file.name

    def test_get_fsio_logger(self):
        log_path = self.make_log_file()
        logger = get_fsio_logger("test_get_fsio_logger", filepath=log_path)
        LOGGERS.append(logger)

        # Send a regular log message
        msg1 = "message 1"
        logger.info(msg1)

        # Send a regular log message
        msg2 = "message 2"
        logger.info(msg2)

        with open(log_path) as tempfh:
            log_lines = tempfh.readlines()
            self.assertTrue(log_lines[0].endswith(f"INFO - {msg1}\n"))
            self.assertTrue(log_lines[1].endswith(f"INFO - {msg2}\n"))

    def test_get_fsio_logger_level(self):
        log_path = self.make_log_file()
        logger = get_fsio_logger("test_get_fsio_logger_level", filepath=log_path,
                                 log_level=logging.WARNING)
        LOGGERS.append(logger)
        logger.info("hidden")
        logger.warning("shown")

        with open(log_path) as tempfh:
            log_lines = tempfh.readlines()
        self.assertEqual(len(log_lines), 1)
        self.assertTrue(log_lines[0].endswith("WARNING - shown\n"))

    def test_get_fsio_logger_adds_one_file_handler(self):
        log_path = self.make_log_file()
        logger = get_fsio_logger("test_get_fsio_logger_twice", filepath=log_path)
        LOGGERS.append(logger)
        get_fsio_logger("test_get_fsio_logger_twice", filepath=log_path)
        self.assertEqual(len(logger.handlers), 1)

        logger.info("only once")
        with open(log_path) as tempfh:
            self.assertEqual(len(tempfh.readlines()), 1)

    def test_get_fsio_logger_without_file(self):
        logger = get_fsio_logger("test_get_fsio_logger_without_file")
        LOGGERS.append(logger)
        self.assertEqual(logger.handlers, [])
        self.assertEqual(logger.level, logging.INFO)

    def test_pandas_warnings_go_to_logger(self):
        logger = logging.getLogger("test_pandas_warnings_go_to_logger")
        with self.assertLogs(logger, level="WARNING") as logs:
            send_pandas_warnings_to_logger(logger,
                                           "Parsing dates in %d/%m/%Y format",
                                           UserWarning,
                                           "/site-packages/pandas/core/tools/datetimes.py",
                                           42)
        self.assertIn("datetimes.py:42: UserWarning:Parsing dates", logs.output[0])

    def test_other_warnings_are_shown_as_usual(self):
        logger = logging.getLogger("test_other_warnings_are_shown_as_usual")
        with patch.object(fsio_logging, "orig_showwarning") as showwarning_mock:
            send_pandas_warnings_to_logger(logger, "message 3", UserWarning,
                                           "/home/user/script.py", 7)
        showwarning_mock.assert_called_once_with("message 3", UserWarning,
                                                 "/home/user/script.py", 7,
                                                 file=None, line=None)

    def test_showwarning_is_replaced(self):
        log_path = self.make_log_file()
        logger = get_fsio_logger("test_showwarning_is_replaced", filepath=log_path)
        LOGGERS.append(logger)
        self.assertIsNot(warnings.showwarning, orig_showwarning)
        self.assertIs(warnings.showwarning.func, send_pandas_warnings_to_logger)
        self.assertEqual(warnings.showwarning.args, (logger,))
