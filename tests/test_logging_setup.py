import logging
import threading
import unittest

from tests._test_path import SRC  # noqa: F401

from edgepass import logging_setup


class TestInitLogging(unittest.TestCase):
    def test_concurrent_first_use_attaches_one_handler(self):
        loggers = []
        threads = [threading.Thread(target=lambda: loggers.append(logging_setup.init_logging())) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        logger = logging.getLogger(logging_setup.LOGGER_NAME)
        self.assertTrue(logging_setup.is_initialized())
        self.assertTrue(all(lg is logger for lg in loggers))
        self.assertEqual(len(logger.handlers), 1)
        self.assertFalse(logger.propagate)

    def test_repeat_calls_are_noops(self):
        logger = logging_setup.init_logging()
        before = list(logger.handlers)
        logging_setup.init_logging("DEBUG")
        self.assertEqual(logger.handlers, before)
