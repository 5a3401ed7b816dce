import logging
import unittest

from app.utils.my_logging import CorrelationIdFilter, resolve_level


class TestLoggingSetup(unittest.TestCase):

    def test_resolve_level(self):
        self.assertEqual(resolve_level("debug"), logging.DEBUG)
        self.assertEqual(resolve_level("WARNING"), logging.WARNING)
        self.assertEqual(resolve_level("chatty"), logging.INFO)
        self.assertEqual(resolve_level(None), logging.INFO)

    def test_filter_fills_missing_correlation_id(self):
        record = logging.LogRecord("app", logging.INFO, __file__, 1, "hello", None, None)
        self.assertTrue(CorrelationIdFilter().filter(record))
        self.assertEqual(record.correlation_id, "-")

        record.correlation_id = "abc"
        CorrelationIdFilter().filter(record)
        self.assertEqual(record.correlation_id, "abc")
