"""Tests for the JSON log formatter."""

import json
import logging
import sys
import unittest

from bunsekikun.logging_utils import JSONFormatter, TextFormatter, setup_structured_logging


class TestJSONFormatter(unittest.TestCase):

    def make_record(self, **extra):
        record = logging.LogRecord(
            "bunsekikun.services.selection", logging.INFO, __file__, 1,
            "Lookup failed", None, None,
        )
        for key, value in extra.items():
            setattr(record, key, value)
        return record

    def test_extra_fields_are_included(self):
        line = JSONFormatter().format(self.make_record(keyword="猫", generation=3))
        data = json.loads(line)

        self.assertEqual(data["message"], "Lookup failed")
        self.assertEqual(data["level"], "INFO")
        self.assertEqual(data["logger"], "bunsekikun.services.selection")
        self.assertEqual(data["keyword"], "猫")
        self.assertEqual(data["generation"], 3)
        self.assertNotIn("lineno", data)

    def test_non_ascii_kept_readable(self):
        line = JSONFormatter().format(self.make_record(keyword="猫"))
        self.assertIn("猫", line)

    def test_exception_info(self):
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            record = logging.LogRecord("x", logging.ERROR, __file__, 1, "failed", None, sys.exc_info())

        data = json.loads(JSONFormatter().format(record))
        self.assertIn("RuntimeError: boom", data["exception"])

    def test_timestamp_comes_from_record(self):
        record = self.make_record()
        record.created = 0.0
        data = json.loads(JSONFormatter().format(record))
        self.assertEqual(data["timestamp"], "1970-01-01T00:00:00.000Z")


def access_record() -> logging.LogRecord:
    return logging.LogRecord(
        "uvicorn.access", logging.WARNING, __file__, 1, '%s - "%s %s HTTP/%s" %d',
        ("127.0.0.1:50000", "GET", "/api/jisho?keyword=%E7%8C%AB", "1.1", 500), None,
    )


class TestAccessLogDecoding(unittest.TestCase):

    def test_json(self):
        data = json.loads(JSONFormatter().format(access_record()))
        self.assertEqual(data["message"], '127.0.0.1:50000 - "GET /api/jisho?keyword=猫 HTTP/1.1" 500')

    def test_text(self):
        line = TextFormatter().format(access_record())
        self.assertTrue(line.endswith('uvicorn.access: 127.0.0.1:50000 - "GET /api/jisho?keyword=猫 HTTP/1.1" 500'))

    def test_other_loggers_untouched(self):
        record = logging.LogRecord("uvicorn.error", logging.INFO, __file__, 1, "path %s", ("%E7%8C%AB",), None)
        self.assertEqual(json.loads(JSONFormatter().format(record))["message"], "path %E7%8C%AB")


class TestSetupStructuredLogging(unittest.TestCase):

    def setUp(self):
        self.root = logging.getLogger()
        self.access = logging.getLogger("uvicorn.access")
        self.saved = (self.root.handlers[:], self.root.level, self.access.handlers[:], self.access.level)

    def tearDown(self):
        self.root.handlers, level, self.access.handlers, access_level = self.saved
        self.root.setLevel(level)
        self.access.setLevel(access_level)

    def test_json_handler_shared_with_access_log(self):
        handler = setup_structured_logging("DEBUG")

        self.assertEqual(self.root.handlers, [handler])
        self.assertEqual(self.access.handlers, [handler])
        self.assertIsInstance(handler.formatter, JSONFormatter)
        self.assertEqual(self.root.level, logging.DEBUG)
        self.assertEqual(self.access.level, logging.WARNING)

    def test_text_format(self):
        handler = setup_structured_logging(json_format=False)
        self.assertIsInstance(handler.formatter, TextFormatter)
