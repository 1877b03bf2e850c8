"""Tests for structured JSON logging."""

import json
import logging
import unittest
from datetime import datetime, timezone

from utils.logging import JSONFormatter, setup_structured_logging


class TestJSONFormatter(unittest.TestCase):

    def _record(self, msg='Post created', **extra):
        record = logging.LogRecord('services.post_service', logging.INFO, __file__, 1, msg, None, None)
        for key, value in extra.items():
            setattr(record, key, value)
        return record

    def test_includes_extra_fields(self):
        output = json.loads(JSONFormatter().format(self._record(postId='p1', userId='u1')))

        self.assertEqual(output['message'], 'Post created')
        self.assertEqual(output['level'], 'INFO')
        self.assertEqual(output['logger'], 'services.post_service')
        self.assertEqual(output['postId'], 'p1')
        self.assertEqual(output['userId'], 'u1')
        self.assertTrue(output['timestamp'].endswith('Z'))

    def test_non_json_extras_are_stringified(self):
        when = datetime(2026, 1, 1, tzinfo=timezone.utc)
        output = json.loads(JSONFormatter().format(self._record(at=when)))
        self.assertEqual(output['at'], str(when))


class TestSetupStructuredLogging(unittest.TestCase):

    def setUp(self):
        root = logging.getLogger()
        self._handlers = root.handlers[:]
        self._level = root.level

    def tearDown(self):
        root = logging.getLogger()
        root.handlers = self._handlers
        root.setLevel(self._level)

    def test_installs_json_handler(self):
        setup_structured_logging('debug')

        root = logging.getLogger()
        self.assertEqual(root.level, logging.DEBUG)
        self.assertIsInstance(root.handlers[0].formatter, JSONFormatter)
        self.assertEqual(logging.getLogger('pymongo').level, logging.WARNING)


if __name__ == '__main__':
    unittest.main()
