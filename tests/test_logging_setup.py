"""
Tests for the package logger setup and secret masking.
"""

import logging
import unittest

import colorlog

from edgeos_api.logging_setup import log, mask, setup_logging


class TestMask(unittest.TestCase):
    def test_missing_secret(self):
        self.assertEqual(mask(None), "<none>")
        self.assertEqual(mask(""), "<none>")

    def test_keeps_only_a_prefix(self):
        self.assertEqual(mask("abcdefgh"), "abcdef…")
        self.assertEqual(mask("abcdefgh", keep=2), "ab…")


class TestSetupLogging(unittest.TestCase):
    def setUp(self):
        self._handlers = list(log.handlers)
        self._level = log.level

    def tearDown(self):
        log.handlers[:] = self._handlers
        log.setLevel(self._level)

    def test_installs_one_coloured_handler(self):
        setup_logging()
        setup_logging()
        self.assertEqual(len(log.handlers), 1)
        handler = log.handlers[0]
        self.assertIsInstance(handler, colorlog.StreamHandler)
        self.assertIsInstance(handler.formatter, colorlog.ColoredFormatter)
        self.assertEqual(log.level, logging.INFO)

    def test_debug_level(self):
        setup_logging(debug=True)
        self.assertEqual(log.level, logging.DEBUG)


if __name__ == "__main__":
    unittest.main()
