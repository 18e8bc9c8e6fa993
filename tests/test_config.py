"""Tests for environment-driven settings."""

import os
import unittest
from unittest.mock import patch

from bunsekikun.config import Settings
from bunsekikun.services.jisho import JISHO_SEARCH_URL


class TestSettings(unittest.TestCase):

    def test_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings.from_env()

        self.assertEqual(settings.sudachi_dict, "core")
        self.assertEqual(settings.split_mode, "A")
        self.assertEqual(settings.tagger_timeout, 10.0)
        self.assertEqual(settings.jisho_url, JISHO_SEARCH_URL)
        self.assertEqual(settings.cors_origins, ["*"])
        self.assertTrue(settings.log_json)

    def test_overrides(self):
        env = {
            "BUNSEKIKUN_SUDACHI_DICT": "full",
            "BUNSEKIKUN_SPLIT_MODE": "c",
            "BUNSEKIKUN_TAGGER_TIMEOUT": "2.5",
            "BUNSEKIKUN_LOG_LEVEL": "debug",
            "BUNSEKIKUN_LOG_JSON": "off",
            "BUNSEKIKUN_CORS_ORIGINS": "http://localhost:3000, https://example.org",
        }
        with patch.dict(os.environ, env, clear=True):
            settings = Settings.from_env()

        self.assertEqual(settings.sudachi_dict, "full")
        self.assertEqual(settings.split_mode, "C")
        self.assertEqual(settings.tagger_timeout, 2.5)
        self.assertEqual(settings.log_level, "DEBUG")
        self.assertFalse(settings.log_json)
        self.assertEqual(settings.cors_origins, ["http://localhost:3000", "https://example.org"])

    def test_invalid_timeout(self):
        for value in ("soon", "0", "-1"):
            with self.subTest(value=value), patch.dict(os.environ, {"BUNSEKIKUN_TAGGER_TIMEOUT": value}, clear=True):
                with self.assertRaises(ValueError):
                    Settings.from_env()

    def test_invalid_split_mode(self):
        with patch.dict(os.environ, {"BUNSEKIKUN_SPLIT_MODE": "X"}, clear=True):
            with self.assertRaises(ValueError):
                Settings.from_env()
