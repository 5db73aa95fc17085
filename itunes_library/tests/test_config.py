#!/usr/bin/env python3
"""
Tests for configuration loading and parser settings
"""

import os
import tempfile
import unittest
from datetime import timezone
from unittest.mock import patch

from itunes_library.core.config import (
    DEFAULT_DATE_FORMAT,
    ConfigurationManager,
    MissingTrackPolicy,
    ParserSettings,
    get_config,
    reset_config,
)

CONFIG_YAML = """
parser:
  date_format: "%Y-%m-%d %H:%M:%S"
  timezone: "UTC"
  missing_track_policy: "null"
  url_schemes: [file, HTTPS]
logging:
  level: "DEBUG"
environment_overrides:
  enabled: true
  prefix: "ITL_TEST_"
  mappings:
    parser.missing_track_policy: "MISSING_TRACK_POLICY"
    logging.level: "LOG_LEVEL"
"""


class TestConfigurationManager(unittest.TestCase):
    """Test YAML configuration access"""

    def setUp(self) -> None:
        with tempfile.NamedTemporaryFile(
            mode="w", suffix=".yml", delete=False, encoding="utf-8"
        ) as f:
            f.write(CONFIG_YAML)
            self.config_path = f.name

    def tearDown(self) -> None:
        os.unlink(self.config_path)
        reset_config()

    def test_get_dot_path(self) -> None:
        config = ConfigurationManager(self.config_path)

        self.assertEqual(config.get("parser.timezone"), "UTC")
        self.assertEqual(config.get("logging.level"), "DEBUG")
        self.assertEqual(config.get("parser.missing", "fallback"), "fallback")
        self.assertEqual(config.get_section("logging")["level"], "DEBUG")

    def test_parser_settings_from_config(self) -> None:
        settings = ConfigurationManager(self.config_path).parser_settings

        self.assertEqual(settings.date_format, "%Y-%m-%d %H:%M:%S")
        self.assertEqual(settings.missing_track_policy, MissingTrackPolicy.NULL)
        self.assertEqual(settings.url_schemes, frozenset({"file", "https"}))

    @patch.dict(
        os.environ,
        {"ITL_TEST_MISSING_TRACK_POLICY": "fail", "ITL_TEST_LOG_LEVEL": "WARNING"},
    )
    def test_environment_overrides(self) -> None:
        config = ConfigurationManager(self.config_path)

        self.assertEqual(config.parser_settings.missing_track_policy, MissingTrackPolicy.FAIL)
        self.assertEqual(config.logging_config["level"], "WARNING")

    def test_missing_file_uses_defaults(self) -> None:
        config = ConfigurationManager("/nonexistent/config.yml")
        settings = config.parser_settings

        self.assertEqual(settings, ParserSettings())
        self.assertEqual(config.logging_config, {"level": "INFO", "file": None})

    def test_invalid_yaml_uses_defaults(self) -> None:
        with open(self.config_path, "w", encoding="utf-8") as f:
            f.write("parser: [unclosed")

        config = ConfigurationManager(self.config_path)

        self.assertEqual(config.get_section("parser"), {})

    def test_unknown_policy_falls_back_to_drop(self) -> None:
        with open(self.config_path, "w", encoding="utf-8") as f:
            f.write("parser:\n  missing_track_policy: sometimes\n")

        settings = ConfigurationManager(self.config_path).parser_settings

        self.assertEqual(settings.missing_track_policy, MissingTrackPolicy.DROP)

    def test_reload_picks_up_file_changes(self) -> None:
        config = ConfigurationManager(self.config_path)
        with open(self.config_path, "w", encoding="utf-8") as f:
            f.write("parser:\n  timezone: Europe/Berlin\n")

        config.reload()

        self.assertEqual(config.get("parser.timezone"), "Europe/Berlin")
        self.assertEqual(
            config.parser_settings.missing_track_policy, MissingTrackPolicy.DROP
        )

    @patch("itunes_library.core.config.logger")
    def test_unknown_timezone_falls_back_to_utc(self, mock_logger) -> None:
        with open(self.config_path, "w", encoding="utf-8") as f:
            f.write("parser:\n  timezone: Mars/Olympus\n")

        settings = ConfigurationManager(self.config_path).parser_settings

        self.assertEqual(settings.timezone, "UTC")
        self.assertIs(settings.tzinfo, timezone.utc)
        mock_logger.warning.assert_called_once()
        self.assertIn("Mars/Olympus", mock_logger.warning.call_args[0][0])

    def test_get_config_is_shared(self) -> None:
        reset_config()
        first = get_config(self.config_path)
        second = get_config()

        self.assertIs(first, second)
        self.assertEqual(first.config_path, self.config_path)


class TestParserSettings(unittest.TestCase):
    """Test the immutable settings object"""

    def test_defaults(self) -> None:
        settings = ParserSettings()

        self.assertEqual(settings.date_format, DEFAULT_DATE_FORMAT)
        self.assertIs(settings.tzinfo, timezone.utc)
        self.assertEqual(settings.missing_track_policy, MissingTrackPolicy.DROP)
        self.assertIn("file", settings.url_schemes)

    def test_named_timezone(self) -> None:
        settings = ParserSettings(timezone="Europe/Berlin")

        self.assertEqual(settings.timezone, "Europe/Berlin")
        self.assertEqual(str(settings.tzinfo), "Europe/Berlin")

    @patch("itunes_library.core.config.logger")
    def test_unknown_timezone_falls_back_to_utc(self, mock_logger) -> None:
        settings = ParserSettings(timezone="Mars/Olympus")

        self.assertEqual(settings.timezone, "UTC")
        self.assertIs(settings.tzinfo, timezone.utc)
        mock_logger.warning.assert_called_once()

    def test_is_frozen(self) -> None:
        settings = ParserSettings()
        with self.assertRaises(AttributeError):
            settings.timezone = "Europe/Berlin"  # type: ignore[misc]


if __name__ == "__main__":
    unittest.main()
