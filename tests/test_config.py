"""
Tests for settings providers and configuration resolution.
"""

import json
import os
import shutil
import tempfile
import unittest
from unittest.mock import Mock, patch

from smodr.config import (
    CACHE_EXPIRY_HOURS_KEY,
    DATA_DIRECTORY_ENV,
    ChainedSettings,
    EnvironmentSettings,
    JsonFileSettings,
    MappingSettings,
    cache_expiry_hours,
    default_data_dir,
)


class TestCacheExpiryHours(unittest.TestCase):
    """Test resolution of the CacheExpiryHours setting."""

    def test_default_without_settings(self) -> None:
        """Test default when no provider is given."""
        self.assertEqual(cache_expiry_hours(None), 6)

    def test_default_when_absent(self) -> None:
        """Test default when the key is not set."""
        self.assertEqual(cache_expiry_hours(MappingSettings()), 6)

    def test_integer_value(self) -> None:
        """Test a typed integer setting."""
        settings = MappingSettings({CACHE_EXPIRY_HOURS_KEY: 12})
        self.assertEqual(cache_expiry_hours(settings), 12)

    def test_numeric_string_value(self) -> None:
        """Test a numeric string setting."""
        settings = MappingSettings({CACHE_EXPIRY_HOURS_KEY: " 24 "})
        self.assertEqual(cache_expiry_hours(settings), 24)

    def test_unparseable_values_use_default(self) -> None:
        """Test that invalid values silently resolve to the default."""
        for value in ("soon", "1.5", True, 2.5, [3]):
            with self.subTest(value=value):
                settings = MappingSettings({CACHE_EXPIRY_HOURS_KEY: value})
                self.assertEqual(cache_expiry_hours(settings), 6)

    def test_change_is_seen_on_next_lookup(self) -> None:
        """Test that values are not cached between lookups."""
        settings = MappingSettings({CACHE_EXPIRY_HOURS_KEY: 1})
        self.assertEqual(cache_expiry_hours(settings), 1)

        settings.set(CACHE_EXPIRY_HOURS_KEY, 48)
        self.assertEqual(cache_expiry_hours(settings), 48)


class TestSettingsProviders(unittest.TestCase):
    """Test the individual settings providers."""

    def setUp(self) -> None:
        """Set up test fixtures."""
        self.test_dir = tempfile.mkdtemp()
        self.settings_path = os.path.join(self.test_dir, "settings.json")

    def tearDown(self) -> None:
        """Clean up test fixtures."""
        shutil.rmtree(self.test_dir, ignore_errors=True)

    def test_environment_settings(self) -> None:
        """Test lookup of SMODR_ prefixed variables."""
        settings = EnvironmentSettings({"SMODR_CACHE_EXPIRY_HOURS": "3"})
        self.assertEqual(settings.get(CACHE_EXPIRY_HOURS_KEY), "3")
        self.assertIsNone(EnvironmentSettings({}).get(CACHE_EXPIRY_HOURS_KEY))

    def test_json_file_settings(self) -> None:
        """Test that the settings file is re-read on every lookup."""
        settings = JsonFileSettings(self.settings_path)
        self.assertIsNone(settings.get(CACHE_EXPIRY_HOURS_KEY))

        with open(self.settings_path, "w", encoding="utf-8") as f:
            json.dump({CACHE_EXPIRY_HOURS_KEY: 2}, f)
        self.assertEqual(settings.get(CACHE_EXPIRY_HOURS_KEY), 2)

    def test_json_file_settings_invalid_file(self) -> None:
        """Test that a corrupt settings file yields no value."""
        with open(self.settings_path, "w", encoding="utf-8") as f:
            f.write("{not json")

        settings = JsonFileSettings(self.settings_path)
        self.assertIsNone(settings.get(CACHE_EXPIRY_HOURS_KEY))

    def test_chained_settings_first_value_wins(self) -> None:
        """Test provider precedence."""
        settings = ChainedSettings(
            MappingSettings(),
            MappingSettings({CACHE_EXPIRY_HOURS_KEY: 8}),
            MappingSettings({CACHE_EXPIRY_HOURS_KEY: 9}),
        )
        self.assertEqual(settings.get(CACHE_EXPIRY_HOURS_KEY), 8)

    def test_default_data_dir_from_environment(self) -> None:
        """Test the data directory override."""
        with patch.dict(os.environ, {DATA_DIRECTORY_ENV: self.test_dir}):
            self.assertEqual(default_data_dir(), self.test_dir)

    @patch("platformdirs.user_data_dir", return_value="/home/user/.smodr")
    def test_default_data_dir_from_platformdirs(
        self, mock_user_data_dir: Mock
    ) -> None:
        """Test the per-user data directory fallback."""
        with patch.dict(os.environ, {}, clear=True):
            self.assertEqual(default_data_dir(), "/home/user/.smodr")
        mock_user_data_dir.assert_called_once_with("smodr")


if __name__ == "__main__":
    unittest.main()
