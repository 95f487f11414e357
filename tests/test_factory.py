"""
Tests for the factory wiring.
"""

import json
import os
from unittest.mock import patch

from smodr.config import CACHE_EXPIRY_HOURS_KEY, FEED_URL
from smodr.factory import create_manager, create_repository, create_settings
from smodr.manager import EpisodeManager
from smodr.models import CacheFiles

from tests.base import SmodrTestBase


class TestFactory(SmodrTestBase):
    """Test dependency wiring."""

    def test_create_repository(self) -> None:
        """Test repository components point at the data directory."""
        repository = create_repository(self.test_dir)

        self.assertEqual(repository.fetcher.feed_url, FEED_URL)
        self.assertEqual(
            repository.cache.cache_dir,
            os.path.join(self.test_dir, CacheFiles.FOLDER),
        )

    def test_create_repository_custom_settings(self) -> None:
        """Test that given settings reach the cache."""
        repository = create_repository(
            self.test_dir, self.settings, "http://test.com/rss"
        )

        self.assertIs(repository.cache.settings, self.settings)
        self.assertEqual(repository.fetcher.feed_url, "http://test.com/rss")

    def test_create_repository_default_data_dir(self) -> None:
        """Test the data directory from the environment."""
        with patch.dict(os.environ, {"SMODR_DATA_DIRECTORY": self.test_dir}):
            repository = create_repository()

        self.assertEqual(repository.cache.storage.base_dir, self.test_dir)

    def test_create_settings_layers(self) -> None:
        """Test environment values override the settings file."""
        with open(
            os.path.join(self.test_dir, "settings.json"), "w", encoding="utf-8"
        ) as f:
            json.dump({CACHE_EXPIRY_HOURS_KEY: 12}, f)
        settings = create_settings(self.test_dir)

        with patch.dict(os.environ, {}, clear=True):
            self.assertEqual(settings.get(CACHE_EXPIRY_HOURS_KEY), 12)
        with patch.dict(os.environ, {"SMODR_CACHE_EXPIRY_HOURS": "1"}):
            self.assertEqual(settings.get(CACHE_EXPIRY_HOURS_KEY), "1")

    def test_create_manager(self) -> None:
        """Test manager wiring shares the repository storage."""
        manager = create_manager(self.test_dir, show_progress=False)

        self.assertIsInstance(manager, EpisodeManager)
        self.assertIs(
            manager.downloader.storage, manager.repository.cache.storage
        )
        self.assertFalse(manager.downloader.show_progress)
