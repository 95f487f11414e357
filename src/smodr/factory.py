"""
Factory functions for creating EpisodeManager instances.

This module provides simple factory functions that wire up dependencies
clearly.
"""

import logging
import os
from typing import Optional

from .cache import EpisodeCache
from .config import (
    FEED_URL,
    ChainedSettings,
    EnvironmentSettings,
    JsonFileSettings,
    Settings,
    default_data_dir,
)
from .episode_downloader import EpisodeDownloader
from .fetcher import FeedFetcher
from .manager import EpisodeManager
from .repository import EpisodeRepository
from .storage import Storage

SETTINGS_FILE = "settings.json"


def create_settings(data_dir: str) -> Settings:
    """Environment variables first, then the data directory settings file."""
    return ChainedSettings(
        EnvironmentSettings(),
        JsonFileSettings(os.path.join(data_dir, SETTINGS_FILE)),
    )


def create_repository(
    data_dir: Optional[str] = None,
    settings: Optional[Settings] = None,
    feed_url: str = FEED_URL,
) -> EpisodeRepository:
    """Create EpisodeRepository with a disk cache under data_dir."""
    data_dir = data_dir or default_data_dir()
    if settings is None:
        settings = create_settings(data_dir)

    storage = Storage(data_dir)
    cache = EpisodeCache(storage, settings)
    fetcher = FeedFetcher(feed_url)
    return EpisodeRepository(fetcher, cache)


def create_manager(
    data_dir: Optional[str] = None,
    settings: Optional[Settings] = None,
    feed_url: str = FEED_URL,
    show_progress: bool = True,
) -> EpisodeManager:
    """Create EpisodeManager with all dependencies wired up."""
    logger = logging.getLogger(__name__)
    repository = create_repository(data_dir, settings, feed_url)
    downloader = EpisodeDownloader(repository.cache.storage, show_progress)
    logger.info(
        "Created EpisodeManager for %s (cache in %s)",
        feed_url,
        repository.cache.cache_dir,
    )
    return EpisodeManager(repository, downloader)
