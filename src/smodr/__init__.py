"""
smodr package - Fetches the SModcast RSS feed, caches the episode list on
disk with an expiry window, and downloads episodes.

The repository layer serves cached episodes while they are fresh, falls
back to stale cached data when the feed cannot be reached, and never
raises to its caller.
"""

from .cache import EpisodeCache
from .factory import create_manager, create_repository
from .fetcher import FeedFetcher
from .manager import EpisodeManager
from .models import (
    CacheMetadata,
    CacheSnapshot,
    Episode,
    EpisodeResult,
    EpisodeSource,
)
from .repository import EpisodeRepository

__all__ = [
    "create_manager",
    "create_repository",
    "CacheMetadata",
    "CacheSnapshot",
    "Episode",
    "EpisodeCache",
    "EpisodeManager",
    "EpisodeRepository",
    "EpisodeResult",
    "EpisodeSource",
    "FeedFetcher",
]
