"""
Episode repository combining the feed fetcher with the episode cache.

This is the error boundary of the package: no public method raises.
Fetch failures degrade to the last cached list, even an expired one,
and then to an empty list.
"""

import logging
from typing import List, Optional

from .cache import EpisodeCache
from .errors import NetworkError, ParseError
from .fetcher import FeedFetcher
from .models import CacheMetadata, Episode, EpisodeResult, EpisodeSource


class EpisodeRepository:
    """Serves episodes from the cache or the feed."""

    def __init__(self, fetcher: FeedFetcher, cache: EpisodeCache):
        """Initialize with fetcher and cache instances."""
        self.fetcher = fetcher
        self.cache = cache
        self.logger = logging.getLogger(__name__)

    def load_episodes(self, force_refresh: bool = False) -> EpisodeResult:
        """Get episodes along with where they came from."""
        if not force_refresh:
            cached = self._read_valid_cache()
            if cached:
                self.logger.info(
                    "Using cached episodes: %d items", len(cached)
                )
                return EpisodeResult(cached, EpisodeSource.CACHE)

        self.logger.info("Fetching fresh episodes from RSS feed...")
        try:
            episodes = self.fetcher.fetch()
        except (NetworkError, ParseError) as e:
            self.logger.error("Error fetching episodes: %s", e)
            return self._fallback(str(e))
        except Exception as e:  # pylint: disable=broad-except
            self.logger.exception("Unexpected error fetching episodes: %s", e)
            return self._fallback(str(e))

        if not episodes:
            self.logger.warning("Feed returned no episodes")
            return EpisodeResult([], EpisodeSource.EMPTY)

        if not self.cache.write(episodes):
            self.logger.warning("Fetched episodes could not be cached")
        return EpisodeResult(episodes, EpisodeSource.FRESH)

    def get_episodes(self, force_refresh: bool = False) -> List[Episode]:
        """Get episodes, newest first. Never raises."""
        return self.load_episodes(force_refresh).episodes

    def get_cached_episodes_only(self) -> Optional[List[Episode]]:
        """Get the cached episodes if the cache is still valid."""
        return self._read_valid_cache()

    def clear_cache(self) -> bool:
        """Delete all cached data."""
        return self.cache.clear()

    def get_cache_metadata(self) -> Optional[CacheMetadata]:
        """Get metadata of the current cache contents."""
        return self.cache.get_metadata()

    def get_cache_size(self) -> int:
        """Get the size of the cache in bytes."""
        return self.cache.get_size()

    def _read_valid_cache(self) -> Optional[List[Episode]]:
        if not self.cache.is_valid():
            return None
        snapshot = self.cache.read()
        return snapshot.episodes if snapshot else None

    def _fallback(self, error: str) -> EpisodeResult:
        """Serve whatever the cache holds after a failed fetch."""
        episodes = self.cache.read_fallback()
        if episodes:
            self.logger.warning(
                "Using cached episodes as fallback: %d items", len(episodes)
            )
            return EpisodeResult(episodes, EpisodeSource.FALLBACK, error)
        return EpisodeResult([], EpisodeSource.EMPTY, error)
