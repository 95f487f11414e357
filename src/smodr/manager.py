"""
Main orchestration class used by front ends.

The manager keeps the currently displayed episode list and runs the
blocking repository and download calls in worker threads, so awaiting
callers on an event loop are never blocked. State changes are announced
to subscribers.
"""

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, List, Optional

from .episode_downloader import DownloadResult, EpisodeDownloader
from .models import CacheMetadata, Episode, EpisodeResult, EpisodeSource
from .repository import EpisodeRepository
from .utils import format_kilobytes

NO_EPISODES_MESSAGE = (
    "No episodes found. Please check your internet connection."
)


class ManagerEvent(Enum):
    """State changes announced to subscribers."""

    EPISODES_REPLACED = "episodes_replaced"
    CACHE_INFO_UPDATED = "cache_info_updated"
    LOADING_CHANGED = "loading_changed"


Listener = Callable[[ManagerEvent, Any], None]


@dataclass
class CacheInfo:
    """Cache metadata and size, ready for display."""

    metadata: Optional[CacheMetadata]
    size_bytes: int

    def describe(self) -> str:
        """Human readable cache report."""
        if self.metadata is None:
            return "No cache data available."

        last_updated = self.metadata.last_updated_utc.strftime(
            "%Y-%m-%d %H:%M:%S"
        )
        return (
            f"Episodes: {self.metadata.episode_count}\n"
            f"Last Updated: {last_updated}\n"
            f"Cache Size: {format_kilobytes(self.size_bytes)}\n"
            f"Version: {self.metadata.version}"
        )


class EpisodeManager:  # pylint: disable=too-many-instance-attributes
    """
    Loads, refreshes and downloads episodes for a front end, using
    dependency injection.
    """

    def __init__(
        self,
        repository: EpisodeRepository,
        downloader: EpisodeDownloader,
    ):
        """Initialize with dependencies."""
        self.logger = logging.getLogger(__name__)
        self.repository = repository
        self.downloader = downloader

        self.episodes: List[Episode] = []
        self.source = EpisodeSource.EMPTY
        self.selected_episode: Optional[Episode] = None
        self.is_loading = False
        self.loading_message = "Loading episodes..."
        self._listeners: List[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; return a function that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def load_episodes(
        self, force_refresh: bool = False
    ) -> EpisodeResult:
        """Load episodes into the manager and announce the new list."""
        self._set_loading(
            True,
            "Refreshing episodes from Smodcast RSS feed..."
            if force_refresh
            else "Fetching episodes from Smodcast RSS feed...",
        )
        message = ""
        try:
            result = await asyncio.to_thread(
                self.repository.load_episodes, force_refresh
            )
            self._replace_episodes(result.episodes, result.source)
            if result.source is EpisodeSource.FRESH:
                self._emit(ManagerEvent.CACHE_INFO_UPDATED, None)
            if not result.episodes:
                message = NO_EPISODES_MESSAGE
        finally:
            self._set_loading(False, message)
        return result

    async def refresh_episodes(self) -> EpisodeResult:
        """Reload episodes bypassing the cache."""
        return await self.load_episodes(force_refresh=True)

    async def load_cached_first(self) -> EpisodeResult:
        """Show valid cached episodes at once, else load from the network."""
        cached = await self.get_cached_episodes_only()
        if cached:
            self.logger.info("Showing %d cached episodes", len(cached))
            self._replace_episodes(cached, EpisodeSource.CACHE)
            return EpisodeResult(cached, EpisodeSource.CACHE)
        return await self.load_episodes()

    async def get_episodes(self, force_refresh: bool = False) -> List[Episode]:
        """Get episodes without touching the manager's state."""
        return await asyncio.to_thread(
            self.repository.get_episodes, force_refresh
        )

    async def get_cached_episodes_only(self) -> Optional[List[Episode]]:
        """Get episodes from a valid cache only."""
        return await asyncio.to_thread(
            self.repository.get_cached_episodes_only
        )

    async def clear_cache(self) -> bool:
        """Delete cached data and announce the change."""
        success = await asyncio.to_thread(self.repository.clear_cache)
        self._emit(ManagerEvent.CACHE_INFO_UPDATED, None)
        return success

    async def get_cache_metadata(self) -> Optional[CacheMetadata]:
        """Get metadata of the current cache contents."""
        return await asyncio.to_thread(self.repository.get_cache_metadata)

    async def get_cache_size(self) -> int:
        """Get the size of the cache in bytes."""
        return await asyncio.to_thread(self.repository.get_cache_size)

    async def get_cache_info(self) -> CacheInfo:
        """Get cache metadata and size together."""
        metadata = await self.get_cache_metadata()
        size_bytes = await self.get_cache_size()
        return CacheInfo(metadata=metadata, size_bytes=size_bytes)

    def select_episode(self, episode: Optional[Episode]) -> None:
        """Mark an episode as selected."""
        self.selected_episode = episode

    async def download_episode(
        self, episode: Episode, output_dir: str
    ) -> DownloadResult:
        """Download an episode's media file into output_dir."""
        result = await asyncio.to_thread(
            self.downloader.download_episode, episode, output_dir
        )
        if result.success:
            self.logger.info(
                "Downloaded '%s' to %s", episode.title, result.file_path
            )
        else:
            self.logger.error(
                "Failed to download '%s': %s", episode.title, result.error
            )
        return result

    def _replace_episodes(
        self, episodes: List[Episode], source: EpisodeSource
    ) -> None:
        self.episodes = list(episodes)
        self.source = source
        if self.selected_episode not in self.episodes:
            self.selected_episode = None
        self._emit(ManagerEvent.EPISODES_REPLACED, self.episodes)

    def _set_loading(self, is_loading: bool, message: str) -> None:
        self.is_loading = is_loading
        self.loading_message = message
        self._emit(ManagerEvent.LOADING_CHANGED, is_loading)

    def _emit(self, event: ManagerEvent, payload: Any) -> None:
        for listener in list(self._listeners):
            try:
                listener(event, payload)
            except Exception:  # pylint: disable=broad-except
                self.logger.exception("Listener failed handling %s", event)
