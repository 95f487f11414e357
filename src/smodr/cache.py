"""
Time-expiring disk cache of the episode list.

The cache folder holds two JSON files: the episode list and a metadata
record describing it. No method raises; failures are logged and turned
into None, False or 0.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Callable, List, Optional

from .config import Settings, cache_expiry_hours
from .errors import StorageError
from .models import CacheFiles, CacheMetadata, CacheSnapshot, Episode
from .storage import Storage


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class EpisodeCache:
    """Persists the episode list with a last-updated timestamp."""

    def __init__(
        self,
        storage: Storage,
        settings: Optional[Settings] = None,
        clock: Callable[[], datetime] = _utc_now,
    ):
        """Initialize with storage, a settings provider and a UTC clock."""
        self.storage = storage
        self.settings = settings
        self.clock = clock
        self.cache_dir = storage.join_path(storage.base_dir, CacheFiles.FOLDER)
        self.logger = logging.getLogger(__name__)
        self._initialized = False

    @property
    def episodes_path(self) -> str:
        return self.storage.join_path(self.cache_dir, CacheFiles.EPISODES)

    @property
    def metadata_path(self) -> str:
        return self.storage.join_path(self.cache_dir, CacheFiles.METADATA)

    @property
    def expiry_window(self) -> timedelta:
        """Configured expiry window, re-read from settings on every call."""
        return timedelta(hours=cache_expiry_hours(self.settings))

    def initialize(self) -> bool:
        """Create the cache folder if needed; return whether it is usable."""
        if self._initialized:
            return True

        try:
            self.storage.ensure_directory(self.cache_dir)
        except StorageError as e:
            self.logger.error("Error initializing cache folder: %s", e)
            return False

        self._initialized = True
        return True

    def get_metadata(self) -> Optional[CacheMetadata]:
        """Load the cache metadata record, or None if absent or unreadable."""
        if not self.initialize():
            return None

        try:
            data = self.storage.read_json(self.metadata_path)
            if data is None:
                return None
            return CacheMetadata.from_dict(data)
        except (
            StorageError,
            AttributeError,
            KeyError,
            TypeError,
            ValueError,
        ) as e:
            self.logger.error("Error reading cache metadata: %s", e)
            return None

    def is_valid(self) -> bool:
        """Check whether the cached list is younger than the expiry window."""
        metadata = self.get_metadata()
        return metadata is not None and self._is_fresh(metadata)

    def read(self) -> Optional[CacheSnapshot]:
        """Load the cached episodes if the cache is still valid."""
        if not self.initialize():
            return None

        metadata = self.get_metadata()
        if metadata is None or not self._is_fresh(metadata):
            return None

        episodes = self._load_episodes()
        if episodes is None:
            return None

        if len(episodes) != metadata.episode_count:
            self.logger.warning(
                "Cache metadata lists %d episodes but %d are stored",
                metadata.episode_count,
                len(episodes),
            )
            return None

        self.logger.info("Loaded %d episodes from cache", len(episodes))
        return CacheSnapshot(episodes=episodes, metadata=metadata)

    def read_fallback(self) -> Optional[List[Episode]]:
        """Load the cached episodes regardless of their age."""
        if not self.initialize():
            return None
        return self._load_episodes()

    def write(self, episodes: List[Episode]) -> bool:
        """Replace the cached episode list and its metadata.

        The old metadata is removed first and the new one written last,
        so a metadata file always describes a completely written list.
        """
        if not self.initialize():
            return False

        metadata = CacheMetadata(
            last_updated_utc=self.clock(), episode_count=len(episodes)
        )
        try:
            self.storage.delete_file(self.metadata_path)
            self.storage.write_json(
                self.episodes_path, [episode.to_json() for episode in episodes]
            )
            self.storage.write_json(self.metadata_path, metadata.to_json())
        except StorageError as e:
            self.logger.error("Error caching episodes: %s", e)
            return False

        self.logger.info("Cached %d episodes successfully", len(episodes))
        return True

    def clear(self) -> bool:
        """Delete every file in the cache folder, keeping the folder."""
        if not self.initialize():
            return False

        try:
            for path in self.storage.list_files(self.cache_dir):
                self.storage.delete_file(path)
        except StorageError as e:
            self.logger.error("Error clearing cache: %s", e)
            return False

        self.logger.info("Cache cleared successfully")
        return True

    def get_size(self) -> int:
        """Total size in bytes of the files in the cache folder."""
        if not self.initialize():
            return 0

        try:
            return sum(
                self.storage.file_size(path)
                for path in self.storage.list_files(self.cache_dir)
            )
        except StorageError as e:
            self.logger.error("Error calculating cache size: %s", e)
            return 0

    def _load_episodes(self) -> Optional[List[Episode]]:
        try:
            data = self.storage.read_json(self.episodes_path)
            if data is None:
                return None
            if not isinstance(data, list):
                raise TypeError("episode cache is not a list")
            return [Episode.from_dict(item) for item in data]
        except (
            StorageError,
            AttributeError,
            KeyError,
            TypeError,
            ValueError,
        ) as e:
            self.logger.error("Error reading cached episodes: %s", e)
            return None

    def _is_fresh(self, metadata: CacheMetadata) -> bool:
        age = self.clock() - metadata.last_updated_utc
        is_fresh = age < self.expiry_window
        self.logger.debug(
            "Cache age: %.1f hours, Valid: %s",
            age.total_seconds() / 3600,
            is_fresh,
        )
        return is_fresh
