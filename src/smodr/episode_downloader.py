"""
Download service for podcast episodes.

This module provides a clean interface for saving episode media files
with clear results.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from .downloader import download_file_to_path
from .models import Episode
from .storage import Storage
from .utils import get_file_extension, sanitize_filename


@dataclass
class DownloadResult:
    """Result of a download operation."""

    success: bool
    file_path: Optional[str] = None
    error: Optional[str] = None
    was_cached: bool = False


class EpisodeDownloader:
    """Service for downloading podcast episodes."""

    def __init__(self, storage: Storage, show_progress: bool = True):
        """Initialize with storage instance."""
        self.storage = storage
        self.show_progress = show_progress
        self.logger = logging.getLogger(__name__)

    def get_episode_filename(self, episode: Episode) -> str:
        """Suggested file name: the title plus the media URL's extension."""
        extension = get_file_extension(episode.media_url)
        return sanitize_filename(f"{episode.title}{extension}")

    def get_target_path(self, episode: Episode, output_dir: str) -> str:
        """Get full path an episode is saved to inside output_dir."""
        return self.storage.join_path(
            output_dir, self.get_episode_filename(episode)
        )

    def download_episode(
        self, episode: Episode, output_dir: str
    ) -> DownloadResult:
        """Download single episode into output_dir."""
        if not episode.media_url:
            self.logger.error("Episode '%s' has no media URL", episode.title)
            return DownloadResult(
                success=False, error="Episode has no media URL to download."
            )

        target_path = self.get_target_path(episode, output_dir)

        if self.storage.file_exists(target_path):
            self.logger.debug("Episode already exists: %s", target_path)
            return DownloadResult(
                success=True, file_path=target_path, was_cached=True
            )

        try:
            self.storage.ensure_directory(output_dir)
            file_path, was_downloaded = download_file_to_path(
                episode.media_url, target_path, self.show_progress
            )
        except Exception as e:  # pylint: disable=broad-except
            self.logger.error(
                "Download error for episode %s: %s", episode.title, e
            )
            return DownloadResult(success=False, error=str(e))

        if file_path:
            return DownloadResult(
                success=True,
                file_path=file_path,
                was_cached=not was_downloaded,
            )
        return DownloadResult(
            success=False, error=f"Failed to download {episode.title}"
        )
