"""
Data models for podcast episodes and the episode cache.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Iterator, List, Optional

CACHE_VERSION = "1.0"

# Publish date used for feed items that carry none; sorts last.
UNKNOWN_PUBLISH_DATE = datetime.min.replace(tzinfo=timezone.utc)


def _parse_timestamp(value: str) -> datetime:
    """Parse an ISO 8601 timestamp, assuming UTC when no offset is given."""
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _format_timestamp(value: datetime) -> str:
    """Format as ISO 8601, treating a naive datetime as UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.isoformat()


class CacheFiles:
    """Standard cache folder file names."""

    FOLDER = "EpisodeCache"
    EPISODES = "episodes.json"
    METADATA = "cache_metadata.json"


@dataclass(eq=False)
class Episode:  # pylint: disable=too-many-instance-attributes
    """Represents a single podcast episode.

    Identity is the media URL: two episodes with the same non-empty
    ``media_url`` compare equal whatever their other fields hold. An
    episode without a media URL is only equal to itself.

    ``playback_position_seconds`` is local UI state and is not refreshed
    by the feed.
    """

    title: str = ""
    description: str = ""
    media_url: str = ""
    publish_date: datetime = UNKNOWN_PUBLISH_DATE
    duration: str = ""
    file_size_bytes: int = 0
    image_url: str = ""
    episode_number: str = ""
    playback_position_seconds: int = 0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Episode):
            return NotImplemented
        if not self.media_url or not other.media_url:
            return self is other
        return self.media_url == other.media_url

    def __hash__(self) -> int:
        if not self.media_url:
            return id(self)
        return hash(self.media_url)

    @property
    def formatted_publish_date(self) -> str:
        """Publish date for display, e.g. 'Jan 05, 2024'."""
        return self.publish_date.strftime("%b %d, %Y")

    @property
    def formatted_duration(self) -> str:
        """Duration for display."""
        return self.duration or "Unknown"

    @property
    def formatted_file_size(self) -> str:
        """File size in megabytes for display."""
        if self.file_size_bytes <= 0:
            return "Unknown"
        return f"{self.file_size_bytes / (1024 * 1024):.1f} MB"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Episode":
        """Create Episode from dictionary."""
        if not isinstance(data, dict):
            raise TypeError(f"episode record is not an object: {data!r}")
        data = data.copy()
        publish_date = data.pop("publish_date", None)
        episode = cls(**data)
        if publish_date:
            episode.publish_date = _parse_timestamp(publish_date)
        return episode

    def to_json(self) -> dict[str, Any]:
        """Convert episode to JSON-serializable dictionary."""
        data = asdict(self)
        data["publish_date"] = _format_timestamp(self.publish_date)
        return data


@dataclass
class CacheMetadata:
    """Describes the episode list stored alongside it in the cache."""

    last_updated_utc: datetime
    episode_count: int
    version: str = CACHE_VERSION

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CacheMetadata":
        """Create CacheMetadata from dictionary."""
        if not isinstance(data, dict):
            raise TypeError(f"metadata record is not an object: {data!r}")
        return cls(
            last_updated_utc=_parse_timestamp(data["last_updated_utc"]),
            episode_count=int(data["episode_count"]),
            version=data.get("version", CACHE_VERSION),
        )

    def to_json(self) -> dict[str, Any]:
        """Convert metadata to JSON-serializable dictionary."""
        return {
            "last_updated_utc": _format_timestamp(self.last_updated_utc),
            "episode_count": self.episode_count,
            "version": self.version,
        }


@dataclass
class CacheSnapshot:
    """Episode list and the metadata persisted with it."""

    episodes: List[Episode]
    metadata: CacheMetadata


class EpisodeSource(Enum):
    """Where an episode list handed to the caller came from."""

    FRESH = "fresh"
    CACHE = "cache"
    FALLBACK = "fallback"
    EMPTY = "empty"


@dataclass
class EpisodeResult:
    """Episode list together with its provenance.

    ``error`` carries the failure message when the feed could not be
    fetched and the result is a fallback or empty list.
    """

    episodes: List[Episode] = field(default_factory=list)
    source: EpisodeSource = EpisodeSource.EMPTY
    error: Optional[str] = None

    def __len__(self) -> int:
        return len(self.episodes)

    def __iter__(self) -> Iterator[Episode]:
        return iter(self.episodes)

    @property
    def is_stale(self) -> bool:
        """True when the episodes are served from an expired cache."""
        return self.source is EpisodeSource.FALLBACK
