"""
RSS feed parsing into normalized Episode records.
"""

import logging
import xml.sax
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import feedparser

from .config import DEFAULT_IMAGE_URL
from .errors import ParseError
from .models import UNKNOWN_PUBLISH_DATE, Episode
from .utils import extract_episode_number

UNKNOWN_TITLE = "Unknown Title"
NO_DESCRIPTION = "No description available"


class FeedParser:
    """Parses podcast RSS content into Episode objects."""

    def __init__(self, default_image_url: str = DEFAULT_IMAGE_URL):
        self.default_image_url = default_image_url
        self.logger = logging.getLogger(__name__)

    def parse(self, rss_content: bytes) -> List[Episode]:
        """Parse RSS content into episodes sorted newest first.

        A document that is not well-formed XML fails as a whole, even when
        some items could be read before the error.

        Raises:
            ParseError: If the content is not a readable feed.
        """
        parsed = feedparser.parse(rss_content)
        problem = parsed.get("bozo_exception") if parsed.get("bozo") else None

        if isinstance(problem, xml.sax.SAXException):
            raise ParseError(f"Malformed feed: {problem}")

        if not parsed.entries:
            if problem is not None:
                raise ParseError(f"Malformed feed: {problem}")
            if not parsed.get("version"):
                raise ParseError("Content is not a syndication feed")
        elif problem is not None:
            # Encoding and content-type warnings only
            self.logger.warning("Feed parsed with problems: %s", problem)

        episodes = [self.from_entry(entry) for entry in parsed.entries]
        self.logger.info("Parsed %d episodes from feed", len(episodes))
        return sorted(episodes, key=lambda e: e.publish_date, reverse=True)

    def from_entry(self, entry: Dict[str, Any]) -> Episode:
        """Create an Episode from a single feed entry."""
        title = entry.get("title")
        return Episode(
            title=title if title is not None else UNKNOWN_TITLE,
            description=self._get_description(entry),
            media_url=self._get_media_url(entry),
            publish_date=self._get_publish_date(entry),
            duration=entry.get("itunes_duration") or "",
            file_size_bytes=self._get_file_size(entry),
            image_url=self._get_image_url(entry),
            episode_number=extract_episode_number(title or ""),
        )

    def _get_description(self, entry: Dict[str, Any]) -> str:
        summary = entry.get("summary")
        if summary is not None:
            return summary

        for content in entry.get("content") or []:
            if content.get("value") is not None:
                return content["value"]

        return NO_DESCRIPTION

    def _get_publish_date(self, entry: Dict[str, Any]) -> datetime:
        published = entry.get("published_parsed")
        if not published:
            return UNKNOWN_PUBLISH_DATE
        # feedparser normalizes parsed dates to UTC
        return datetime(*published[:6], tzinfo=timezone.utc)

    def _get_enclosure_link(
        self, entry: Dict[str, Any]
    ) -> Optional[Dict[str, Any]]:
        for link in entry.get("links") or []:
            if link.get("rel") == "enclosure":
                return link
        return None

    def _get_media_url(self, entry: Dict[str, Any]) -> str:
        enclosure = self._get_enclosure_link(entry)
        if enclosure and enclosure.get("href"):
            return enclosure["href"]

        for enclosure in entry.get("enclosures") or []:
            url = enclosure.get("href") or enclosure.get("url")
            if url:
                return url

        return ""

    def _get_file_size(self, entry: Dict[str, Any]) -> int:
        enclosure = self._get_enclosure_link(entry)
        if not enclosure:
            return 0

        try:
            size = int(str(enclosure.get("length", "")).strip())
        except ValueError:
            return 0
        return size if size >= 0 else 0

    def _get_image_url(self, entry: Dict[str, Any]) -> str:
        # feedparser exposes an item level itunes:image as entry.image
        image = entry.get("image")
        if image is not None:
            return image.get("href") or ""
        return self.default_image_url
