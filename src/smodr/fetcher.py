"""
Fetching the podcast feed into an episode list.
"""

import logging
from typing import List, Optional

from .config import FEED_URL, REQUEST_TIMEOUT
from .downloader import download_rss_from_url
from .models import Episode
from .parser import FeedParser


class FeedFetcher:
    """Retrieves the podcast feed and parses it into episodes."""

    def __init__(
        self,
        feed_url: str = FEED_URL,
        parser: Optional[FeedParser] = None,
        timeout: int = REQUEST_TIMEOUT,
    ):
        self.feed_url = feed_url
        self.parser = parser or FeedParser()
        self.timeout = timeout
        self.logger = logging.getLogger(__name__)

    def fetch(self) -> List[Episode]:
        """Fetch the feed and return its episodes, newest first.

        Raises:
            NetworkError: If the feed could not be downloaded.
            ParseError: If the downloaded document is not a valid feed.
        """
        self.logger.info("Fetching episodes from %s", self.feed_url)
        rss_content = download_rss_from_url(self.feed_url, self.timeout)
        return self.parser.parse(rss_content)
