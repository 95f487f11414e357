"""
Test helpers for building episodes.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, List

from smodr.models import Episode


def create_test_episode(**overrides: Any) -> Episode:
    """Create an Episode with sensible defaults."""
    values: dict[str, Any] = {
        "title": "SModcast #1 Test Episode",
        "description": "A test episode",
        "media_url": "http://test.com/episode1.mp3",
        "publish_date": datetime(2024, 1, 1, tzinfo=timezone.utc),
        "duration": "1:00:00",
        "file_size_bytes": 1000,
        "image_url": "http://test.com/image.jpg",
        "episode_number": "1",
    }
    values.update(overrides)
    return Episode(**values)


def create_test_episodes(count: int) -> List[Episode]:
    """Create count distinct episodes, newest first."""
    newest = datetime(2024, 5, 1, tzinfo=timezone.utc)
    return [
        create_test_episode(
            title=f"SModcast #{count - i} Episode",
            media_url=f"http://test.com/episode{count - i}.mp3",
            publish_date=newest - timedelta(days=i),
            episode_number=str(count - i),
        )
        for i in range(count)
    ]
