"""
Command-line interface for browsing and downloading SModcast episodes.
"""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from .config import (
    CACHE_EXPIRY_HOURS_KEY,
    MappingSettings,
    Settings,
    default_data_dir,
)
from .factory import create_manager, create_settings
from .manager import EpisodeManager
from .models import EpisodeSource

_SOURCE_LABELS = {
    EpisodeSource.FRESH: "fresh from feed",
    EpisodeSource.CACHE: "from cache",
    EpisodeSource.FALLBACK: "from expired cache, feed unavailable",
    EpisodeSource.EMPTY: "nothing available",
}


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="smodr",
        description="List and download SModcast episodes",
    )
    parser.add_argument(
        "--data-dir",
        help="Data directory (default: $SMODR_DATA_DIRECTORY)",
    )
    parser.add_argument(
        "--refresh",
        action="store_true",
        help="Fetch the feed even if the cache is still valid",
    )
    parser.add_argument(
        "--limit", type=int, default=20, help="Number of episodes to list"
    )
    parser.add_argument(
        "--expiry-hours", type=int, help="Cache expiry window in hours"
    )
    parser.add_argument(
        "--cache-info", action="store_true", help="Show cache information"
    )
    parser.add_argument(
        "--clear-cache", action="store_true", help="Delete cached episodes"
    )
    parser.add_argument(
        "--download",
        type=int,
        metavar="N",
        help="Download the N-th listed episode (1 is the newest)",
    )
    parser.add_argument(
        "--output-dir", default=".", help="Where downloaded episodes go"
    )
    parser.add_argument(
        "--no-progress", action="store_true", help="Disable progress bars"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    return parser


async def run(args: argparse.Namespace, manager: EpisodeManager) -> int:
    """Run the requested command, returning the exit code."""
    if args.clear_cache:
        success = await manager.clear_cache()
        print(
            "Cache cleared successfully."
            if success
            else "Failed to clear cache."
        )
        return 0 if success else 1

    if args.cache_info:
        info = await manager.get_cache_info()
        print(info.describe())
        return 0

    result = await manager.load_episodes(force_refresh=args.refresh)
    source_label = _SOURCE_LABELS[result.source]
    print(f"Found {len(result.episodes)} episodes ({source_label})")
    if not result.episodes:
        print(manager.loading_message, file=sys.stderr)
        return 1

    if args.download is not None:
        if not 1 <= args.download <= len(result.episodes):
            print(f"Error: no episode number {args.download}", file=sys.stderr)
            return 1

        episode = result.episodes[args.download - 1]
        size = episode.formatted_file_size
        print(f"Downloading {episode.title} ({size})...")
        download = await manager.download_episode(episode, args.output_dir)
        if not download.success:
            print(f"Download failed: {download.error}", file=sys.stderr)
            return 1
        print(f"Saved to {download.file_path}")
        return 0

    for i, episode in enumerate(result.episodes[: args.limit], 1):
        print(
            f"  {i}. [{episode.formatted_publish_date}] {episode.title}"
            f" ({episode.formatted_duration}, {episode.formatted_file_size})"
        )
    return 0


def main(argv: Optional[List[str]] = None) -> None:
    """CLI entry point."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        data_dir = args.data_dir or default_data_dir()
        if args.expiry_hours is not None:
            settings: Settings = MappingSettings(
                {CACHE_EXPIRY_HOURS_KEY: args.expiry_hours}
            )
        else:
            settings = create_settings(data_dir)

        manager = create_manager(
            data_dir, settings, show_progress=not args.no_progress
        )
        sys.exit(asyncio.run(run(args, manager)))

    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        sys.exit(130)


if __name__ == "__main__":
    main()
