"""
HTTP downloading for the RSS feed and episode media files.
"""

import logging
import os
from typing import Optional, Tuple

import requests
from tqdm import tqdm

from .config import REQUEST_TIMEOUT
from .errors import NetworkError


def download_rss_from_url(
    rss_url: str, timeout: int = REQUEST_TIMEOUT
) -> bytes:
    """Download RSS content from URL.

    Raises:
        NetworkError: On transport failure or a non-success HTTP status.
    """
    logger = logging.getLogger(__name__)
    logger.info("Downloading RSS from %s", rss_url)
    try:
        response = requests.get(rss_url, timeout=timeout)
        response.raise_for_status()
    except requests.exceptions.RequestException as e:
        logger.error("RSS download error: %s", e)
        raise NetworkError(f"Failed to download {rss_url}: {e}") from e

    logger.info(
        "Successfully downloaded RSS content (%d bytes)",
        len(response.content),
    )
    return response.content


def download_file_to_path(
    file_url: str,
    output_path: str,
    show_progress: bool = True,
    timeout: int = REQUEST_TIMEOUT,
) -> Tuple[Optional[str], bool]:
    """Download file from URL to specific path.

    Returns:
        Tuple of (file_path, was_downloaded). file_path is None when the
        download failed; was_downloaded is False when the file existed.
    """
    logger = logging.getLogger(__name__)

    if os.path.exists(output_path):
        logger.debug("File already exists: %s. Skipping.", output_path)
        return output_path, False

    output_filename = os.path.basename(output_path)
    logger.info("Downloading %s from %s", output_filename, file_url)
    try:
        with requests.get(file_url, stream=True, timeout=timeout) as response:
            response.raise_for_status()

            content_length = int(response.headers.get("content-length", 0))
            logger.debug("Content length: %d bytes", content_length)

            with open(output_path, "wb") as output_file:
                with tqdm(
                    total=content_length,
                    unit="B",
                    unit_scale=True,
                    desc=output_filename,
                    leave=False,
                    disable=not show_progress,
                ) as progress_bar:
                    for chunk in response.iter_content(chunk_size=8192):
                        if chunk:  # Filter out keep-alive chunks
                            output_file.write(chunk)
                            progress_bar.update(len(chunk))

        logger.info("Download complete: %s", output_filename)
        return output_path, True
    except (requests.exceptions.RequestException, OSError) as e:
        logger.error("Download failed for %s: %s", output_filename, e)
        if os.path.exists(output_path):
            os.remove(output_path)  # Clean up partial file
            logger.debug("Cleaned up partial file: %s", output_path)
        return None, False
