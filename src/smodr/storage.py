"""
Pure storage layer for file operations.

This module provides low-level file operations without any business logic.
Failures are raised as StorageError so callers decide how to degrade.
"""

import json
import os
from typing import Any, List, Optional

from .errors import StorageError


class Storage:
    """Pure file operations without business logic."""

    def __init__(self, base_dir: str = "./data"):
        """Initialize with base directory."""
        self.base_dir = base_dir

    def ensure_directory(self, path: str) -> None:
        """Create directory if it doesn't exist."""
        try:
            os.makedirs(path, exist_ok=True)
        except OSError as e:
            raise StorageError(f"Cannot create directory {path}: {e}") from e

    def file_exists(self, path: str) -> bool:
        """Check if file exists."""
        return os.path.isfile(path)

    def read_json(self, path: str) -> Optional[Any]:
        """Read JSON file, return None if the file doesn't exist."""
        if not os.path.exists(path):
            return None

        try:
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)
        except json.JSONDecodeError as e:
            raise StorageError(f"Invalid JSON in {path}: {e}") from e
        except OSError as e:
            raise StorageError(f"Cannot read {path}: {e}") from e

    def write_json(self, path: str, data: Any) -> None:
        """Write data to JSON file, fully replacing previous content.

        The data is written to a sibling temporary file first and moved
        over the target, so readers see either the old or the new file.
        """
        directory = os.path.dirname(path)
        if directory:
            self.ensure_directory(directory)

        temp_path = path + ".tmp"
        try:
            with open(temp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            os.replace(temp_path, path)
        except (OSError, TypeError, ValueError) as e:
            if os.path.exists(temp_path):
                os.remove(temp_path)
            raise StorageError(f"Cannot write {path}: {e}") from e

    def delete_file(self, path: str) -> None:
        """Delete a file if it exists."""
        try:
            if os.path.exists(path):
                os.remove(path)
        except OSError as e:
            raise StorageError(f"Cannot delete {path}: {e}") from e

    def list_files(self, path: str) -> List[str]:
        """List full paths of the regular files directly inside path."""
        if not os.path.exists(path):
            return []

        try:
            return [
                os.path.join(path, item)
                for item in sorted(os.listdir(path))
                if os.path.isfile(os.path.join(path, item))
            ]
        except OSError as e:
            raise StorageError(f"Cannot list {path}: {e}") from e

    def file_size(self, path: str) -> int:
        """Get size of a file in bytes."""
        try:
            return os.path.getsize(path)
        except OSError as e:
            raise StorageError(f"Cannot stat {path}: {e}") from e

    def join_path(self, *parts: str) -> str:
        """Join path parts."""
        return os.path.join(*parts)
