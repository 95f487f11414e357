"""
Settings providers and resolution of configured values.

Settings are looked up on every use rather than cached, so a changed
value takes effect on the next lookup.
"""

import json
import logging
import os
from typing import Any, Dict, Mapping, Optional, Protocol

import platformdirs

from .errors import ConfigError

APP_NAME = "smodr"

FEED_URL = "https://feeds.feedburner.com/SModcasts"
DEFAULT_IMAGE_URL = (
    "http://smodcast.com/wp-content/blogs.dir/1/files_mf/smodcast1400.jpg"
)
REQUEST_TIMEOUT = 30

CACHE_EXPIRY_HOURS_KEY = "CacheExpiryHours"
DEFAULT_CACHE_EXPIRY_HOURS = 6

DATA_DIRECTORY_ENV = "SMODR_DATA_DIRECTORY"
ENV_PREFIX = "SMODR_"

# Environment variable names for the known setting keys
_ENV_NAMES = {CACHE_EXPIRY_HOURS_KEY: "CACHE_EXPIRY_HOURS"}


class Settings(Protocol):
    """Key/value store consulted for configuration at call time."""

    def get(self, key: str) -> Optional[Any]:
        """Return the raw value stored for key, or None."""
        ...  # pylint: disable=unnecessary-ellipsis


class MappingSettings:
    """In-memory application settings store."""

    def __init__(self, values: Optional[Dict[str, Any]] = None):
        self.values: Dict[str, Any] = dict(values or {})

    def get(self, key: str) -> Optional[Any]:
        return self.values.get(key)

    def set(self, key: str, value: Any) -> None:
        """Store a value, replacing any previous one."""
        self.values[key] = value


class JsonFileSettings:
    """Settings read from a JSON object file on every lookup."""

    def __init__(self, path: str):
        self.path = path

    def get(self, key: str) -> Optional[Any]:
        if not os.path.exists(self.path):
            return None

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logging.getLogger(__name__).debug(
                "Ignoring unreadable settings file %s: %s", self.path, e
            )
            return None

        return data.get(key) if isinstance(data, dict) else None


class EnvironmentSettings:
    """Settings taken from SMODR_* environment variables."""

    def __init__(self, environ: Optional[Mapping[str, str]] = None):
        self.environ = environ

    def get(self, key: str) -> Optional[Any]:
        environ = os.environ if self.environ is None else self.environ
        name = ENV_PREFIX + _ENV_NAMES.get(key, key.upper())
        return environ.get(name)


class ChainedSettings:
    """First provider holding a value for a key wins."""

    def __init__(self, *providers: Settings):
        self.providers = providers

    def get(self, key: str) -> Optional[Any]:
        for provider in self.providers:
            value = provider.get(key)
            if value is not None:
                return value
        return None


def _coerce_hours(value: Any) -> int:
    """Interpret a raw setting as a whole number of hours."""
    # bool is an int subclass but never a valid number of hours
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError as e:
            raise ConfigError(f"Not a number of hours: {value!r}") from e
    raise ConfigError(f"Unsupported setting type: {type(value).__name__}")


def cache_expiry_hours(settings: Optional[Settings]) -> int:
    """Resolve the cache expiry window in hours, defaulting to 6."""
    if settings is None:
        return DEFAULT_CACHE_EXPIRY_HOURS

    value = settings.get(CACHE_EXPIRY_HOURS_KEY)
    if value is None:
        return DEFAULT_CACHE_EXPIRY_HOURS

    try:
        return _coerce_hours(value)
    except ConfigError as e:
        logging.getLogger(__name__).debug(
            "Using default cache expiry of %d hours: %s",
            DEFAULT_CACHE_EXPIRY_HOURS,
            e,
        )
        return DEFAULT_CACHE_EXPIRY_HOURS


def default_data_dir() -> str:
    """Get the application data directory.

    SMODR_DATA_DIRECTORY overrides the per-user data directory.
    """
    data_dir = os.getenv(DATA_DIRECTORY_ENV)
    if data_dir:
        return data_dir
    return platformdirs.user_data_dir(APP_NAME)
