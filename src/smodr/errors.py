"""
Exception types for the feed, cache and download layers.
"""


class SmodrError(Exception):
    """Base exception for all smodr errors."""


class NetworkError(SmodrError):
    """Transport or HTTP status failure while talking to a remote server."""


class ParseError(SmodrError):
    """The retrieved document could not be read as a syndication feed."""


class StorageError(SmodrError):
    """I/O or serialization failure on a local file."""


class ConfigError(SmodrError):
    """A configuration value could not be interpreted."""
