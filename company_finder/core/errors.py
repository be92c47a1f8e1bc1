"""Exceptions shared by the vendor clients and the search pipeline."""


class FinderError(RuntimeError):
    """Base class for company finder failures."""


class ConfigError(FinderError):
    """Raised when configuration values are missing or invalid."""


class TransportError(FinderError):
    """Raised when an upstream call fails or returns an unreadable payload."""


class NotFoundError(FinderError):
    """Raised when geocoding returns zero matches for a place name."""
