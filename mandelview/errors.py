"""Errors raised by the viewer controller and its configuration."""


class ViewerError(Exception):
    """Base class for viewer errors."""


class ConfigError(ViewerError, ValueError):
    """An invalid configuration value."""


class NotInitializedError(ViewerError):
    """An event arrived before the viewer was given a window."""


class AlreadyInitializedError(ViewerError):
    """The viewer was initialized a second time."""
