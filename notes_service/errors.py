"""
Exceptions raised by the Notes service and its provisioning programs.
"""


class NotesServiceError(Exception):
    """Base class for errors raised by this package."""


class ConfigurationError(NotesServiceError):
    """A required configuration value is missing or invalid.

    Raised before any work starts (serving, seeding or declaring resources),
    never retried.
    """
