"""
Notes Service

A small notes REST API together with the Pulumi programs that provision it
on Google Cloud (Cloud SQL, Artifact Registry, Cloud Run).
"""

import importlib.metadata

__version__ = importlib.metadata.version("notes-service")

from .config import Environment, Settings, get_settings
from .errors import ConfigurationError, NotesServiceError

__all__ = [
    "ConfigurationError",
    "Environment",
    "NotesServiceError",
    "Settings",
    "get_settings",
]
