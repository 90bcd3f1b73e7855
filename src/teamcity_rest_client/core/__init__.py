"""Core configuration, exceptions and logging."""

from .config import Settings, settings
from .exceptions import ConfigurationError, TeamCityError
from .logging import setup_logging

__all__ = ["Settings", "settings", "ConfigurationError", "TeamCityError", "setup_logging"]
