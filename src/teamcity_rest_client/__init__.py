"""TeamCity REST client - typed access to projects, build types and builds."""

__version__ = "0.1.0"

from .core.exceptions import (
    AuthenticationRequired,
    ConfigurationError,
    FilterMismatch,
    NotFound,
    ParseError,
    TeamCityError,
    TransportError,
    UnsupportedOption,
)
from .models import Build, BuildStatus, BuildType, Project
from .services.teamcity import BasicAuthentication, OpenAuthentication, TeamCity

__all__ = [
    "AuthenticationRequired",
    "BasicAuthentication",
    "Build",
    "BuildStatus",
    "BuildType",
    "ConfigurationError",
    "FilterMismatch",
    "NotFound",
    "OpenAuthentication",
    "ParseError",
    "Project",
    "TeamCity",
    "TeamCityError",
    "TransportError",
    "UnsupportedOption",
]
