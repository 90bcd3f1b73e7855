"""
TeamCity REST API client modules.

This package provides the TeamCity client functionality:
- TeamCity: Main client interface
- BaseClient: Authenticated GETs and response vetting
- BasicAuthentication / OpenAuthentication: URL building and transport
- ProjectOperations / BuildOperations: Resource listings
- filter_build_types: Include/exclude selection of build types
- parser: XML payload to record conversion
"""

from .auth import Authentication, BasicAuthentication, OpenAuthentication
from .client import TeamCity
from .filters import filter_build_types

__all__ = [
    "Authentication",
    "BasicAuthentication",
    "OpenAuthentication",
    "TeamCity",
    "filter_build_types",
]
