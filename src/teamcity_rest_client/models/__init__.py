"""Pydantic models for TeamCity resources."""

from .teamcity import Build, BuildStatus, BuildType, FilterSpec, Project

__all__ = [
    "Build",
    "BuildStatus",
    "BuildType",
    "FilterSpec",
    "Project",
]
