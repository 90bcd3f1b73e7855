"""Project and build configuration TeamCity API operations."""

import re
from typing import List

import structlog

from ...core.exceptions import NotFound
from ...models.teamcity import BuildType, Project
from .base_client import BaseClient
from .parser import parse_build_types, parse_projects

logger = structlog.get_logger(__name__)

PROJECTS_PATH = "/app/rest/projects"
BUILD_TYPES_PATH = "/app/rest/buildTypes"

# internal project ids look like "project12"; anything else is taken as a name
_PROJECT_ID = re.compile(r"project\d+")


class ProjectOperations(BaseClient):
    """Project-related TeamCity API operations."""

    def projects(self) -> List[Project]:
        """Get all projects visible to the current user.

        Returns:
            Projects in server order
        """
        text = self._get(PROJECTS_PATH)
        return [p.bind(self) for p in parse_projects(text, self.url)]

    def project(self, spec: str) -> Project:
        """Get one project by id or name.

        ``spec`` is compared with project ids when it looks like an internal
        id (``project<digits>``) and with project names otherwise.

        Args:
            spec: Project id or name

        Returns:
            The matching project

        Raises:
            NotFound: No project matches
        """
        field = "id" if _PROJECT_ID.search(spec) else "name"
        for project in self.projects():
            if getattr(project, field) == spec:
                return project

        logger.warning("Project not found", spec=spec, field=field)
        raise NotFound(f"Sorry, cannot find project with name or id '{spec}'", spec=spec)

    def build_types(self) -> List[BuildType]:
        """Get all build configurations across projects."""
        text = self._get(BUILD_TYPES_PATH)
        return [bt.bind(self) for bt in parse_build_types(text, self.url)]
