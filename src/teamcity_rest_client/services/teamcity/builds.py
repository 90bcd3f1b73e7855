"""Build-related TeamCity API operations."""

from typing import Any, List, Union

from ...models.teamcity import Build
from .base_client import BaseClient
from .parser import parse_build, parse_builds

BUILDS_PATH = "/app/rest/builds"


class BuildOperations(BaseClient):
    """Build-related TeamCity API operations."""

    def builds(self, **options: Any) -> List[Build]:
        """Get builds, newest first.

        Args:
            **options: Query options passed through to the server, e.g.
                ``buildType="id:bt1"``, ``count=1`` or ``status="FAILURE"``

        Returns:
            Builds in server order
        """
        text = self._get(BUILDS_PATH, options)
        return [b.bind(self) for b in parse_builds(text, self.url)]

    def build(self, build_id: Union[int, str]) -> Build:
        """Get a single build including its start and finish dates."""
        text = self._get(f"{BUILDS_PATH}/{build_id}")
        return parse_build(text, self.url).bind(self)
