"""TeamCity resource models.

Every record is an immutable value created fresh per API call. Records keep a
private reference to the client that fetched them so that related resources
(a project's build types, a build type's latest build) can be fetched on
demand; the reference is not a field, is never serialized and plays no part
in equality.
"""

from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Union

from pydantic import BaseModel, PrivateAttr

from ..core.exceptions import ConfigurationError

if TYPE_CHECKING:
    from ..services.teamcity.client import TeamCity

FilterSpec = Dict[str, Union[str, List[str]]]


class BuildStatus(str, Enum):
    """TeamCity build status types."""
    SUCCESS = "SUCCESS"
    FAILURE = "FAILURE"
    ERROR = "ERROR"
    UNKNOWN = "UNKNOWN"


class TeamCityResource(BaseModel):
    """Base for records fetched from a TeamCity server."""

    _client: Any = PrivateAttr(default=None)

    class Config:
        """Pydantic configuration."""
        frozen = True

    def bind(self, client: "TeamCity"):
        """Attach the client used for follow-up requests and return self."""
        self._client = client
        return self

    def __eq__(self, other: object) -> bool:
        # records compare by field values; the bound client is not part of the value
        if not isinstance(other, TeamCityResource):
            return NotImplemented
        return type(self) is type(other) and self.__dict__ == other.__dict__

    def __hash__(self) -> int:
        return hash((type(self),) + tuple(self.__dict__.values()))

    @property
    def client(self) -> "TeamCity":
        if self._client is None:
            raise ConfigurationError(
                f"{type(self).__name__} {self.id!r} is not bound to a TeamCity client",
                config_key="client",
            )
        return self._client


class Project(TeamCityResource):
    """TeamCity project model."""
    id: str
    name: str
    href: str

    def build_types(self, filter_spec: Optional[FilterSpec] = None) -> List["BuildType"]:
        """Build types of this project, narrowed by include/exclude tokens.

        Args:
            filter_spec: Optional mapping with ``include`` and/or ``exclude``
                keys, each a build type id/name or a list of them

        Returns:
            Surviving build types in server order

        Raises:
            UnsupportedOption: filter_spec has keys other than include/exclude
            FilterMismatch: some token matched no build type of the project
        """
        from ..services.teamcity.filters import filter_build_types

        candidates = [bt for bt in self.client.build_types() if bt.project_id == self.id]
        return filter_build_types(candidates, filter_spec or {})

    def latest_builds(self, filter_spec: Optional[FilterSpec] = None) -> List["Build"]:
        """Most recent build of every (filtered) build type.

        Build types that have never been built are left out. Requests are
        issued one per build type, in build type order.
        """
        latest = []
        for build_type in self.build_types(filter_spec):
            build = build_type.latest_build()
            if build is not None:
                latest.append(build)
        return latest

    def builds(self, **options: Any) -> List["Build"]:
        """All builds of this project's build types.

        ``options`` are forwarded verbatim as query parameters of the builds
        listing (e.g. ``status="FAILURE"``).
        """
        build_type_ids = {bt.id for bt in self.build_types()}
        return [b for b in self.client.builds(**options) if b.build_type_id in build_type_ids]


class BuildType(TeamCityResource):
    """TeamCity build configuration model."""
    id: str
    name: str
    href: str
    project_name: str
    project_id: str
    web_url: str

    def latest_build(self) -> Optional["Build"]:
        """Most recent build of this build type, or None if it never ran."""
        builds = self.builds(count=1)
        return builds[0] if builds else None

    def builds(self, **options: Any) -> List["Build"]:
        """Builds of this build type; extra options go to the query string."""
        return self.client.builds(buildType=f"id:{self.id}", **options)


class Build(TeamCityResource):
    """TeamCity build model."""
    id: str
    number: str
    status: BuildStatus
    build_type_id: str
    start_date: str = ""
    finish_date: str = ""
    href: str
    web_url: str

    @property
    def success(self) -> bool:
        return self.status is BuildStatus.SUCCESS

    def details(self) -> "Build":
        """Re-fetch this build by id, including its start/finish dates."""
        return self.client.build(self.id)
