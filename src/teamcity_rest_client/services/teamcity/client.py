"""TeamCity REST API client combining all operations."""

from typing import Any, Optional

import structlog

from ...core.config import Settings
from ...core.exceptions import ConfigurationError
from .auth import BasicAuthentication, OpenAuthentication
from .builds import BuildOperations
from .projects import ProjectOperations

logger = structlog.get_logger(__name__)


class TeamCity(ProjectOperations, BuildOperations):
    """TeamCity REST API client.

    Uses HTTP basic authentication when both ``user`` and ``password`` are
    given and anonymous access when neither is. Extra keyword arguments are
    handed to the underlying ``httpx.Client`` (``timeout``, ``verify``,
    ``headers``, ``transport`` ...).

    Example::

        with TeamCity("ci.example.com", 8111, "jo", "secret") as teamcity:
            project = teamcity.project("Backend")
            for build in project.latest_builds({"exclude": "Nightly"}):
                print(build.build_type_id, build.status)
    """

    def __init__(
        self,
        host: str,
        port: int,
        user: Optional[str] = None,
        password: Optional[str] = None,
        *,
        scheme: str = "http",
        **transport_options: Any,
    ):
        if (user is None) != (password is None):
            missing = "password" if password is None else "user"
            raise ConfigurationError(
                "Both user and password are required for authenticated access",
                config_key=missing,
            )

        self.host = host
        self.port = port
        if user is not None:
            authentication = BasicAuthentication(
                host, port, user, password, scheme=scheme, **transport_options
            )
        else:
            authentication = OpenAuthentication(host, port, scheme=scheme, **transport_options)

        super().__init__(authentication)
        logger.debug("TeamCity client created", url=self.url("/"), authentication=str(authentication))

    @classmethod
    def from_settings(cls, settings: Settings, **transport_options: Any) -> "TeamCity":
        """Create a client from ``TEAMCITY_*`` settings."""
        transport_options.setdefault("timeout", settings.timeout)
        transport_options.setdefault("verify", settings.verify_ssl)
        return cls(
            settings.host,
            settings.port,
            settings.user or None,
            settings.password or None,
            scheme=settings.scheme,
            **transport_options,
        )

    def __str__(self) -> str:
        return f"TeamCity @ {self.url('/')}"
