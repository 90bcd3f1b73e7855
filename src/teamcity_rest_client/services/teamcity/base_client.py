"""Base client for TeamCity REST API operations."""

import re
import time
from typing import Any, Mapping, Optional

import httpx
import structlog

from ...core.exceptions import AuthenticationRequired, TransportError
from ...core.logging import log_teamcity_api_call
from .auth import Authentication

logger = structlog.get_logger(__name__)

# TeamCity serves its login page instead of XML to unauthenticated clients
_HTML_PAGE = re.compile(r"<html.*</html>", re.IGNORECASE | re.DOTALL)


def looks_like_html(body: str) -> bool:
    return _HTML_PAGE.search(body) is not None


class BaseClient:
    """Performs GETs through an authentication mode and vets the responses."""

    def __init__(self, authentication: Authentication):
        """Initialize base client.

        Args:
            authentication: Authentication mode used to build URLs and GET them
        """
        self.authentication = authentication

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self) -> None:
        """Close the HTTP session."""
        self.authentication.close()

    def url(self, path: str) -> str:
        """Absolute URL of a server-relative path."""
        return self.authentication.url(path)

    def _get(self, path: str, params: Optional[Mapping[str, Any]] = None) -> str:
        """GET a resource and return the raw body.

        Args:
            path: Resource path, e.g. ``/app/rest/projects``
            params: Query parameters, serialized by the authentication mode

        Returns:
            Response body

        Raises:
            AuthenticationRequired: the server answered with an HTML page
            TransportError: the request failed or returned an error status
        """
        url = self.authentication.url(path, params)
        logger.debug("Making TeamCity API request", path=path, params=dict(params or {}))

        started = time.monotonic()
        try:
            body = self.authentication.get(path, params)
        except httpx.HTTPStatusError as e:
            if looks_like_html(e.response.text):
                self._authentication_required(url)
            raise TransportError(
                f"TeamCity returned HTTP {e.response.status_code} for {url}",
                status_code=e.response.status_code,
                url=url,
            ) from e
        except httpx.HTTPError as e:
            raise TransportError(f"Request to {url} failed: {e}", url=url) from e

        log_teamcity_api_call(
            logger,
            method="GET",
            path=path,
            duration_ms=round((time.monotonic() - started) * 1000, 1),
            size=len(body),
        )

        if looks_like_html(body):
            self._authentication_required(url)
        return body

    def _authentication_required(self, url: str) -> None:
        logger.warning("TeamCity returned html instead of xml", url=url)
        raise AuthenticationRequired(
            "TeamCity returned html, perhaps you need to use authentication?",
            url=url,
        )
