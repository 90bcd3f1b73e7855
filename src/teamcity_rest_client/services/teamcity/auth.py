"""Authentication modes for the TeamCity REST API.

Each mode knows how to turn a resource path and query parameters into a
request URL and how to GET it. Under basic authentication TeamCity expects
requests below ``/httpAuth`` and list filters packed into a single
``locator`` parameter; anonymous (guest) access takes plain query pairs.
"""

from typing import Any, Dict, Mapping, Optional, Protocol

import httpx

from ... import __version__

HTTP_AUTH_PREFIX = "/httpAuth"

Params = Optional[Mapping[str, Any]]


class Authentication(Protocol):
    """What the client needs from an authentication mode."""

    def url(self, path: str, params: Params = None) -> str:
        ...

    def get(self, path: str, params: Params = None) -> str:
        ...

    def close(self) -> None:
        ...


def _open_session(transport_options: Dict[str, Any], **session_kwargs: Any) -> httpx.Client:
    """Create the HTTP session, letting caller options override defaults."""
    options = dict(transport_options)
    headers = {
        "Accept": "application/xml",
        "User-Agent": f"teamcity-rest-client/{__version__}",
    }
    headers.update(options.pop("headers", None) or {})
    options.setdefault("timeout", httpx.Timeout(30.0))
    return httpx.Client(headers=headers, **session_kwargs, **options)


def _fetch(session: httpx.Client, url: str) -> str:
    response = session.get(url)
    response.raise_for_status()
    return response.text


class BasicAuthentication:
    """HTTP basic authentication against ``/httpAuth`` resources."""

    def __init__(
        self,
        host: str,
        port: int,
        user: str,
        password: str,
        *,
        scheme: str = "http",
        **transport_options: Any,
    ):
        self.host = host
        self.port = port
        self.user = user
        self.scheme = scheme
        self._password = password
        self._transport_options = transport_options
        self._session: Optional[httpx.Client] = None

    def _ensure_session(self) -> httpx.Client:
        if self._session is None or self._session.is_closed:
            self._session = _open_session(
                self._transport_options,
                auth=httpx.BasicAuth(self.user, self._password),
            )
        return self._session

    def query_string(self, params: Mapping[str, Any]) -> str:
        return "locator=" + ",".join(f"{key}:{value}" for key, value in params.items())

    def url(self, path: str, params: Params = None) -> str:
        auth_path = path if path.startswith(HTTP_AUTH_PREFIX) else f"{HTTP_AUTH_PREFIX}{path}"
        query = f"?{self.query_string(params)}" if params else ""
        return f"{self.scheme}://{self.host}:{self.port}{auth_path}{query}"

    def get(self, path: str, params: Params = None) -> str:
        return _fetch(self._ensure_session(), self.url(path, params))

    def close(self) -> None:
        if self._session is not None and not self._session.is_closed:
            self._session.close()

    def __str__(self) -> str:
        return f"BasicAuthentication {self.user}:***"


class OpenAuthentication:
    """Unauthenticated (guest) access."""

    def __init__(self, host: str, port: int, *, scheme: str = "http", **transport_options: Any):
        self.host = host
        self.port = port
        self.scheme = scheme
        self._transport_options = transport_options
        self._session: Optional[httpx.Client] = None

    def _ensure_session(self) -> httpx.Client:
        if self._session is None or self._session.is_closed:
            self._session = _open_session(self._transport_options)
        return self._session

    def query_string(self, params: Mapping[str, Any]) -> str:
        return "&".join(f"{key}={value}" for key, value in params.items())

    def url(self, path: str, params: Params = None) -> str:
        query = f"?{self.query_string(params)}" if params else ""
        return f"{self.scheme}://{self.host}:{self.port}{path}{query}"

    def get(self, path: str, params: Params = None) -> str:
        return _fetch(self._ensure_session(), self.url(path, params))

    def close(self) -> None:
        if self._session is not None and not self._session.is_closed:
            self._session.close()

    def __str__(self) -> str:
        return "No Authentication"
