from __future__ import annotations

from typing import Dict, List, Tuple

import httpx
import pytest

from teamcity_rest_client import TeamCity
from teamcity_rest_client.models import BuildType

from tests.payloads import BUILD_TYPES_XML, BUILD_XML, BUILDS_XML, HOST, PORT, PROJECTS_XML


class FakeTeamCity:
    """Canned responses keyed by path and query parameters."""

    def __init__(self) -> None:
        self.routes: Dict[Tuple[str, frozenset], Tuple[int, str]] = {}
        self.requests: List[httpx.Request] = []

    def add(self, path: str, body: str, status_code: int = 200, **params: str) -> None:
        self.routes[(path, frozenset(params.items()))] = (status_code, body)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        params = frozenset(request.url.params.items())
        status_code, body = self.routes.get((request.url.path, params), (404, "Not found"))
        return httpx.Response(status_code, text=body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def server() -> FakeTeamCity:
    fake = FakeTeamCity()
    fake.add("/app/rest/projects", PROJECTS_XML)
    fake.add("/app/rest/buildTypes", BUILD_TYPES_XML)
    fake.add("/app/rest/builds", BUILDS_XML)
    fake.add("/app/rest/builds/101", BUILD_XML)
    return fake


@pytest.fixture
def teamcity(server: FakeTeamCity):
    with TeamCity(HOST, PORT, transport=server.transport) as client:
        yield client


@pytest.fixture
def build_types() -> List[BuildType]:
    return [
        BuildType(
            id=f"bt{i}",
            name=name,
            href=f"/app/rest/buildTypes/id:bt{i}",
            project_name="Backend",
            project_id="project1",
            web_url=f"http://tc.example.com:8111/viewType.html?buildTypeId=bt{i}",
        )
        for i, name in enumerate(["Compile", "Test", "Package", "Nightly"], start=1)
    ]
