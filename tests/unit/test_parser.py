from __future__ import annotations

import pytest

from teamcity_rest_client.core.exceptions import ParseError
from teamcity_rest_client.models import BuildStatus
from teamcity_rest_client.services.teamcity.parser import (
    XmlDocument,
    parse_build,
    parse_build_types,
    parse_builds,
    parse_projects,
    sanitize,
)

from tests.payloads import BUILD_TYPES_XML, BUILD_XML, BUILDS_XML, PROJECTS_XML


def _absolute(href: str) -> str:
    return f"http://tc.example.com:8111{href}"


def test_parse_projects_in_document_order() -> None:
    projects = parse_projects(PROJECTS_XML, _absolute)

    assert [(p.id, p.name) for p in projects] == [
        ("project1", "Backend"),
        ("project2", "Frontend"),
    ]
    assert projects[0].href == "http://tc.example.com:8111/app/rest/projects/id:project1"


def test_parse_build_types_fields() -> None:
    build_types = parse_build_types(BUILD_TYPES_XML)

    assert [bt.id for bt in build_types] == ["bt1", "bt2", "bt3", "bt4"]
    compile_ = build_types[0]
    assert compile_.name == "Compile"
    assert compile_.href == "/app/rest/buildTypes/id:bt1"
    assert compile_.project_name == "Backend"
    assert compile_.project_id == "project1"
    assert compile_.web_url == "http://tc.example.com:8111/viewType.html?buildTypeId=bt1"


def test_parse_single_build_in_list_equals_attributes() -> None:
    text = (
        '<builds count="1">'
        '<build id="7" number="1.0.3" status="FAILURE" buildTypeId="bt9" '
        'href="/app/rest/builds/id:7" webUrl="http://tc/viewLog.html?buildId=7"/>'
        "</builds>"
    )

    (build,) = parse_builds(text)

    assert build.model_dump() == {
        "id": "7",
        "number": "1.0.3",
        "status": BuildStatus.FAILURE,
        "build_type_id": "bt9",
        "start_date": "",
        "finish_date": "",
        "href": "/app/rest/builds/id:7",
        "web_url": "http://tc/viewLog.html?buildId=7",
    }
    assert build.success is False


def test_parse_builds_escapes_bare_ampersand_before_build_type_id() -> None:
    builds = parse_builds(BUILDS_XML)

    assert [b.id for b in builds] == ["104", "103", "102", "101"]
    assert builds[0].web_url == "http://tc.example.com:8111/viewLog.html?buildId=104&buildTypeId=bt3"
    assert builds[0].success
    assert not builds[1].success


def test_sanitize_only_touches_known_attribute_names() -> None:
    assert sanitize("a&buildTypeId=1") == "a&amp;buildTypeId=1"
    assert sanitize("a&amp;buildTypeId=1") == "a&amp;buildTypeId=1"
    assert sanitize("a&other=1") == "a&other=1"


def test_parse_build_detail_reads_dates_from_child_elements() -> None:
    build = parse_build(BUILD_XML, _absolute)

    assert build.id == "101"
    assert build.build_type_id == "bt1"
    assert build.status is BuildStatus.SUCCESS
    assert build.start_date == "20240105T101500+0000"
    assert build.finish_date == "20240105T102230+0000"
    assert build.href == "http://tc.example.com:8111/app/rest/builds/id:101"


def test_parse_build_missing_finish_date_defaults_to_empty() -> None:
    text = (
        '<build id="5" number="2" status="SUCCESS" buildTypeId="bt1" '
        'href="/app/rest/builds/id:5" webUrl="http://tc/5">'
        "<startDate>20240105T101500+0000</startDate>"
        "</build>"
    )

    build = parse_build(text)

    assert build.start_date == "20240105T101500+0000"
    assert build.finish_date == ""
    assert build.success


def test_parse_builds_reads_date_attributes() -> None:
    text = (
        '<builds><build id="5" number="2" status="ERROR" buildTypeId="bt1" '
        'startDate="20240105T101500+0000" href="/b/5" webUrl="http://tc/5"/></builds>'
    )

    (build,) = parse_builds(text)

    assert build.start_date == "20240105T101500+0000"
    assert build.finish_date == ""
    assert build.status is BuildStatus.ERROR


def test_missing_required_attribute_is_a_parse_error() -> None:
    text = '<projects><project id="project1" href="/app/rest/projects/id:project1"/></projects>'

    with pytest.raises(ParseError) as excinfo:
        parse_projects(text)

    assert excinfo.value.element == "project"
    assert excinfo.value.attribute == "name"


def test_status_is_case_sensitive() -> None:
    text = (
        '<builds><build id="5" number="2" status="success" buildTypeId="bt1" '
        'href="/b/5" webUrl="http://tc/5"/></builds>'
    )

    with pytest.raises(ParseError) as excinfo:
        parse_builds(text)

    assert excinfo.value.attribute == "status"


def test_malformed_xml_is_a_parse_error() -> None:
    with pytest.raises(ParseError):
        parse_projects("<projects><project id='x'")


def test_parse_build_rejects_other_documents() -> None:
    with pytest.raises(ParseError):
        parse_build(PROJECTS_XML)


def test_empty_listing_parses_to_nothing() -> None:
    assert parse_builds('<builds count="0"/>') == []


def test_xml_document_accessors() -> None:
    document = XmlDocument.parse(BUILD_XML)
    root = document.root

    assert root.tag == "build"
    assert root.attribute("number") == "31"
    assert root.attribute("missing") is None
    assert root.child_text("statusText") == "Tests passed: 120"
    assert root.child_text("missing") is None
    assert [e.attribute("id") for e in document.find_all("buildType")] == ["bt1"]
