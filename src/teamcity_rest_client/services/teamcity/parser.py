"""XML payload parsing for TeamCity REST resources."""

import re
from typing import Callable, List, Optional
from xml.etree import ElementTree

from ...core.exceptions import ParseError
from ...models.teamcity import Build, BuildStatus, BuildType, Project

HrefResolver = Callable[[str], str]

# TeamCity sometimes emits these inside attribute values with a bare "&"
KNOWN_UNESCAPED_ATTRIBUTES = ("buildTypeId",)

_UNESCAPED_AMPERSAND = re.compile(
    r"&(?=(?:%s)\b)" % "|".join(KNOWN_UNESCAPED_ATTRIBUTES)
)


def sanitize(text: str) -> str:
    """Escape a bare ``&`` directly followed by a known attribute name."""
    return _UNESCAPED_AMPERSAND.sub("&amp;", text)


class XmlElement:
    """Read-only view of one XML element."""

    def __init__(self, element: ElementTree.Element):
        self._element = element

    @property
    def tag(self) -> str:
        return self._element.tag

    def attribute(self, name: str) -> Optional[str]:
        return self._element.attrib.get(name)

    def child_text(self, name: str) -> Optional[str]:
        child = self._element.find(name)
        if child is None:
            return None
        return child.text or ""

    def require(self, name: str) -> str:
        """Attribute value, or ParseError if the attribute is missing."""
        value = self.attribute(name)
        if value is None:
            raise ParseError(
                f"<{self.tag}> element is missing required attribute '{name}'",
                element=self.tag,
                attribute=name,
            )
        return value


class XmlDocument:
    """Parsed XML payload."""

    def __init__(self, root: ElementTree.Element):
        self._root = root

    @classmethod
    def parse(cls, text: str) -> "XmlDocument":
        try:
            return cls(ElementTree.fromstring(sanitize(text)))
        except ElementTree.ParseError as e:
            raise ParseError(f"Malformed XML from TeamCity: {e}") from e

    @property
    def root(self) -> XmlElement:
        return XmlElement(self._root)

    def find_all(self, tag: str) -> List[XmlElement]:
        """All elements named ``tag`` (root included), in document order."""
        return [XmlElement(e) for e in self._root.iter(tag)]


def _identity(href: str) -> str:
    return href


def _project(element: XmlElement, resolve_href: HrefResolver) -> Project:
    return Project(
        id=element.require("id"),
        name=element.require("name"),
        href=resolve_href(element.require("href")),
    )


def _build_type(element: XmlElement, resolve_href: HrefResolver) -> BuildType:
    return BuildType(
        id=element.require("id"),
        name=element.require("name"),
        href=resolve_href(element.require("href")),
        project_name=element.require("projectName"),
        project_id=element.require("projectId"),
        web_url=element.require("webUrl"),
    )


def _date(element: XmlElement, name: str) -> str:
    # detail payloads carry dates as child elements, older lists as attributes
    value = element.child_text(name)
    if value is None:
        value = element.attribute(name)
    return value or ""


def _build(element: XmlElement, resolve_href: HrefResolver) -> Build:
    status = element.require("status")
    try:
        status = BuildStatus(status)
    except ValueError:
        raise ParseError(
            f"<build> element has unknown status {status!r}",
            element=element.tag,
            attribute="status",
        ) from None

    return Build(
        id=element.require("id"),
        number=element.require("number"),
        status=status,
        build_type_id=element.require("buildTypeId"),
        start_date=_date(element, "startDate"),
        finish_date=_date(element, "finishDate"),
        href=resolve_href(element.require("href")),
        web_url=element.require("webUrl"),
    )


def parse_projects(text: str, resolve_href: HrefResolver = _identity) -> List[Project]:
    """Parse a ``/app/rest/projects`` payload."""
    return [_project(e, resolve_href) for e in XmlDocument.parse(text).find_all("project")]


def parse_build_types(text: str, resolve_href: HrefResolver = _identity) -> List[BuildType]:
    """Parse a ``/app/rest/buildTypes`` payload."""
    return [_build_type(e, resolve_href) for e in XmlDocument.parse(text).find_all("buildType")]


def parse_builds(text: str, resolve_href: HrefResolver = _identity) -> List[Build]:
    """Parse a ``/app/rest/builds`` payload."""
    return [_build(e, resolve_href) for e in XmlDocument.parse(text).find_all("build")]


def parse_build(text: str, resolve_href: HrefResolver = _identity) -> Build:
    """Parse a single ``/app/rest/builds/<id>`` payload."""
    root = XmlDocument.parse(text).root
    if root.tag != "build":
        raise ParseError(f"Expected a <build> document, got <{root.tag}>", element=root.tag)
    return _build(root, resolve_href)
