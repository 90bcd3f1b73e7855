"""Custom exceptions for the TeamCity REST client."""

from typing import List, Optional


class TeamCityError(Exception):
    """Base exception for TeamCity client errors."""

    def __init__(self, message: str, error_code: str = None, details: dict = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}


class ConfigurationError(TeamCityError):
    """Exception raised for configuration errors."""

    def __init__(self, message: str, config_key: str = None):
        super().__init__(
            message,
            error_code="CONFIGURATION_ERROR",
            details={"config_key": config_key}
        )
        self.config_key = config_key


class NotFound(TeamCityError):
    """Exception raised when a project lookup matches nothing."""

    def __init__(self, message: str, spec: str = None):
        super().__init__(
            message,
            error_code="NOT_FOUND",
            details={"spec": spec}
        )
        self.spec = spec


class FilterMismatch(TeamCityError):
    """Exception raised when include/exclude tokens matched no build type."""

    def __init__(
        self,
        message: str,
        include: Optional[List[str]] = None,
        exclude: Optional[List[str]] = None,
    ):
        include = list(include or [])
        exclude = list(exclude or [])
        super().__init__(
            message,
            error_code="FILTER_MISMATCH",
            details={"include": include, "exclude": exclude}
        )
        self.include = include
        self.exclude = exclude

    @property
    def unmatched(self) -> List[str]:
        """All leftover tokens, include leftovers first."""
        return self.include + self.exclude


class UnsupportedOption(TeamCityError):
    """Exception raised for unknown filter keys."""

    def __init__(self, message: str, options: Optional[List[str]] = None):
        options = list(options or [])
        super().__init__(
            message,
            error_code="UNSUPPORTED_OPTION",
            details={"options": options}
        )
        self.options = options


class AuthenticationRequired(TeamCityError):
    """Exception raised when the server answers with an HTML page instead of XML."""

    def __init__(self, message: str, url: str = None):
        super().__init__(
            message,
            error_code="AUTHENTICATION_REQUIRED",
            details={"url": url}
        )
        self.url = url


class ParseError(TeamCityError):
    """Exception raised for malformed or incomplete XML payloads."""

    def __init__(self, message: str, element: str = None, attribute: str = None):
        super().__init__(
            message,
            error_code="PARSE_ERROR",
            details={"element": element, "attribute": attribute}
        )
        self.element = element
        self.attribute = attribute


class TransportError(TeamCityError):
    """Exception raised when the HTTP request itself fails."""

    def __init__(self, message: str, status_code: int = None, url: str = None):
        super().__init__(
            message,
            error_code="TRANSPORT_ERROR",
            details={"status_code": status_code, "url": url}
        )
        self.status_code = status_code
        self.url = url
