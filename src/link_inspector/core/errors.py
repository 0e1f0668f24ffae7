"""Custom exceptions for link_inspector."""


class LinkInspectorError(Exception):
    """Base exception for application-level errors."""


class ConfigError(LinkInspectorError):
    """Raised when configuration cannot be loaded or validated."""


class CandidateError(LinkInspectorError):
    """Raised when a collaborator hands over malformed candidate data."""


class ContractError(LinkInspectorError):
    """Raised for malformed or unknown request payloads."""


class ExportError(LinkInspectorError):
    """Raised when results cannot be rendered in the requested format."""
