"""Exceptions raised by ViralClip."""


class ViralClipError(Exception):
    """Base class for exceptions in this package."""


class ConfigurationError(ViralClipError):
    """Missing credentials, unreadable config file or unknown provider."""


class ValidationError(ViralClipError):
    """User input rejected before any request is made."""


class ServiceError(ViralClipError):
    """The AI service could not be reached, rejected the request or returned garbage."""


class FormatError(ServiceError):
    """The response decoded as JSON but does not have the clip list shape."""
