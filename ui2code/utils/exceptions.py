"""Custom exceptions for the analyze service.

Each exception carries the HTTP status it maps to at the route boundary.
"""


class ConverterError(Exception):
    """Base exception for conversion errors."""

    status_code = 500

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ConfigurationError(ConverterError):
    """Server is missing a required credential."""

    status_code = 500


class InvalidRequestError(ConverterError):
    """Unknown mode or malformed request body."""

    status_code = 400


class SourceFetchError(ConverterError):
    """Every proxy candidate failed to return the page source."""

    status_code = 502


class GenerationError(ConverterError):
    """The generation service reported an error of its own."""

    status_code = 500
