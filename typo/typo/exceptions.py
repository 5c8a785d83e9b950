"""
Exception types for typo.
"""


class TypoError(Exception):
    """Base class for all typo errors."""


class ConfigError(TypoError):
    """Raised when configuration values are invalid."""


class LogFormatError(TypoError):
    """Raised when a persisted execution log record cannot be decoded."""

    def __init__(self, message: str, record: object = None) -> None:
        super().__init__(message)
        self.record = record


class CommandError(TypoError):
    """Raised by slash commands for invalid arguments."""
