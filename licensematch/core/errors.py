from __future__ import annotations


class LicenseMatchError(Exception):
    """Base class for errors raised by licensematch."""


class UsageError(LicenseMatchError, RuntimeError):
    """The API was driven out of order, e.g. a verdict was requested before parsing completed."""


class InvalidPatternError(LicenseMatchError, ValueError):
    def __init__(self, pattern: str, reason: str) -> None:
        super().__init__(f"Invalid variable rule pattern {pattern!r}: {reason}")
        self.pattern = pattern
        self.reason = reason


class TemplateFormatError(LicenseMatchError, ValueError):
    """An event file or config file could not be understood."""
