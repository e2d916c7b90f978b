"""Custom exceptions for deep-dive processing."""


class DeepDiveError(Exception):
    """Base exception for deep-dive processing errors."""


class DueDateNotFoundError(DeepDiveError):
    """Issue body has no Timing section or the section is empty."""


class DueDateParseError(DeepDiveError):
    """Timing section text is not a recognisable date."""
