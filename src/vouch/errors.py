"""Vouch exception hierarchy.

Shared across the session, rule specs, accessors and message rendering
so every module raises and catches the same types.
"""


class VouchError(Exception):
    """Base for all vouch-specific errors."""


class ConfigurationError(VouchError):
    """Raised when the caller hands the validator something malformed.

    Covers rule specs without a chain, non-string override messages,
    non-objects where an object is required and untagged dispatcher
    input. These are programmer errors and are never recovered.
    """
