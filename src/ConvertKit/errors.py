# ============================================================================
# ConvertKit - Error Classes
#
# Purpose: Custom exception hierarchy for the package
# Inputs: Error messages and context
# Outputs: Structured exceptions
# Dependencies: None
# Usage: raise ParseError("to_int: parsing 'abc': invalid syntax")
#
# Changelog:
#   2026-03-02: Initial error classes
#   2026-03-09: Added ConfigurationError for YAML config loading
# ============================================================================

from typing import Optional


class ConvertKitError(Exception):
    """Base exception for all ConvertKit errors."""

    def __init__(self, message: str, details: Optional[str] = None):
        """
        Initialize error.

        Args:
            message: Error message
            details: Optional detailed error information
        """
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        """String representation."""
        if self.details:
            return f"{self.message}\nDetails: {self.details}"
        return self.message


class ParseError(ConvertKitError):
    """Raised when text does not match a numeric or boolean literal grammar."""

    pass


class EncodingError(ConvertKitError):
    """Raised when text is not valid Base64 or hexadecimal."""

    pass


class SerializationError(ConvertKitError):
    """Raised when a value cannot be serialized, or text cannot be deserialized into a target."""

    pass


class ConfigurationError(ConvertKitError):
    """Raised when configuration is invalid."""

    pass
