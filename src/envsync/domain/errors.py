"""
Custom exception hierarchy for envsync.

This module defines the exceptions raised by the env file model and the
flows built on top of it:
- Consistent error codes for diagnostics
- Process exit codes for the command line front end
- Structured details for debugging

Exception Categories:
- Input errors: ParseError
- Environment errors: OutputPathError, ConfigurationError

Operating system errors (missing files, permissions) are never wrapped:
they propagate as ``OSError`` so callers see them uninterpreted.

Usage:
    raise ParseError("unterminated double-quoted value", line_number=3, line='KEY="abc')
    raise OutputPathError(".env is a directory", details={"path": ".env"})
"""

from typing import Any, Dict, Optional


class EnvSyncException(Exception):
    """
    Base exception for all envsync errors.

    All custom exceptions inherit from this class, providing:
    - error_code: Machine-readable error identifier
    - exit_code: Suggested process exit status for the CLI
    - details: Optional structured data for debugging

    Attributes:
        message: Human-readable error description
        error_code: Machine-readable error code (e.g., "PARSE_ERROR")
        exit_code: Process exit status to use (default: 1)
        details: Optional dictionary with additional error context
    """

    error_code: str = "INTERNAL_ERROR"
    exit_code: int = 1

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        error_code: Optional[str] = None,
        exit_code: Optional[int] = None,
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        if error_code:
            self.error_code = error_code
        if exit_code:
            self.exit_code = exit_code

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for structured logging."""
        result: Dict[str, Any] = {
            "error_code": self.error_code,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Input Errors
# =============================================================================


class ParseError(EnvSyncException):
    """
    Raised when an env file line cannot be parsed.

    Exit Code: 65 (EX_DATAERR)

    Parsing is all-or-nothing: the first malformed line aborts the whole
    document.

    Examples:
        - Key starting with a digit or containing a space
        - Line without an ``=`` that is neither blank nor a comment
        - Unterminated single- or double-quoted value
        - Characters after a closing quote that are not a comment
    """

    error_code = "PARSE_ERROR"
    exit_code = 65

    def __init__(
        self,
        message: str,
        line_number: Optional[int] = None,
        line: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.reason = message
        self.line_number = line_number
        self.line = line

        merged: Dict[str, Any] = dict(details or {})
        if line_number is not None:
            merged["line_number"] = line_number
            message = f"line {line_number}: {message}"
        if line is not None:
            merged["line"] = line

        super().__init__(message, details=merged)


# =============================================================================
# Environment Errors
# =============================================================================


class OutputPathError(EnvSyncException):
    """
    Raised when the output path cannot receive an env file.

    Exit Code: 73 (EX_CANTCREAT)

    Examples:
        - Output path is an existing directory
    """

    error_code = "OUTPUT_PATH_ERROR"
    exit_code = 73


class ConfigurationError(EnvSyncException):
    """
    Raised when configuration is invalid or contradictory.

    Exit Code: 78 (EX_CONFIG)

    Examples:
        - Empty placeholder for template generation
        - Unreadable settings from the environment
    """

    error_code = "CONFIGURATION_ERROR"
    exit_code = 78
