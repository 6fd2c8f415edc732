"""
Template Editor Exceptions

Custom exception types for user-visible errors and remediation suggestions.
"""

from typing import Optional


class TemplateEditorError(Exception):
    """Base exception for all template editor errors."""

    def __init__(
        self,
        message: str,
        remediation: Optional[str] = None,
        details: Optional[str] = None
    ):
        """Initialize the error.

        Args:
            message: Human-readable error message
            remediation: Suggested fix for the user
            details: Technical details for debugging
        """
        super().__init__(message)
        self.message = message
        self.remediation = remediation
        self.details = details

    def __str__(self) -> str:
        parts = [self.message]
        if self.details:
            parts.append(f"Details: {self.details}")
        if self.remediation:
            parts.append(f"To fix: {self.remediation}")
        return "\n".join(parts)


class ConfigError(TemplateEditorError):
    """Configuration-related errors."""

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        remediation: Optional[str] = None,
        details: Optional[str] = None
    ):
        self.config_key = config_key
        if not remediation and config_key:
            remediation = (
                f"Set '{config_key}' in config.yaml, .env or pass it on the command line"
            )
        super().__init__(message, remediation, details)


class NetworkError(TemplateEditorError):
    """Transport failures talking to the backend (timeouts, refused connections)."""

    def __init__(
        self,
        message: str,
        endpoint: Optional[str] = None,
        remediation: Optional[str] = None,
        details: Optional[str] = None
    ):
        self.endpoint = endpoint
        if not remediation:
            remediation = "Check that the backend is reachable and try again."
        super().__init__(message, remediation, details)


class ValidationError(TemplateEditorError):
    """Input validation errors. Blocks a save until the user corrects the form."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        expected_format: Optional[str] = None,
        remediation: Optional[str] = None,
        details: Optional[str] = None
    ):
        self.field = field
        self.expected_format = expected_format
        if not remediation and field and expected_format:
            remediation = f"The {field} should be {expected_format}"
        super().__init__(message, remediation, details)


class LoadError(TemplateEditorError):
    """The initial template fetch failed."""

    def __init__(
        self,
        message: str = "Failed to load template data",
        template_id: Optional[str] = None,
        status_code: Optional[int] = None,
        remediation: Optional[str] = None,
        details: Optional[str] = None
    ):
        self.template_id = template_id
        self.status_code = status_code
        if not remediation and template_id:
            remediation = f"Check that template '{template_id}' exists, then reopen the editor"
        super().__init__(message, remediation, details)


class SaveError(TemplateEditorError):
    """The template update was rejected or could not be sent. Nothing was applied."""

    def __init__(
        self,
        message: str = "Failed to update template",
        status_code: Optional[int] = None,
        remediation: Optional[str] = None,
        details: Optional[str] = None
    ):
        self.status_code = status_code
        super().__init__(message, remediation, details)


class SaveInProgressError(TemplateEditorError):
    """A save was requested while another one is still in flight."""

    def __init__(self, message: str = "A save is already in progress"):
        super().__init__(message)


class KeywordSaveWarning(TemplateEditorError):
    """Keywords failed to save after the template itself was saved.

    Never raised by the save sequence; attached to the outcome instead.
    """

    def __init__(
        self,
        message: str = "Template updated but keywords failed to save",
        status_code: Optional[int] = None,
        details: Optional[str] = None
    ):
        self.status_code = status_code
        super().__init__(
            message,
            remediation="Save again to retry the keyword update",
            details=details
        )


# Error code mapping for CLI exit codes
ERROR_CODES = {
    ConfigError: 10,
    NetworkError: 13,
    ValidationError: 14,
    LoadError: 15,
    SaveError: 16,
    SaveInProgressError: 17,
    TemplateEditorError: 1,
}


def get_error_code(error: Exception) -> int:
    """Get the exit code for an error type."""
    for error_type, code in ERROR_CODES.items():
        if isinstance(error, error_type):
            return code
    return 1
