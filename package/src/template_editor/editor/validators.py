"""
Template Editor Validators

Field-level input validation for the editing form.
"""

from typing import Any, Tuple

from template_editor.editor.models import (
    KEYWORD_CATEGORIES,
    KEYWORD_WEIGHTS,
    TIME_LIMITS,
    normalize_keyword,
)


def validate_title(title: str) -> Tuple[bool, str]:
    """Validate a template title.

    Args:
        title: The title as typed

    Returns:
        Tuple of (is_valid, message)
    """
    if not (title or "").strip():
        return False, "title required"
    return True, "Valid title"


def validate_time_limit(value: Any) -> Tuple[bool, str]:
    """Validate a question time limit (seconds)."""
    try:
        seconds = int(value)
    except (TypeError, ValueError):
        return False, f"Time limit must be a number of seconds, got '{value}'"

    if seconds not in TIME_LIMITS:
        allowed = ", ".join(str(t) for t in TIME_LIMITS)
        return False, f"Time limit must be one of: {allowed}"

    return True, "Valid time limit"


def validate_weight(value: Any) -> Tuple[bool, str]:
    """Validate a keyword weight."""
    try:
        weight = int(value)
    except (TypeError, ValueError):
        return False, f"Weight must be a number, got '{value}'"

    if isinstance(value, float) and not value.is_integer():
        return False, f"Weight must be a whole number, got '{value}'"

    if weight not in KEYWORD_WEIGHTS:
        allowed = ", ".join(str(w) for w in KEYWORD_WEIGHTS)
        return False, f"Weight must be one of: {allowed}"

    return True, "Valid weight"


def validate_category(value: str) -> Tuple[bool, str]:
    """Validate a keyword category."""
    if value not in KEYWORD_CATEGORIES:
        return False, f"Category must be one of: {', '.join(KEYWORD_CATEGORIES)}"
    return True, "Valid category"


def validate_keyword_text(value: str) -> Tuple[bool, str]:
    """Validate keyword text after normalization."""
    if not normalize_keyword(value):
        return False, "Keyword cannot be empty"
    return True, "Valid keyword"


def validate_api_url(url: str) -> Tuple[bool, str]:
    """Validate the backend base URL."""
    if not url:
        return False, "API URL is required"

    if not url.startswith(("http://", "https://")):
        return False, "API URL should start with http:// or https://"

    return True, "Valid API URL"
