"""
Remote Loader

Fetches a template and its keywords once when the editing screen opens.
"""

from typing import Any, Dict, List

from pydantic import ValidationError as SchemaError

from template_editor.editor.client import TemplateApiClient, error_message
from template_editor.editor.exceptions import LoadError, NetworkError
from template_editor.editor.logging_config import get_logger
from template_editor.editor.models import Keyword, TemplateState
from template_editor.editor.schemas import keywords_from_wire, template_from_wire

logger = get_logger("loader")

LOAD_FAILED = "Failed to load template data"


class RemoteLoader:
    """Builds the initial TemplateState from the backend."""

    def __init__(self, client: TemplateApiClient):
        self.client = client

    def load(self, template_id: str) -> TemplateState:
        """Load template details, questions and keywords.

        Keyword failures leave the keyword list empty; only the template
        fetch can fail the load.

        Raises:
            LoadError: If the template itself cannot be fetched or parsed
        """
        template_id = str(template_id)
        try:
            response = self.client.get_template(template_id)
        except NetworkError as e:
            logger.error("Loading template %s failed: %s", template_id, e.message)
            raise LoadError(LOAD_FAILED, template_id=template_id, details=e.message) from e

        if not response.ok:
            reason = error_message(response, f"HTTP {response.status_code}")
            logger.error("Loading template %s failed: %s", template_id, reason)
            raise LoadError(
                LOAD_FAILED,
                template_id=template_id,
                status_code=response.status_code,
                details=reason
            )

        try:
            state = template_from_wire(template_id, response.json())
        except (ValueError, SchemaError) as e:
            logger.error("Template %s returned an unreadable body: %s", template_id, e)
            raise LoadError(LOAD_FAILED, template_id=template_id, details=str(e)) from e

        state.keywords = self.load_keywords(template_id)
        logger.info(
            "Loaded template %s: %d questions, %d keywords",
            template_id, len(state.questions), len(state.keywords)
        )
        return state

    def load_keywords(self, template_id: str) -> List[Keyword]:
        """Fetch keywords; any failure yields an empty list."""
        try:
            response = self.client.get_template_keywords(template_id)
        except NetworkError as e:
            logger.warning("Keywords for template %s unavailable: %s", template_id, e.message)
            return []

        if not response.ok:
            logger.warning(
                "Keywords for template %s unavailable: HTTP %d",
                template_id, response.status_code
            )
            return []

        try:
            return keywords_from_wire(response.json())
        except (ValueError, SchemaError) as e:
            logger.warning("Keywords for template %s unreadable: %s", template_id, e)
            return []

    def list_templates(self) -> List[Dict[str, Any]]:
        """Fetch the template dashboard list."""
        try:
            response = self.client.list_templates()
        except NetworkError as e:
            raise LoadError("Failed to load templates", details=e.message) from e

        if not response.ok:
            raise LoadError(
                "Failed to load templates",
                status_code=response.status_code,
                details=error_message(response, f"HTTP {response.status_code}")
            )

        try:
            data = response.json()
        except ValueError as e:
            raise LoadError("Failed to load templates", details=str(e)) from e

        if isinstance(data, dict):
            data = data.get("templates") or []
        return [t for t in data if isinstance(t, dict)]
