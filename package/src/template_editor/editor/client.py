"""
Interview Admin API Client

Thin requests-based client for the template and keyword endpoints.
Callers decide what a non-success status means; transport failures are
raised as NetworkError.
"""

from typing import Any, Dict, Optional

import requests

from template_editor.editor.config import EditorConfig
from template_editor.editor.exceptions import NetworkError
from template_editor.editor.logging_config import get_logger

logger = get_logger("client")

ADMIN_PREFIX = "/api/admin"


def error_message(response: requests.Response, default: str) -> str:
    """Extract the human-readable error from a failed response."""
    try:
        body = response.json()
    except ValueError:
        return default

    if isinstance(body, dict):
        message = body.get("error") or body.get("message")
        if isinstance(message, str) and message.strip():
            return message.strip()
    return default


class TemplateApiClient:
    """Client for /api/admin/templates endpoints."""

    def __init__(
        self,
        api_url: str,
        api_token: Optional[str] = None,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None
    ):
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"Content-Type": "application/json"})
        if api_token:
            self.session.headers.update({"Authorization": f"Bearer {api_token}"})

    @classmethod
    def from_config(cls, config: EditorConfig) -> "TemplateApiClient":
        return cls(config.api_url, api_token=config.api_token, timeout=config.timeout)

    def close(self):
        self.session.close()

    def __enter__(self) -> "TemplateApiClient":
        return self

    def __exit__(self, *exc_info):
        self.close()

    def request(
        self,
        method: str,
        path: str,
        payload: Optional[Dict[str, Any]] = None
    ) -> requests.Response:
        """Send one request. Non-success statuses are returned, not raised."""
        url = f"{self.api_url}{ADMIN_PREFIX}{path}"
        logger.debug("%s %s", method.upper(), url)
        try:
            response = self.session.request(
                method.upper(),
                url,
                json=payload,
                timeout=self.timeout
            )
        except requests.Timeout as e:
            raise NetworkError(
                f"Request to {url} timed out after {self.timeout:g}s",
                endpoint=url,
                details=str(e)
            ) from e
        except requests.RequestException as e:
            raise NetworkError(
                f"Cannot connect to {self.api_url}",
                endpoint=url,
                details=str(e)
            ) from e

        logger.debug("%s %s -> %d", method.upper(), url, response.status_code)
        return response

    def list_templates(self) -> requests.Response:
        return self.request("GET", "/templates")

    def get_template(self, template_id: str) -> requests.Response:
        return self.request("GET", f"/templates/{template_id}")

    def get_template_keywords(self, template_id: str) -> requests.Response:
        return self.request("GET", f"/templates/{template_id}/keywords")

    def update_template(self, template_id: str, payload: Dict[str, Any]) -> requests.Response:
        """PUT title, description and the full question list."""
        return self.request("PUT", f"/templates/{template_id}", payload)

    def replace_keywords(self, template_id: str, payload: Dict[str, Any]) -> requests.Response:
        """POST the full keyword set; the backend replaces what it had."""
        return self.request("POST", f"/templates/{template_id}/keywords", payload)
