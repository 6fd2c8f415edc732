"""Shared fixtures for template editor tests."""

from unittest.mock import MagicMock

import pytest


def make_response(status_code=200, body=None, json_error=False):
    """Build a fake requests.Response."""
    response = MagicMock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 400
    if json_error:
        response.json.side_effect = ValueError("No JSON object could be decoded")
    else:
        response.json.return_value = {} if body is None else body
    return response


TEMPLATE_BODY = {
    "id": "42",
    "title": "Backend Engineer Screen",
    "description": "First-round screen",
    "questions": [
        {"id": "q-2", "question_text": "Describe a hard bug you fixed.", "time_limit": 120, "question_order": 2},
        {"id": "q-1", "question_text": "Tell us about yourself.", "time_limit": 90, "question_order": 1},
    ],
}

KEYWORDS_BODY = {
    "keywords": [
        {"id": "k-1", "keyword": "Python", "category": "technical", "weight": 2},
        {"id": "k-2", "keyword": "teamwork", "category": "soft_skills", "weight": 1},
        {"id": "k-3", "keyword": "docker", "category": "technical", "weight": 1},
    ],
    "total": 3,
}


@pytest.fixture
def fake_client():
    """A TemplateApiClient stand-in serving one template with 2 questions and 3 keywords."""
    from template_editor.editor.client import TemplateApiClient

    client = MagicMock(spec=TemplateApiClient)
    client.get_template.return_value = make_response(200, TEMPLATE_BODY)
    client.get_template_keywords.return_value = make_response(200, KEYWORDS_BODY)
    client.update_template.return_value = make_response(200, {"message": "Template updated successfully"})
    client.replace_keywords.return_value = make_response(200, {"message": "Keywords updated successfully"})
    client.list_templates.return_value = make_response(200, [
        {"id": "42", "title": "Backend Engineer Screen", "description": "First-round screen"},
    ])
    return client


@pytest.fixture
def store():
    """A store holding one persisted question and no keywords."""
    from template_editor.editor.models import PersistedId, Question, TemplateState
    from template_editor.editor.store import TemplateStore

    state = TemplateState(
        id="42",
        title="Backend Engineer Screen",
        description="",
        questions=[Question(id=PersistedId("q-1"), text="Tell us about yourself.", time_limit=90, order=1)],
    )
    return TemplateStore(state)
