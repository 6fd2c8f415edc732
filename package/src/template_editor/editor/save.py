"""
Save Coordinator

Validates the form, serializes it and saves it in two strictly sequential
phases: the template with its questions, then the full keyword set.

Phase flow:
    IDLE -> VALIDATING -> SAVING_TEMPLATE -> SAVING_KEYWORDS -> DONE

A validation or template failure ends in FAILED and raises. A keyword
failure still ends in DONE; the outcome carries a KeywordSaveWarning.
"""

import threading
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional

from template_editor.editor.client import TemplateApiClient, error_message
from template_editor.editor.config import REDIRECT_DELAY_SECONDS
from template_editor.editor.exceptions import (
    KeywordSaveWarning,
    NetworkError,
    SaveError,
    SaveInProgressError,
    ValidationError,
)
from template_editor.editor.logging_config import get_logger
from template_editor.editor.models import Question, as_entry_id
from template_editor.editor.schemas import (
    KeywordPayload,
    KeywordReplacePayload,
    QuestionPayload,
    TemplateUpdatePayload,
)
from template_editor.editor.store import TemplateStore
from template_editor.editor.validators import validate_title

logger = get_logger("save")

SUCCESS_MESSAGE = "Template updated successfully!"
TEMPLATE_SAVE_FAILED = "Failed to update template"


class SavePhase(str, Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    SAVING_TEMPLATE = "saving_template"
    SAVING_KEYWORDS = "saving_keywords"
    DONE = "done"
    FAILED = "failed"


@dataclass
class TemplateSaveResult:
    """Result of the template + questions update."""
    question_count: int
    status_code: Optional[int] = None


@dataclass
class KeywordSaveResult:
    """Result of the keyword replace. ``attempted`` is False when there were no keywords."""
    attempted: bool
    keyword_count: int = 0
    status_code: Optional[int] = None
    warning: Optional[KeywordSaveWarning] = None

    @property
    def ok(self) -> bool:
        return self.warning is None


@dataclass
class SaveOutcome:
    """Combined result of both phases. Only produced when the template saved."""
    template: TemplateSaveResult
    keywords: KeywordSaveResult

    @property
    def partial(self) -> bool:
        return not self.keywords.ok

    @property
    def message(self) -> str:
        return SUCCESS_MESSAGE


def filter_questions(questions: List[Question]) -> List[Question]:
    """Questions that will be saved: those with non-blank text."""
    return [q for q in questions if q.text.strip()]


class SaveCoordinator:
    """Runs the two-phase save for one editing session."""

    def __init__(
        self,
        client: TemplateApiClient,
        store: TemplateStore,
        on_navigate: Optional[Callable[[], None]] = None,
        redirect_delay: float = REDIRECT_DELAY_SECONDS,
        timer_factory: Callable[[float, Callable[[], None]], threading.Timer] = threading.Timer
    ):
        self.client = client
        self.store = store
        self.on_navigate = on_navigate
        self.redirect_delay = redirect_delay
        self._timer_factory = timer_factory
        self._timer: Optional[threading.Timer] = None
        self.phase = SavePhase.IDLE
        self.is_saving = False

    def validate(self):
        """Check the form before any network call.

        Raises:
            ValidationError: If the title is blank or every question is blank
        """
        self.phase = SavePhase.VALIDATING

        is_valid, message = validate_title(self.store.title)
        if not is_valid:
            raise ValidationError(message, field="title")

        if not filter_questions(self.store.questions.items):
            raise ValidationError("at least one question required", field="questions")

    def build_template_payload(self) -> dict:
        """Template body: blank questions dropped, order rewritten 1..M, pending ids omitted."""
        kept = filter_questions(self.store.questions.items)
        dropped = len(self.store.questions) - len(kept)
        if dropped:
            logger.debug("Dropping %d blank question(s) from the save", dropped)

        payload = TemplateUpdatePayload(
            title=self.store.title.strip(),
            description=self.store.description.strip(),
            questions=[
                QuestionPayload(
                    id=None if question.id.is_pending else str(question.id),
                    text=question.text.strip(),
                    time_limit=question.time_limit,
                    question_order=position,
                )
                for position, question in enumerate(kept, 1)
            ],
        )
        return payload.to_wire()

    def build_keyword_payload(self) -> dict:
        """Keyword body: every keyword, without ids."""
        payload = KeywordReplacePayload(keywords=[
            KeywordPayload(keyword=k.keyword, category=k.category, weight=k.weight)
            for k in self.store.keywords.items
        ])
        return payload.to_wire()

    def save(self) -> SaveOutcome:
        """Validate and save both phases.

        Returns:
            SaveOutcome; check ``partial`` for a keyword warning

        Raises:
            SaveInProgressError: If a save is already running
            ValidationError: If the form is invalid (no request is sent)
            SaveError: If the template update failed (keywords are not sent)
        """
        if self.is_saving:
            raise SaveInProgressError()

        self.is_saving = True
        try:
            try:
                self.validate()
                template_result = self._save_template()
            except (ValidationError, SaveError):
                self.phase = SavePhase.FAILED
                raise

            keyword_result = self._save_keywords()
            self.phase = SavePhase.DONE
        finally:
            self.is_saving = False

        outcome = SaveOutcome(template=template_result, keywords=keyword_result)
        logger.info(
            "Saved template %s (%d questions, %d keywords%s)",
            self.store.template_id,
            template_result.question_count,
            keyword_result.keyword_count,
            ", keywords failed" if outcome.partial else ""
        )
        self.schedule_navigation()
        return outcome

    def _save_template(self) -> TemplateSaveResult:
        self.phase = SavePhase.SAVING_TEMPLATE
        payload = self.build_template_payload()
        template_id = self.store.template_id

        try:
            response = self.client.update_template(template_id, payload)
        except NetworkError as e:
            logger.error("Template %s update failed: %s", template_id, e.message)
            raise SaveError(TEMPLATE_SAVE_FAILED, details=e.message) from e

        if not response.ok:
            message = error_message(response, TEMPLATE_SAVE_FAILED)
            logger.error("Template %s update rejected (HTTP %d): %s", template_id, response.status_code, message)
            raise SaveError(message, status_code=response.status_code)

        self._adopt_server_ids(response)
        return TemplateSaveResult(
            question_count=len(payload["questions"]),
            status_code=response.status_code
        )

    def _adopt_server_ids(self, response):
        """Swap pending question ids for the ids the backend returned, if any."""
        try:
            body = response.json()
        except ValueError:
            return
        if not isinstance(body, dict):
            return

        returned = body.get("questions")
        kept = filter_questions(self.store.questions.items)
        if not isinstance(returned, list) or len(returned) != len(kept):
            return

        for question, record in zip(kept, returned):
            server_id = record.get("id") if isinstance(record, dict) else None
            if question.id.is_pending and server_id is not None:
                question.id = as_entry_id(server_id)

    def _save_keywords(self) -> KeywordSaveResult:
        if not self.store.keywords.items:
            return KeywordSaveResult(attempted=False)

        self.phase = SavePhase.SAVING_KEYWORDS
        payload = self.build_keyword_payload()
        count = len(payload["keywords"])
        template_id = self.store.template_id

        try:
            response = self.client.replace_keywords(template_id, payload)
        except NetworkError as e:
            logger.warning("Template updated but keywords failed to save: %s", e.message)
            return KeywordSaveResult(
                attempted=True,
                keyword_count=count,
                warning=KeywordSaveWarning(details=e.message)
            )

        if not response.ok:
            reason = error_message(response, f"HTTP {response.status_code}")
            logger.warning("Template updated but keywords failed to save: %s", reason)
            return KeywordSaveResult(
                attempted=True,
                keyword_count=count,
                status_code=response.status_code,
                warning=KeywordSaveWarning(status_code=response.status_code, details=reason)
            )

        return KeywordSaveResult(attempted=True, keyword_count=count, status_code=response.status_code)

    def schedule_navigation(self):
        """Leave the screen after a short delay so the success message is seen."""
        if self.on_navigate is None:
            return
        self.cancel_navigation()
        self._timer = self._timer_factory(self.redirect_delay, self.on_navigate)
        self._timer.daemon = True
        self._timer.start()

    def cancel_navigation(self):
        """Drop a pending navigation, e.g. when the user already left."""
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
