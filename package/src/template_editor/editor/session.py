"""
Template Edit Session

Drives the interactive editing screen: loads the template once, routes user
actions to the list editors and runs the save.
"""

import threading
from typing import Callable, Dict, List, Optional

from rich.console import Console

from template_editor.editor.client import TemplateApiClient
from template_editor.editor.exceptions import (
    LoadError,
    SaveError,
    SaveInProgressError,
    ValidationError,
)
from template_editor.editor.loader import RemoteLoader
from template_editor.editor.logging_config import get_logger
from template_editor.editor.models import (
    CATEGORY_ICONS,
    KEYWORD_CATEGORIES,
    KEYWORD_WEIGHTS,
    TIME_LIMIT_LABELS,
    TIME_LIMITS,
    Keyword,
    TemplateState,
)
from template_editor.editor.save import SaveCoordinator, SaveOutcome
from template_editor.editor.store import TemplateStore
from template_editor.editor.ui import EditorUI, format_category

logger = get_logger("session")

LEAVE_PROMPT = "Are you sure you want to leave? Any unsaved changes will be lost."

COMMON_ACTIONS = {
    "title": "Edit title",
    "description": "Edit description",
    "tab": "Switch tab",
    "save": "Save changes",
    "back": "Back to dashboard",
}

TAB_ACTIONS = {
    "questions": {
        "add-question": "Add question",
        "edit-question": "Edit question",
        "remove-question": "Remove question",
    },
    "keywords": {
        "add-keyword": "Add keyword",
        "edit-keyword": "Edit keyword",
        "remove-keyword": "Remove keyword",
    },
}


class EditSession:
    """One editing session for one template. Discarded when the user leaves."""

    def __init__(
        self,
        client: TemplateApiClient,
        template_id: str,
        console: Optional[Console] = None,
        on_navigate: Optional[Callable[[], None]] = None,
        redirect_delay: Optional[float] = None
    ):
        self.console = console or Console()
        self.ui = EditorUI(self.console)
        self.client = client
        self.loader = RemoteLoader(client)
        self.store = TemplateStore(template_id=str(template_id))

        coordinator_kwargs = {}
        if redirect_delay is not None:
            coordinator_kwargs["redirect_delay"] = redirect_delay
        self.coordinator = SaveCoordinator(
            client, self.store, on_navigate=self._navigate, **coordinator_kwargs
        )

        self.on_navigate = on_navigate
        self.navigated = threading.Event()
        self.active_tab = "questions"
        self.error = ""
        self.warning = ""
        self.success = ""
        self.loaded = False
        self.load_error: Optional[LoadError] = None
        self._snapshot: Optional[TemplateState] = None

        self._handlers: Dict[str, Callable[[], None]] = {
            "title": self.edit_title,
            "description": self.edit_description,
            "tab": self.switch_tab,
            "save": self.save,
            "add-question": self.add_question,
            "edit-question": self.edit_question,
            "remove-question": self.remove_question,
            "add-keyword": self.add_keyword,
            "edit-keyword": self.edit_keyword,
            "remove-keyword": self.remove_keyword,
        }

    # ----------------------------
    # Lifecycle
    # ----------------------------

    def load(self) -> bool:
        """Fetch the template. On failure the error stays on screen; no retry."""
        try:
            state = self.ui.show_progress(
                "Loading template...",
                lambda: self.loader.load(self.store.template_id)
            )
        except LoadError as e:
            self.load_error = e
            self.error = e.message
            return False

        self.store.load(state)
        self._snapshot = state.snapshot()
        self.loaded = True
        return True

    def run(self) -> bool:
        """Run the screen until the user leaves or a save navigates away.

        Returns:
            True if the template was saved
        """
        self.ui.clear()
        self.ui.print_header()

        if not self.load():
            self.ui.print_error(self.error)
            return False

        saved = False
        while True:
            self.render()
            action = self.prompt_action()

            if action == "back":
                if self.go_back():
                    break
                continue

            self._handlers[action]()

            if action == "save" and self.success:
                saved = True
                self.render_messages()
                self.navigated.wait(self.coordinator.redirect_delay + 1)
                break

        self.close()
        return saved

    def close(self):
        """Discard the session; a pending post-save navigation is superseded."""
        self.coordinator.cancel_navigation()

    def _navigate(self):
        self.navigated.set()
        if self.on_navigate:
            self.on_navigate()

    @property
    def is_dirty(self) -> bool:
        """True if the form differs from what was loaded."""
        if self._snapshot is None:
            return False
        return self.store.state != self._snapshot

    def go_back(self) -> bool:
        """Leave the screen, confirming first when there are unsaved changes."""
        if self.is_dirty and not self.ui.prompt_confirm(LEAVE_PROMPT, default=False):
            return False
        self.close()
        return True

    # ----------------------------
    # Rendering
    # ----------------------------

    def render(self):
        self.console.print()
        self.ui.show_template_details(self.store.title, self.store.description)
        self.console.print()
        self.ui.show_tabs(self.active_tab, len(self.store.questions), len(self.store.keywords))

        if self.active_tab == "questions":
            self.ui.show_questions(self.store.questions.items, TIME_LIMIT_LABELS)
        else:
            self.ui.show_keywords(self.store.keywords.group_by_category(), CATEGORY_ICONS)

        self.render_messages()

    def render_messages(self):
        if self.error:
            self.ui.print_error(self.error)
        if self.warning:
            self.ui.print_warning(self.warning)
        if self.success:
            self.ui.print_success(self.success)

    def prompt_action(self) -> str:
        actions = dict(TAB_ACTIONS[self.active_tab])
        actions.update(COMMON_ACTIONS)
        if self.coordinator.is_saving:
            actions["save"] = "Saving..."
        return self.ui.prompt_choice(
            "What would you like to do?",
            choices=list(actions),
            labels=actions
        )

    # ----------------------------
    # Actions
    # ----------------------------

    def edit_title(self):
        self.store.title = self.ui.prompt_text("Template title", default=self.store.title)

    def edit_description(self):
        self.store.description = self.ui.prompt_text(
            "Description (optional)", default=self.store.description, clearable=True
        )

    def switch_tab(self):
        self.active_tab = "keywords" if self.active_tab == "questions" else "questions"

    def add_question(self):
        question = self.store.questions.add()
        text = self.ui.prompt_text(f"Question {question.order}")
        self.store.questions.update_field(question.id, "text", text)
        self._prompt_time_limit(question.id, question.time_limit)

    def edit_question(self):
        idx = self.ui.prompt_index("Question number", len(self.store.questions))
        if idx is None:
            return
        question = self.store.questions.items[idx]
        text = self.ui.prompt_text(f"Question {question.order}", default=question.text, clearable=True)
        self.store.questions.update_field(question.id, "text", text)
        self._prompt_time_limit(question.id, question.time_limit)

    def remove_question(self):
        if len(self.store.questions) <= 1:
            self.ui.print_warning("A template needs at least one question")
            return
        idx = self.ui.prompt_index("Question number to remove", len(self.store.questions))
        if idx is None:
            return
        self.store.questions.remove(self.store.questions.items[idx].id)

    def _prompt_time_limit(self, entry_id, current: int):
        choices = [str(t) for t in TIME_LIMITS]
        labels = {str(t): label for t, label in TIME_LIMIT_LABELS.items()}
        selection = self.ui.prompt_choice(
            "Time limit", choices=choices, default=str(current), labels=labels
        )
        self.store.questions.update_field(entry_id, "time_limit", int(selection))

    def add_keyword(self):
        draft = self.store.keywords.draft
        draft.text = self.ui.prompt_text("Keyword", default=draft.text)
        draft.category = self._prompt_category(draft.category)
        draft.weight = self._prompt_weight(draft.weight)

        if self.store.keywords.add() is None:
            self.ui.print_warning("Keyword cannot be empty")

    def edit_keyword(self):
        keywords = self._keywords_in_display_order()
        idx = self.ui.prompt_index("Keyword number", len(keywords))
        if idx is None:
            return
        keyword = keywords[idx]
        try:
            text = self.ui.prompt_text("Keyword", default=keyword.keyword)
            self.store.keywords.update_field(keyword.id, "keyword", text)
        except ValidationError as e:
            self.ui.print_exception(e)
            return
        self.store.keywords.update_field(keyword.id, "category", self._prompt_category(keyword.category))
        self.store.keywords.update_field(keyword.id, "weight", self._prompt_weight(keyword.weight))

    def remove_keyword(self):
        keywords = self._keywords_in_display_order()
        idx = self.ui.prompt_index("Keyword number to remove", len(keywords))
        if idx is None:
            return
        self.store.keywords.remove(keywords[idx].id)

    def _keywords_in_display_order(self) -> List[Keyword]:
        groups = self.store.keywords.group_by_category()
        return [k for group in groups.values() for k in group]

    def _prompt_category(self, current: str) -> str:
        labels = {c: f"{CATEGORY_ICONS[c]} {format_category(c).title()}" for c in KEYWORD_CATEGORIES}
        return self.ui.prompt_choice(
            "Category", choices=list(KEYWORD_CATEGORIES), default=current, labels=labels
        )

    def _prompt_weight(self, current: int) -> int:
        choices = [str(w) for w in KEYWORD_WEIGHTS]
        labels = {str(w): f"{w}x" for w in KEYWORD_WEIGHTS}
        selection = self.ui.prompt_choice(
            "Weight", choices=choices, default=str(current), labels=labels
        )
        return int(selection)

    def save(self) -> Optional[SaveOutcome]:
        """Run the save and set the on-screen messages from its outcome."""
        self.error = ""
        self.warning = ""
        self.success = ""

        try:
            outcome = self.ui.show_progress("Saving...", self.coordinator.save)
        except (ValidationError, SaveError, SaveInProgressError) as e:
            self.error = e.message
            return None

        if outcome.partial:
            self.warning = outcome.keywords.warning.message
        self.success = outcome.message
        self._snapshot = self.store.state.snapshot()
        return outcome
